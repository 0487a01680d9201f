"""
Unit tests for the context gate.

Each default rule is exercised at its boundaries, then the combination
properties: removal is a set union, order does not matter and adding a
rule can only shrink the result.
"""

import datetime

import pytest
from pydantic import ValidationError

from app.asf.gating import (
    DEFAULT_GATING_RULES,
    PROTOCOL_CATALOG,
    GatingRule,
    get_available_protocols,
    triggered_rules,
)
from app.asf.thresholds import DEFAULT_THRESHOLDS
from app.schemas.context import Context, RecentTestResult
from app.schemas.labels import Grade
from app.schemas.state_vector import StateVector

AS_OF = datetime.datetime(2026, 3, 1, 9, 0, tzinfo=datetime.timezone.utc)


# ======================================================================
# Helpers
# ======================================================================


def _available(stress: float = 5.0, **context) -> list[str]:
    return get_available_protocols(StateVector(stress=stress), Context(**context), AS_OF)


def _fired(stress: float = 5.0, **context) -> list[str]:
    return [r.name for r in triggered_rules(StateVector(stress=stress), Context(**context), AS_OF)]


def _recent(grade: Grade, minutes_ago: float, tz=datetime.timezone.utc) -> RecentTestResult:
    timestamp = (AS_OF - datetime.timedelta(minutes=minutes_ago)).replace(tzinfo=tz)
    return RecentTestResult(grade=grade, type="reaction", timestamp=timestamp)


# ======================================================================
# Individual rules
# ======================================================================


class TestNoContext:

    def test_full_catalog(self):
        assert _available() == list(PROTOCOL_CATALOG)
        assert _fired() == []


class TestEventProximity:

    def test_imminent_event(self):
        available = _available(time_until_event=10)
        assert available == ["box_breathing", "super_ventilation", "visualization"]
        assert _fired(time_until_event=10) == ["imminent_event"]

    @pytest.mark.parametrize("minutes", [20, 30, 59.9])
    def test_pre_event_window(self, minutes):
        available = _available(time_until_event=minutes)
        assert "memory" not in available
        assert "reaction" in available
        assert "nsdr_lite" in available
        assert _fired(time_until_event=minutes) == ["pre_event_window"]

    def test_distant_event(self):
        assert _available(time_until_event=60) == list(PROTOCOL_CATALOG)


class TestPostFailureCooldown:

    def test_recent_failure(self):
        available = _available(recent_test_result=_recent(Grade.F, 3))
        for protocol in ("reaction", "memory", "focus"):
            assert protocol not in available
        assert "nsdr_lite" in available

    def test_cooldown_elapsed(self):
        assert _available(recent_test_result=_recent(Grade.F, 10)) == list(PROTOCOL_CATALOG)

    def test_recent_pass(self):
        assert _available(recent_test_result=_recent(Grade.A, 1)) == list(PROTOCOL_CATALOG)

    def test_naive_timestamp_is_utc(self):
        recent = _recent(Grade.F, 2, tz=None)
        assert _fired(recent_test_result=recent) == ["post_failure_cooldown"]


class TestSleepDeficit:

    def test_short_sleep(self):
        available = _available(sleep_hours=4)
        assert "memory" not in available
        assert "focus" not in available
        assert "reaction" in available

    def test_five_hours_is_enough(self):
        assert _fired(sleep_hours=5) == []


class TestCriticalStress:

    def test_critical(self):
        available = _available(stress=9.5)
        assert available == ["box_breathing", "nsdr_lite", "visualization"]

    def test_nine_is_not_critical(self):
        assert _fired(stress=9) == []


# ======================================================================
# Combination properties
# ======================================================================


class TestCombination:

    def test_union_of_removals(self):
        available = _available(stress=9.5, time_until_event=5, sleep_hours=3)
        assert available == ["box_breathing", "visualization"]
        assert _fired(stress=9.5, time_until_event=5, sleep_hours=3) == [
            "imminent_event", "sleep_deficit", "critical_stress",
        ]

    def test_order_independent(self):
        state = StateVector(stress=9.5)
        context = Context(time_until_event=30, sleep_hours=4)
        forward = get_available_protocols(state, context, AS_OF)
        backward = get_available_protocols(state, context, AS_OF, rules=tuple(reversed(DEFAULT_GATING_RULES)))
        assert forward == backward

    def test_more_rules_never_add_protocols(self):
        state = StateVector(stress=6)
        context = Context(time_until_event=45)
        extra = GatingRule(name="no_visualization", predicate=lambda g: True, removes=frozenset({"visualization"}))
        base = set(get_available_protocols(state, context, AS_OF))
        stricter = set(get_available_protocols(state, context, AS_OF, rules=DEFAULT_GATING_RULES + (extra,)))
        assert stricter <= base
        assert "visualization" not in stricter

    def test_empty_rule_table(self):
        context = Context(time_until_event=1, sleep_hours=1)
        assert get_available_protocols(StateVector(stress=10), context, AS_OF, rules=()) == list(PROTOCOL_CATALOG)

    def test_custom_catalog(self):
        available = get_available_protocols(StateVector(), Context(time_until_event=10), AS_OF,
                                            catalog=("box_breathing", "memory"))
        assert available == ["box_breathing"]

    def test_threshold_override(self):
        cfg = DEFAULT_THRESHOLDS.model_copy(update={"stress_critical": 8.0})
        fired = triggered_rules(StateVector(stress=8.5), Context(), AS_OF, config=cfg)
        assert [r.name for r in fired] == ["critical_stress"]

    def test_fatigue_level_is_ignored(self):
        assert _available(fatigue_level=10) == list(PROTOCOL_CATALOG)


# ======================================================================
# Tightening the context
# ======================================================================


def _assert_shrinking(steps: list[list[str]]):
    for looser, tighter in zip(steps, steps[1:]):
        assert set(tighter) <= set(looser)


class TestTighteningContext:
    """A stricter context never brings back a removed protocol."""

    @pytest.mark.parametrize("stress,sleep_hours", [(5.0, None), (5.0, 4.0), (9.5, 8.0)])
    def test_event_approaching(self, stress, sleep_hours):
        steps = [
            _available(stress=stress, sleep_hours=sleep_hours, time_until_event=minutes)
            for minutes in [120, 60, 59.9, 30, 20, 19.9, 10, 0]
        ]
        _assert_shrinking(steps)

    @pytest.mark.parametrize("stress,time_until_event", [(5.0, None), (5.0, 30.0), (9.5, 10.0)])
    def test_sleep_shrinking(self, stress, time_until_event):
        steps = [
            _available(stress=stress, time_until_event=time_until_event, sleep_hours=hours)
            for hours in [8, 6, 5.1, 5, 4.9, 3, 0]
        ]
        _assert_shrinking(steps)

    @pytest.mark.parametrize("sleep_hours,time_until_event", [(None, None), (4.0, None), (8.0, 30.0)])
    def test_stress_rising(self, sleep_hours, time_until_event):
        steps = [
            _available(stress=stress, sleep_hours=sleep_hours, time_until_event=time_until_event)
            for stress in [0, 5, 8.9, 9, 9.1, 10]
        ]
        _assert_shrinking(steps)


# ======================================================================
# Rule records
# ======================================================================


class TestGatingRule:

    def test_rules_are_frozen(self):
        rule = DEFAULT_GATING_RULES[0]
        with pytest.raises(ValidationError):
            rule.name = "renamed"

    def test_predicate_must_be_callable(self):
        with pytest.raises(ValidationError):
            GatingRule(name="broken", predicate="not callable", removes=frozenset({"memory"}))
