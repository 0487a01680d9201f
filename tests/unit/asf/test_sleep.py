"""
Unit tests for the sleep scorer.

Tests duration vs need, efficiency, the piecewise HRV factor, acute
overload detection, resting HR tiers and bedtime arithmetic.
"""

import datetime

import pytest

from app.asf.sleep import DEFAULT_BEDTIME, HYGIENE_ACTION, compute_bedtime, compute_hrv_factor, evaluate_sleep
from app.schemas.domain_score import SleepState
from app.schemas.state_vector import Baseline


# ======================================================================
# Helpers
# ======================================================================


def _make_baseline(**overrides) -> Baseline:
    defaults = {"resting_hr": 60.0, "hrv_baseline": 100.0, "sleep_need": 8.0}
    defaults.update(overrides)
    return Baseline(**defaults)


# ======================================================================
# compute_hrv_factor
# ======================================================================


class TestHrvFactor:
    """Piecewise curve, continuous at both knees."""

    @pytest.mark.parametrize("ratio,expected", [
        (0.4, 0.0),
        (0.5, 0.0),
        (0.7, 40.0),
        (0.85, 70.0),
        (1.0, 81.25),
        (1.05, 85.0),
        (1.25, 95.0),
    ])
    def test_curve(self, ratio, expected):
        assert compute_hrv_factor(ratio) == pytest.approx(expected)

    def test_monotone(self):
        ratios = [0.3 + i * 0.05 for i in range(20)]
        factors = [compute_hrv_factor(r) for r in ratios]
        assert factors == sorted(factors)


# ======================================================================
# compute_bedtime
# ======================================================================


class TestBedtime:

    @pytest.mark.parametrize("wake,need,expected", [
        (datetime.time(6, 30), 8.0, "22:30"),
        (datetime.time(6, 30), 7.5, "23:00"),
        (datetime.time(5, 0), 8.0, "21:00"),
        (datetime.time(2, 0), 8.0, "18:00"),
        (datetime.time(7, 0), 9.25, "21:45"),
    ])
    def test_wake_minus_need(self, wake, need, expected):
        assert compute_bedtime(wake, need) == expected

    def test_no_wake_time(self):
        assert compute_bedtime(None, 8.0) == DEFAULT_BEDTIME == "22:00"


# ======================================================================
# evaluate_sleep
# ======================================================================


class TestDuration:

    def test_full_night(self):
        result = evaluate_sleep(SleepState(duration=9), _make_baseline())
        assert result.sleep_factor == 100.0
        assert result.penalty == 0.0
        assert result.reasons == []

    def test_mild_shortfall_no_debt(self):
        result = evaluate_sleep(SleepState(duration=6.5), _make_baseline())
        assert result.sleep_factor == pytest.approx(81.25)
        assert result.penalty == 0.0

    def test_critical_debt(self):
        result = evaluate_sleep(SleepState(duration=5), _make_baseline())
        # 62.5 × 0.8
        assert result.sleep_factor == pytest.approx(50.0)
        assert result.penalty == 25.0
        assert "Critical sleep debt. Cognitive risk." in result.reasons


class TestEfficiency:

    def test_fragmented_sleep_sets_hygiene_action(self):
        result = evaluate_sleep(SleepState(duration=8, efficiency=70), _make_baseline())
        assert result.penalty == 15.0
        assert result.hygiene_action == HYGIENE_ACTION
        assert "Sleep architecture fragmented." in result.reasons

    def test_efficient_sleep(self):
        result = evaluate_sleep(SleepState(duration=8, efficiency=80), _make_baseline())
        assert result.hygiene_action is None


class TestHrv:

    def test_no_reading_is_neutral(self):
        result = evaluate_sleep(SleepState(duration=8), _make_baseline())
        assert result.hrv_factor == 70.0
        assert result.is_acute_overload is False

    def test_no_baseline_is_neutral(self):
        result = evaluate_sleep(SleepState(duration=8, hrv=40), _make_baseline(hrv_baseline=None))
        assert result.hrv_factor == 70.0
        assert result.penalty == 0.0

    def test_depressed_without_acute(self):
        result = evaluate_sleep(SleepState(duration=8, hrv=81), _make_baseline())
        assert result.penalty == 20.0
        assert result.is_acute_overload is False
        assert "HRV depressed (sympathetic strain)." in result.reasons

    def test_acute_at_exactly_twenty_percent(self):
        result = evaluate_sleep(SleepState(duration=8, hrv=80), _make_baseline())
        assert result.is_acute_overload is True
        assert result.penalty == 60.0
        assert "Acute systemic overload (HRV -20%)." in result.reasons

    def test_supercompensated(self):
        result = evaluate_sleep(SleepState(duration=8, hrv=125), _make_baseline())
        assert result.hrv_factor == pytest.approx(95.0)
        assert result.penalty == 0.0


class TestRestingHr:

    @pytest.mark.parametrize("rhr,penalty,severe", [
        (60, 0.0, False),
        (65, 0.0, False),
        (66, 5.0, False),
        (70, 5.0, False),
        (71, 15.0, True),
    ])
    def test_tiers(self, rhr, penalty, severe):
        result = evaluate_sleep(SleepState(duration=8, resting_hr=rhr), _make_baseline())
        assert result.rhr_penalty == penalty
        assert result.penalty == penalty
        assert ("Elevated RHR (metabolic stress)." in result.reasons) is severe


class TestScenarios:

    def test_short_fragmented_night_with_hrv_crash(self):
        """4 h of 8 h need, 60 % efficiency, HRV at 70 % of baseline."""
        state = SleepState(duration=4, efficiency=60, hrv=70, wake_time=datetime.time(6, 30))
        result = evaluate_sleep(state, _make_baseline())
        assert result.sleep_factor == pytest.approx(40.0)
        assert result.hrv_factor == pytest.approx(40.0)
        assert result.is_acute_overload is True
        assert result.penalty == pytest.approx(25 + 15 + 20 + 40)
        assert result.reasons == [
            "Critical sleep debt. Cognitive risk.",
            "Sleep architecture fragmented.",
            "HRV depressed (sympathetic strain).",
            "Acute systemic overload (HRV -30%).",
        ]
        assert result.recommended_bedtime == "22:30"

    @pytest.mark.parametrize("duration", [0, 2, 6, 8, 12])
    def test_sleep_factor_in_range(self, duration):
        result = evaluate_sleep(SleepState(duration=duration), _make_baseline())
        assert 0.0 <= result.sleep_factor <= 100.0
