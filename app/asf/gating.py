"""
Context gate: which protocols may be offered right now.

The safety policy is an ordered table of :class:`GatingRule` records,
each a ``(name, predicate, removes)`` triple.  Every rule is evaluated
(no short-circuit) and the result is the catalog minus the union of the
removal sets of the rules that fired.  Set difference is monotone, so
rule order never changes the output; the order only fixes the order of
``triggered_rules`` in audit output.

Default rules
-------------
=====================  ==========================  ===========================================
rule                   fires when                  removes
=====================  ==========================  ===========================================
imminent_event         event in < 20 min           reaction, memory, focus, nsdr_lite
pre_event_window       event in 20-60 min          memory
post_failure_cooldown  grade F test < 5 min ago    reaction, memory, focus
sleep_deficit          slept < 5 h                 memory, focus
critical_stress        stress > 9                  reaction, memory, focus, super_ventilation
=====================  ==========================  ===========================================
"""

from __future__ import annotations

import datetime
import logging
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.asf.clock import as_utc, utc_now
from app.asf.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from app.schemas.context import Context
from app.schemas.labels import Grade
from app.schemas.state_vector import StateVector

logger = logging.getLogger(__name__)

# Fixed enumerated catalog.  Descriptions and contraindication metadata
# are owned by the content layer; the gate only filters ids.
PROTOCOL_CATALOG: tuple[str, ...] = (
    "box_breathing",
    "super_ventilation",
    "nsdr_lite",
    "visualization",
    "reaction",
    "memory",
    "focus",
)


class GateInput(BaseModel):
    """Everything a rule predicate may look at."""

    model_config = ConfigDict(frozen=True)

    state: StateVector
    context: Context
    as_of: datetime.datetime
    thresholds: ThresholdConfig


class GatingRule(BaseModel):
    """One removal rule of the safety policy."""

    model_config = ConfigDict(frozen=True)

    name: str
    predicate: Callable[[GateInput], bool]
    removes: frozenset[str] = Field(..., description="Protocol ids removed when the predicate fires")


# ======================================================================
# Predicates
# ======================================================================


def _imminent_event(g: GateInput) -> bool:
    t = g.context.time_until_event
    return t is not None and t < g.thresholds.imminent_event_minutes


def _pre_event_window(g: GateInput) -> bool:
    t = g.context.time_until_event
    return t is not None and g.thresholds.imminent_event_minutes <= t < g.thresholds.pre_event_minutes


def _minutes_since(timestamp: datetime.datetime, as_of: datetime.datetime) -> float:
    return (as_utc(as_of) - as_utc(timestamp)).total_seconds() / 60.0


def _post_failure_cooldown(g: GateInput) -> bool:
    recent = g.context.recent_test_result
    if recent is None or recent.grade != Grade.F:
        return False
    return _minutes_since(recent.timestamp, g.as_of) < g.thresholds.failure_cooldown_minutes


def _sleep_deficit(g: GateInput) -> bool:
    hours = g.context.sleep_hours
    return hours is not None and hours < g.thresholds.sleep_deficit_hours


def _critical_stress(g: GateInput) -> bool:
    return g.state.stress > g.thresholds.stress_critical


DEFAULT_GATING_RULES: tuple[GatingRule, ...] = (
    GatingRule(name="imminent_event", predicate=_imminent_event,
               removes=frozenset({"reaction", "memory", "focus", "nsdr_lite"})),
    GatingRule(name="pre_event_window", predicate=_pre_event_window, removes=frozenset({"memory"})),
    GatingRule(name="post_failure_cooldown", predicate=_post_failure_cooldown,
               removes=frozenset({"reaction", "memory", "focus"})),
    GatingRule(name="sleep_deficit", predicate=_sleep_deficit, removes=frozenset({"memory", "focus"})),
    GatingRule(name="critical_stress", predicate=_critical_stress,
               removes=frozenset({"reaction", "memory", "focus", "super_ventilation"})),
)


# ======================================================================
# Entry points
# ======================================================================


def triggered_rules(
    state: StateVector,
    context: Context,
    as_of: Optional[datetime.datetime] = None,
    rules: Optional[tuple[GatingRule, ...]] = None,
    config: Optional[ThresholdConfig] = None,
) -> list[GatingRule]:
    """Return the rules whose predicate fires, in table order."""
    gate_input = GateInput(
        state=state,
        context=context,
        as_of=as_of or utc_now(),
        thresholds=config or DEFAULT_THRESHOLDS,
    )
    return [rule for rule in (DEFAULT_GATING_RULES if rules is None else rules) if rule.predicate(gate_input)]


def get_available_protocols(
    state: StateVector,
    context: Context,
    as_of: Optional[datetime.datetime] = None,
    rules: Optional[tuple[GatingRule, ...]] = None,
    catalog: Optional[tuple[str, ...]] = None,
    config: Optional[ThresholdConfig] = None,
) -> list[str]:
    """Filter the protocol catalog for the current state and context.

    Args:
        state: Current state vector (only ``stress`` is read by default).
        context: Temporal / safety context.
        as_of: Reference time for the post-failure cooldown (defaults to
            now, UTC).
        rules: Optional rule table override.
        catalog: Optional catalog override.
        config: Optional threshold override.

    Returns:
        Remaining protocol ids, in catalog order.
    """
    fired = triggered_rules(state, context, as_of, rules, config)
    removed: set[str] = set()
    for rule in fired:
        removed |= rule.removes

    if fired:
        logger.debug("gating rules fired: %s", ", ".join(r.name for r in fired))

    return [p for p in (PROTOCOL_CATALOG if catalog is None else catalog) if p not in removed]
