"""
Mind-state scorer: subjective state + cognitive tests → 0-100 score.

Model
-----
The score starts at 100 and accumulates penalties:

1. **Stress** (non-linear).  Up to 6 the cost is linear,
   ``(stress - 1) × 3``.  Above 6 it is quadratic,
   ``(stress - 4)² × 1.5`` (stress 8 ⇒ 24 points): high stress hits
   the CNS disproportionately.
2. **Mood**.  Low mood adds ``(5 - mood) × 3``.  High mood can only
   *offset* existing penalty (floored at 0) and never turns it into a bonus.
3. **Focus quality** (interaction with stress).  ``scattered`` costs 15
   under stress > 5, 8 otherwise; ``tunnel`` costs 10 only when stress
   > 6 (anxiety-driven); ``flow`` removes 5 (floored at 0).
4. **Reaction-time banding** vs the user's baseline: > +100 ms severe
   (+25), > +50 ms moderate (+10), < -20 ms primed (-5).
5. **Impulse control** below 50 % adds 10.

``score = clamp(round(100 - penalty), 1, 100)``.

Protocol selection
------------------
An ordered, first-match decision list:

1. stress > 7, or scattered focus under stress > 5 → ``box_breathing``
   (down-regulate)
2. reaction time > baseline + 50 ms → ``super_ventilation`` (activate)
3. memory span < 5 → ``nsdr_lite`` (clear cognitive buffers)
4. score < 60 → ``visualization`` (general preparation)
5. otherwise no protocol.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from app.asf.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from app.schemas.domain_score import DomainScoreResult, MindState
from app.schemas.labels import FocusQuality
from app.schemas.state_vector import Baseline

logger = logging.getLogger(__name__)

PROTOCOL_REGULATION = "box_breathing"
PROTOCOL_ACTIVATION = "super_ventilation"
PROTOCOL_BUFFER_CLEARING = "nsdr_lite"
PROTOCOL_GENERAL_PREP = "visualization"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (``round`` is banker's)."""
    return int(math.floor(value + 0.5))


# ======================================================================
# Penalty components
# ======================================================================


def _stress_penalty(stress: float, cfg: ThresholdConfig) -> float:
    if stress > cfg.stress_quadratic:
        return (stress - 4) ** 2 * 1.5
    return (stress - 1) * 3


def _apply_mood(penalty: float, mood: float, cfg: ThresholdConfig) -> float:
    """Return the penalty after the mood adjustment."""
    if mood < cfg.mood_neutral:
        return penalty + (cfg.mood_neutral - mood) * cfg.mood_coefficient
    return max(0.0, penalty - (mood - cfg.mood_neutral) * cfg.mood_coefficient)


def _apply_focus(penalty: float, focus: FocusQuality, stress: float, cfg: ThresholdConfig) -> float:
    """Return the penalty after the focus-quality modifier."""
    if focus == FocusQuality.SCATTERED:
        if stress > cfg.stress_scattered:
            return penalty + cfg.scattered_high_stress_penalty
        return penalty + cfg.scattered_low_stress_penalty
    if focus == FocusQuality.TUNNEL:
        if stress > cfg.stress_quadratic:
            return penalty + cfg.tunnel_penalty
        return penalty
    if focus == FocusQuality.FLOW:
        return max(0.0, penalty - cfg.flow_bonus)
    return penalty


def _apply_latency(
    penalty: float,
    delta: float,
    reasons: list[str],
    cfg: ThresholdConfig,
) -> float:
    """Band the reaction-time delta (ms vs baseline) and log a reason."""
    if delta > cfg.rt_severe_delta:
        reasons.append(f"Severe CNS latency (+{round_half_up(delta)}ms).")
        return penalty + cfg.rt_severe_penalty
    if delta > cfg.rt_moderate_delta:
        reasons.append(f"Neural fatigue confirmed (>{cfg.rt_moderate_delta:g}ms delay).")
        return penalty + cfg.rt_moderate_penalty
    if delta < cfg.rt_primed_delta:
        reasons.append(f"CNS primed ({round_half_up(delta)}ms vs baseline).")
        return max(0.0, penalty - cfg.rt_primed_bonus)
    return penalty


# ======================================================================
# Protocol selection
# ======================================================================


def _select_protocol(
    state: MindState,
    score: int,
    baseline_reaction: float,
    reasons: list[str],
    cfg: ThresholdConfig,
) -> Optional[str]:
    """First-match decision list; later rules are not evaluated."""
    stress = state.stress
    scores = state.cognitive_scores

    if stress > cfg.stress_regulation or (
        state.focus_quality == FocusQuality.SCATTERED and stress > cfg.stress_scattered
    ):
        reasons.append("Excessive internal load (stress), down-regulate first.")
        return PROTOCOL_REGULATION

    if scores.reaction_time and scores.reaction_time > baseline_reaction + cfg.rt_moderate_delta:
        return PROTOCOL_ACTIVATION

    if scores.memory_span is not None and scores.memory_span < cfg.memory_span_floor:
        return PROTOCOL_BUFFER_CLEARING

    if score < cfg.general_prep_score:
        return PROTOCOL_GENERAL_PREP

    return None


# ======================================================================
# Main entry point
# ======================================================================


def evaluate_mind_state(
    state: MindState,
    baseline: Baseline,
    config: Optional[ThresholdConfig] = None,
) -> DomainScoreResult:
    """Score the mind domain.

    Args:
        state: Self-reported state and latest cognitive test metrics.
        baseline: User baseline (only ``reaction_time`` is used; 0 falls
            back to the configured default of 250 ms).
        config: Optional threshold override.

    Returns:
        :class:`DomainScoreResult` with score, penalty breakdown, reasons
        and the selected protocol (or ``None``).
    """
    cfg = config or DEFAULT_THRESHOLDS
    baseline_reaction = baseline.reaction_time or cfg.default_reaction_baseline

    reasons: list[str] = []
    penalties: dict[str, float] = {}

    penalty = _stress_penalty(state.stress, cfg)
    penalties["stress"] = penalty

    before = penalty
    penalty = _apply_mood(penalty, state.mood, cfg)
    penalties["mood"] = penalty - before

    before = penalty
    penalty = _apply_focus(penalty, state.focus_quality, state.stress, cfg)
    penalties["focus"] = penalty - before

    reaction_time = state.cognitive_scores.reaction_time
    if reaction_time:
        before = penalty
        penalty = _apply_latency(penalty, reaction_time - baseline_reaction, reasons, cfg)
        penalties["latency"] = penalty - before

    impulse = state.cognitive_scores.impulse_control
    if impulse is not None and impulse < cfg.impulse_control_floor:
        penalty += cfg.impulse_control_penalty
        penalties["impulse_control"] = cfg.impulse_control_penalty
        reasons.append("Executive function (inhibition) low.")

    score = max(1, min(100, round_half_up(100 - penalty)))
    protocol = _select_protocol(state, score, baseline_reaction, reasons, cfg)

    logger.debug("mind score=%s penalty=%.2f protocol=%s", score, penalty, protocol)

    return DomainScoreResult(
        score=score,
        penalty=round(penalty, 2),
        penalties={k: round(v, 2) for k, v in penalties.items()},
        reasons=reasons,
        recommended_protocol=protocol,
    )
