"""
Fusion orchestrator: raw observations → updated state vector → readiness.

State vector update
-------------------
``evaluate_state_vector`` never mutates its inputs; it returns a new
:class:`~app.schemas.state_vector.StateVector`.

**Autonomic balance** (-10 sympathetic .. +10 parasympathetic).  HRV is
the primary source when both a reading and a baseline exist::

    z = (hrv - hrv_baseline) / 10
    balance = 0.7 × (z × 3) + 0.3 × ((5 - stress) / 5 × 5)

otherwise a stress-only proxy is used: ``(5 - stress) / 5 × 8``.
Cognitive load above 8 then pushes 2 points sympathetic, mood above 8
buffers 1 point parasympathetic, and the result is clamped.

**Emotional valence** = ``(mood - 5) × 2``, plus ``0.5 × defusion -
0.5 × catastrophizing`` when a journal analysis is supplied; clamped.

**Resilience state**: mood > 7 and stress < 4 rising, stress > 8
declining, else stable.

Readiness
---------
``calculate_readiness``: base 80, ``+1.5 × autonomic_balance``, mood
(+5 above 7, -10 below 4), stress (-15 above 7, +5 below 3), cognitive
load (-10 above 8), clamped to [10, 100].

Weighted domain fusion
----------------------
``fuse_domain_scores`` combines 0-100 domain scores with the profile
weights.  Domains without a score are skipped and the remaining weights
are renormalised, so a missing wearable never drags readiness to zero.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.asf.mind import round_half_up
from app.asf.trajectory import grade_score
from app.asf.thresholds import DEFAULT_THRESHOLDS
from app.schemas.advice import FusedReadiness
from app.schemas.labels import ResilienceState
from app.schemas.profile import WEIGHT_DOMAINS, ReadinessWeights
from app.schemas.state_vector import Baseline, FusionInputs, StateVector

logger = logging.getLogger(__name__)

# Cognitive test type → trajectory metric used for grading.
TEST_TYPE_METRICS: dict[str, str] = {
    "reaction": "reaction_time",
    "memory": "memory_span",
    "focus": "focus_density",
    "gonogo": "impulse_control",
}

# Fused readiness status labels: (label, low inclusive, high exclusive).
_FUSED_THRESHOLDS: list[tuple[str, float, float]] = [
    ("compromised", 0.0, 50.0),
    ("partial", 50.0, 75.0),
    ("ready", 75.0, float("inf")),
]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# ======================================================================
# State vector
# ======================================================================


def _autonomic_balance(vector: dict, inputs: FusionInputs, baseline: Baseline) -> float:
    stress = vector["stress"]
    if inputs.hrv and baseline.hrv_baseline:
        z = (inputs.hrv - baseline.hrv_baseline) / 10
        balance = (z * 3 * 0.7) + ((5 - stress) / 5 * 5 * 0.3)
    else:
        balance = (5 - stress) / 5 * 8

    if vector["cognitive_load"] > 8:
        balance -= 2
    if vector["mood"] > 8:
        balance += 1

    return _clamp(balance, -10.0, 10.0)


def _resilience_state(stress: float, mood: float) -> ResilienceState:
    if mood > 7 and stress < 4:
        return ResilienceState.RISING
    if stress > 8:
        return ResilienceState.DECLINING
    return ResilienceState.STABLE


def evaluate_state_vector(
    current: StateVector,
    inputs: FusionInputs,
    baseline: Baseline,
) -> StateVector:
    """Fold new observations into a copy of *current*.

    Args:
        current: Last known state vector (not modified).
        inputs: New sliders, HRV, journal analysis and/or test result.
        baseline: User baseline.

    Returns:
        A new :class:`StateVector` with ``state_age_minutes`` reset to 0.
    """
    vector = current.model_dump()

    if inputs.stress_slider is not None:
        vector["stress"] = inputs.stress_slider
    if inputs.mood_slider is not None:
        vector["mood"] = inputs.mood_slider
    if inputs.cognitive_load_slider is not None:
        vector["cognitive_load"] = inputs.cognitive_load_slider

    vector["autonomic_balance"] = _autonomic_balance(vector, inputs, baseline)

    valence = (vector["mood"] - 5) * 2
    journal = inputs.journal_analysis
    if journal is not None:
        valence += (journal.psychological_flexibility.cognitive_defusion * 0.5
                    - journal.risk_signals.catastrophizing * 0.5)
        vector["journal_confidence"] = journal.analysis_confidence
        vector["last_journal_sentiment"] = journal.sentiment
    vector["emotional_valence"] = _clamp(valence, -10.0, 10.0)

    test = inputs.last_test
    if test is not None:
        vector["last_test_type"] = test.type
        if test.type == "reaction":
            # Positive when faster than baseline.
            reference = baseline.reaction_time or DEFAULT_THRESHOLDS.default_reaction_baseline
            vector["last_test_delta"] = reference - test.score
        else:
            vector["last_test_delta"] = 0.0
        vector["last_test_grade"] = grade_score(test.score, TEST_TYPE_METRICS.get(test.type, test.type), baseline)

    vector["resilience_state"] = _resilience_state(vector["stress"], vector["mood"])
    vector["state_age_minutes"] = 0.0

    updated = StateVector(**vector)
    logger.debug(
        "state vector autonomic=%.2f valence=%.2f resilience=%s",
        updated.autonomic_balance, updated.emotional_valence, updated.resilience_state.value,
    )
    return updated


# ======================================================================
# Readiness
# ======================================================================


def calculate_readiness(vector: StateVector) -> int:
    """Single 10-100 composite readiness from a state vector."""
    score = 80.0
    score += vector.autonomic_balance * 1.5

    if vector.mood > 7:
        score += 5
    elif vector.mood < 4:
        score -= 10

    if vector.stress > 7:
        score -= 15
    elif vector.stress < 3:
        score += 5

    if vector.cognitive_load > 8:
        score -= 10

    return max(10, min(100, round_half_up(score)))


# ======================================================================
# Weighted domain fusion
# ======================================================================


def _label_fused(value: float) -> str:
    for label, low, high in _FUSED_THRESHOLDS:
        if low <= value < high:
            return label
    return "ready"


def fuse_domain_scores(
    domain_scores: dict[str, Optional[float]],
    weights: ReadinessWeights,
) -> FusedReadiness:
    """Weighted mean of the available 0-100 domain scores.

    Args:
        domain_scores: ``{domain: score}`` for any of sleep, hrv,
            recovery, mind, fuel.  ``None`` or absent means no data.
        weights: Profile weights (see :func:`app.asf.weights.calculate_weights`).

    Returns:
        :class:`FusedReadiness`; status ``no_data`` when nothing is scored.
    """
    available = {
        d: _clamp(float(domain_scores[d]), 0.0, 100.0)
        for d in WEIGHT_DOMAINS
        if domain_scores.get(d) is not None
    }
    raw = weights.as_dict()
    total_weight = sum(raw[d] for d in available)

    if not available or total_weight <= 0:
        return FusedReadiness(score=0.0, status="no_data", bottleneck_domain=None,
                              domain_scores={}, weights=weights)

    effective = ReadinessWeights(**{d: (raw[d] / total_weight if d in available else 0.0) for d in WEIGHT_DOMAINS})
    fused = sum(available[d] * effective.as_dict()[d] for d in available)
    bottleneck = min(available, key=available.get)  # type: ignore[arg-type]

    return FusedReadiness(
        score=round(fused, 1),
        status=_label_fused(fused),
        bottleneck_domain=bottleneck,
        domain_scores=available,
        weights=effective,
    )
