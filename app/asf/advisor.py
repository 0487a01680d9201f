"""
Session advisor: runs the whole engine once for one snapshot.

Architecture (three layers, same shape as every evaluation):
    1. **Scorers** (leaves): mind, sleep, journal, profile weights
    2. **Fusion** (orchestrator): state vector, readiness, weighted
       domain fusion
    3. **Gate** (consequence): which protocols may be offered, and
       whether the mind scorer's candidate survives

Nothing flows back from the gate into the scorers.  The advisor does
not persist anything: the returned state vector is the caller's to
store.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from app.asf.clock import utc_now
from app.asf.fusion import calculate_readiness, evaluate_state_vector, fuse_domain_scores
from app.asf.gating import get_available_protocols, triggered_rules
from app.asf.journal import analyze_journal
from app.asf.lexicon import JournalLexicon
from app.asf.mind import evaluate_mind_state
from app.asf.sleep import evaluate_sleep
from app.asf.thresholds import ThresholdConfig
from app.asf.weights import calculate_weights
from app.schemas.advice import AdviceRequest, AdviceResponse
from app.schemas.domain_score import SleepEvaluation
from app.schemas.state_vector import FusionInputs

logger = logging.getLogger(__name__)


def _domain_scores(
    mind_score: float,
    sleep: Optional[SleepEvaluation],
    request: AdviceRequest,
) -> dict[str, Optional[float]]:
    """Collect the 0-100 domain scores that enter the weighted fusion."""
    has_hrv = sleep is not None and request.sleep.hrv is not None and request.baseline.hrv_baseline is not None
    return {
        "mind": mind_score,
        "sleep": sleep.sleep_factor if sleep else None,
        "hrv": min(100.0, sleep.hrv_factor) if has_hrv else None,
        "recovery": request.recovery_score,
        "fuel": request.fuel_score,
    }


def compute_session_advice(
    request: AdviceRequest,
    as_of: Optional[datetime.datetime] = None,
    config: Optional[ThresholdConfig] = None,
    lexicon: Optional[JournalLexicon] = None,
) -> AdviceResponse:
    """Evaluate one snapshot end to end.

    Args:
        request: Current state vector, baseline, profile, context and the
            new observations.
        as_of: Reference time (defaults to now, UTC).
        config: Optional threshold override for every scorer.
        lexicon: Optional journal lexicon override.

    Returns:
        :class:`AdviceResponse` with the new state vector, both readiness
        views, the per-domain results and the gated protocol list.
    """
    now = as_of or utc_now()

    # Layer 1: scorers.
    mind = evaluate_mind_state(request.mind, request.baseline, config)
    sleep = evaluate_sleep(request.sleep, request.baseline, config) if request.sleep else None
    journal = analyze_journal(request.journal_text, lexicon) if request.journal_text else None
    weights = calculate_weights(request.profile)

    # Layer 2: fusion.
    inputs = FusionInputs(
        stress_slider=request.mind.stress,
        mood_slider=request.mind.mood,
        cognitive_load_slider=request.cognitive_load,
        journal_analysis=journal,
        last_test=request.last_test,
        hrv=request.sleep.hrv if request.sleep else None,
        sleep_hours=request.sleep.duration if request.sleep else None,
    )
    vector = evaluate_state_vector(request.current, inputs, request.baseline)
    readiness = calculate_readiness(vector)
    fused = fuse_domain_scores(_domain_scores(mind.score, sleep, request), weights)

    # Layer 3: gate.  Last night's sleep fills in a context without hours.
    context = request.context
    if context.sleep_hours is None and request.sleep is not None:
        context = context.model_copy(update={"sleep_hours": request.sleep.duration})

    available = get_available_protocols(vector, context, now, config=config)
    fired = [rule.name for rule in triggered_rules(vector, context, now, config=config)]

    recommended = mind.recommended_protocol
    withheld = None
    if recommended is not None and recommended not in available:
        withheld, recommended = recommended, None

    logger.info(
        "advice readiness=%d fused=%.1f protocol=%s withheld=%s rules=%s",
        readiness, fused.score, recommended, withheld, ",".join(fired) or "-",
    )

    return AdviceResponse(
        state_vector=vector,
        readiness=readiness,
        mind=mind,
        sleep=sleep,
        journal=journal,
        fused=fused,
        available_protocols=available,
        triggered_rules=fired,
        recommended_protocol=recommended,
        withheld_protocol=withheld,
        evaluated_at=now,
    )
