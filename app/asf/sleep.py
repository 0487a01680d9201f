"""
Sleep scorer: last night's sleep + morning HRV / RHR vs baseline.

Outputs two 0-100 factors (duration and HRV), an additive penalty with
reasons, an optional hygiene action and tonight's recommended bedtime.

HRV factor
----------
Piecewise on ``ratio = hrv / hrv_baseline``::

    ratio > 1.05          85 + (ratio - 1.05) × 50        bonus curve
    0.85 <= ratio <= 1.05 70 + (ratio - 0.85) × 75        linear mid-range
    ratio < 0.85          max(0, 70 - (0.85 - ratio) × 200) + 20 penalty

The mid-range meets the low branch at 70 (ratio 0.85) and the bonus
branch at 85 (ratio 1.05), so the curve is continuous.

Acute overload is a separate, unsmoothed trigger: a drop of 20 % or
more against baseline adds 40 penalty and sets ``is_acute_overload``
regardless of the factor above.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from app.asf.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from app.schemas.domain_score import SleepEvaluation, SleepState
from app.schemas.state_vector import Baseline

logger = logging.getLogger(__name__)

HYGIENE_ACTION = "Cool room to 18°C + dim lights 1h before bed"
DEFAULT_BEDTIME = "22:00"


# ======================================================================
# Components
# ======================================================================


def compute_hrv_factor(ratio: float, config: Optional[ThresholdConfig] = None) -> float:
    """Map an HRV / baseline ratio onto the 0-100+ HRV factor."""
    cfg = config or DEFAULT_THRESHOLDS
    if ratio > cfg.hrv_high_ratio:
        return 85 + (ratio - cfg.hrv_high_ratio) * 50
    if ratio < cfg.hrv_low_ratio:
        return max(0.0, 70 - (cfg.hrv_low_ratio - ratio) * 200)
    return 70 + (ratio - cfg.hrv_low_ratio) * 75


def compute_bedtime(wake_time: Optional[datetime.time], sleep_need: float) -> str:
    """Return ``wake_time - sleep_need`` as ``HH:MM``, wrapping past midnight.

    Fractional needs are honoured (7.5 h before 06:30 is 23:00).
    """
    if wake_time is None:
        return DEFAULT_BEDTIME
    wake_minutes = wake_time.hour * 60 + wake_time.minute
    bed_minutes = round(wake_minutes - sleep_need * 60) % (24 * 60)
    return f"{bed_minutes // 60:02d}:{bed_minutes % 60:02d}"


def _rhr_penalty(resting_hr: Optional[float], baseline_rhr: float, cfg: ThresholdConfig) -> tuple[float, bool]:
    """Return ``(penalty, severe)``.  The severe tier replaces the mild one."""
    if resting_hr is None:
        return 0.0, False
    if resting_hr > baseline_rhr + cfg.rhr_severe_delta:
        return cfg.rhr_severe_penalty, True
    if resting_hr > baseline_rhr + cfg.rhr_mild_delta:
        return cfg.rhr_mild_penalty, False
    return 0.0, False


# ======================================================================
# Main entry point
# ======================================================================


def evaluate_sleep(
    state: SleepState,
    baseline: Baseline,
    config: Optional[ThresholdConfig] = None,
) -> SleepEvaluation:
    """Score last night's sleep against the user's baseline.

    Without an HRV reading or an HRV baseline the HRV factor stays at the
    neutral 70 and neither the depressed-HRV nor the acute-overload
    checks run.
    """
    cfg = config or DEFAULT_THRESHOLDS
    penalty = 0.0
    reasons: list[str] = []
    hygiene_action: Optional[str] = None

    # 1. Duration vs need.
    sleep_ratio = state.duration / baseline.sleep_need
    sleep_factor = min(100.0, sleep_ratio * 100)
    if sleep_ratio < cfg.sleep_debt_ratio:
        sleep_factor *= cfg.sleep_debt_multiplier
        penalty += cfg.sleep_debt_penalty
        reasons.append("Critical sleep debt. Cognitive risk.")

    # 2. Efficiency.
    if state.efficiency < cfg.efficiency_floor:
        penalty += cfg.efficiency_penalty
        hygiene_action = HYGIENE_ACTION
        reasons.append("Sleep architecture fragmented.")

    # 3. HRV factor and 4. acute crash.
    hrv_factor = cfg.hrv_neutral_factor
    is_acute_overload = False
    if state.hrv is not None and baseline.hrv_baseline:
        hrv_ratio = state.hrv / baseline.hrv_baseline
        hrv_factor = compute_hrv_factor(hrv_ratio, cfg)
        if hrv_ratio < cfg.hrv_low_ratio:
            penalty += cfg.hrv_low_penalty
            reasons.append("HRV depressed (sympathetic strain).")

        hrv_drop = (baseline.hrv_baseline - state.hrv) / baseline.hrv_baseline
        if hrv_drop >= cfg.hrv_acute_drop:
            penalty += cfg.hrv_acute_penalty
            is_acute_overload = True
            reasons.append(f"Acute systemic overload (HRV -{hrv_drop:.0%}).")

    # 5. Resting HR tiers.
    rhr_penalty, severe = _rhr_penalty(state.resting_hr, baseline.resting_hr, cfg)
    if severe:
        reasons.append("Elevated RHR (metabolic stress).")
    penalty += rhr_penalty

    bedtime = compute_bedtime(state.wake_time, baseline.sleep_need)

    logger.debug(
        "sleep factor=%.1f hrv_factor=%.1f penalty=%.1f acute=%s",
        sleep_factor, hrv_factor, penalty, is_acute_overload,
    )

    return SleepEvaluation(
        sleep_factor=round(sleep_factor, 2),
        hrv_factor=round(hrv_factor, 2),
        penalty=penalty,
        rhr_penalty=rhr_penalty,
        reasons=reasons,
        hygiene_action=hygiene_action,
        recommended_bedtime=bedtime,
        is_acute_overload=is_acute_overload,
    )
