"""
Cognitive trajectory: trend, volatility and breakdown risk over the last
seven samples of a metric.

Model
-----
- **Velocity** is the ordinary least-squares slope of score against the
  sample *index* (0..n-1), not elapsed time: irregular sampling is
  deliberately ignored.
- **Direction** bands the slope: > 0.5 rising, < -0.5 declining.
- **Volatility** is the coefficient of variation ``stddev / mean × 100``
  (population stddev), 0 when the mean is 0.  The absolute value is
  reported, so a series with a negative mean still yields a
  non-negative volatility.
- **Acceleration** is reserved and always 0.

Breakdown risk is an additive heuristic: +0.4 for a decline faster than
2 points per sample, +0.3 for volatility above 10 %.  It is *not*
clamped; with the default increments its maximum is 0.7, so the
``risk > 0.7`` breakdown date only fires with tuned increments.
"""

from __future__ import annotations

import datetime
import logging
import math
from typing import Optional

from app.asf.clock import as_utc, utc_now
from app.asf.thresholds import DEFAULT_THRESHOLDS, GRADE_BANDS, UNGRADED_METRIC_GRADE, ThresholdConfig
from app.schemas.labels import Grade, TrendDirection
from app.schemas.state_vector import Baseline
from app.schemas.trajectory import GradedSample, Predictions, ScoreSample, TrajectoryResult, Trend

logger = logging.getLogger(__name__)


# ======================================================================
# Trend
# ======================================================================


def calculate_trend(scores: list[float], config: Optional[ThresholdConfig] = None) -> Trend:
    """Regression slope, direction and volatility of a score series."""
    cfg = config or DEFAULT_THRESHOLDS
    n = len(scores)
    if n < 2:
        return Trend(direction=TrendDirection.STABLE, velocity=0.0, acceleration=0.0, volatility=0.0)

    sum_x = sum(range(n))
    sum_y = sum(scores)
    sum_xy = sum(i * y for i, y in enumerate(scores))
    sum_xx = sum(i * i for i in range(n))

    denominator = n * sum_xx - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator else 0.0

    mean = sum_y / n
    variance = sum((y - mean) ** 2 for y in scores) / n
    volatility = 0.0 if mean == 0 else math.sqrt(variance) / mean * 100

    if slope > cfg.trend_slope:
        direction = TrendDirection.RISING
    elif slope < -cfg.trend_slope:
        direction = TrendDirection.DECLINING
    else:
        direction = TrendDirection.STABLE

    return Trend(
        direction=direction,
        velocity=round(slope, 2),
        acceleration=0.0,
        volatility=round(abs(volatility), 2),
    )


# ======================================================================
# Predictions and alerts
# ======================================================================


def generate_predictions(
    trend: Trend,
    as_of: Optional[datetime.datetime] = None,
    config: Optional[ThresholdConfig] = None,
) -> Predictions:
    """Coarse breakdown prediction (tunable heuristic)."""
    cfg = config or DEFAULT_THRESHOLDS
    risk = 0.0
    if trend.direction == TrendDirection.DECLINING and abs(trend.velocity) > cfg.breakdown_velocity:
        risk += cfg.breakdown_decline_risk
    if trend.volatility > cfg.breakdown_volatility:
        risk += cfg.breakdown_volatility_risk
    risk = round(risk, 2)

    breakdown_date = None
    if risk > cfg.breakdown_alert_risk:
        now = as_of or utc_now()
        breakdown_date = now + datetime.timedelta(days=cfg.breakdown_horizon_days)

    return Predictions(
        breakdown_risk=risk,
        breakdown_date=breakdown_date,
        confidence=cfg.prediction_confidence,
    )


def generate_alerts(trend: Trend, metric: str, config: Optional[ThresholdConfig] = None) -> list[str]:
    """Human-readable alerts for a metric's trend."""
    cfg = config or DEFAULT_THRESHOLDS
    alerts: list[str] = []
    if metric == "focus_density" and trend.velocity < cfg.focus_decline_alert:
        alerts.append("Focus declining rapidly.")
    if metric == "reaction_time" and trend.velocity > cfg.latency_rise_alert:
        alerts.append("CNS latency increasing (slowing).")
    if trend.volatility > cfg.unstable_volatility_alert:
        alerts.append("Performance unstable.")
    return alerts


# ======================================================================
# Grading
# ======================================================================


def grade_score(score: float, metric: str, baseline: Optional[Baseline] = None) -> Grade:
    """Letter grade for one sample.

    Only metrics listed in :data:`~app.asf.thresholds.GRADE_BANDS` are
    banded (currently reaction time, in absolute ms).  Every other
    metric falls back to ``B``: a known gap, not a judgement.  The
    baseline is accepted for a future z-score grading and unused today.
    """
    bands = GRADE_BANDS.get(metric)
    if bands is None:
        return Grade(UNGRADED_METRIC_GRADE)

    limits, fallback = bands
    for upper, grade in limits:
        if score < upper:
            return Grade(grade)
    return Grade(fallback)


# ======================================================================
# Main entry point
# ======================================================================


def calculate_trajectory(
    metric: str,
    history: list[ScoreSample],
    baseline: Optional[Baseline] = None,
    as_of: Optional[datetime.datetime] = None,
    config: Optional[ThresholdConfig] = None,
) -> TrajectoryResult:
    """Build the trajectory of *metric* from its raw history.

    Samples are sorted by timestamp (naive ones taken as UTC) and only
    the most recent window (seven by default) is analysed.  The input
    list is not modified.
    """
    cfg = config or DEFAULT_THRESHOLDS
    window = sorted(history, key=lambda s: as_utc(s.timestamp))[-cfg.trajectory_window:]

    trend = calculate_trend([s.score for s in window], cfg)
    predictions = generate_predictions(trend, as_of, cfg)
    alerts = generate_alerts(trend, metric, cfg)

    logger.debug(
        "trajectory metric=%s samples=%d direction=%s risk=%.2f",
        metric, len(window), trend.direction.value, predictions.breakdown_risk,
    )

    return TrajectoryResult(
        metric=metric,
        scores_7d=[
            GradedSample(score=s.score, timestamp=s.timestamp, grade=grade_score(s.score, metric, baseline))
            for s in window
        ],
        trend=trend,
        predictions=predictions,
        alerts=alerts,
    )
