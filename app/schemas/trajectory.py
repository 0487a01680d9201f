"""
Cognitive trajectory schemas.

A trajectory summarises the last seven samples of one cognitive metric:
per-sample grade, regression trend, a coarse breakdown-risk prediction
and human-readable alerts.

Breakdown risk and its confidence are tunable heuristics, not validated
science.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.labels import Grade, TrendDirection
from app.schemas.state_vector import Baseline


class Trend(BaseModel):
    """Regression / volatility statistics over a score series."""

    direction: TrendDirection = TrendDirection.STABLE
    velocity: float = Field(0.0, description="OLS slope of score vs sample index")
    acceleration: float = Field(0.0, description="Reserved, always 0")
    volatility: float = Field(0.0, ge=0.0, description="Coefficient of variation (%)")


class Predictions(BaseModel):
    """Coarse breakdown prediction."""

    breakdown_risk: float = Field(..., ge=0.0, description="Additive heuristic, not clamped to 1")
    breakdown_date: Optional[datetime.datetime] = None
    confidence: float = Field(..., ge=0.0, le=1.0)


class ScoreSample(BaseModel):
    """One raw observation of a metric."""

    score: float
    timestamp: datetime.datetime


class GradedSample(ScoreSample):
    """A sample with its letter grade."""

    grade: Grade


class TrajectoryResult(BaseModel):
    """Full trajectory for one metric."""

    metric: str
    scores_7d: list[GradedSample]
    trend: Trend
    predictions: Predictions
    alerts: list[str] = Field(default_factory=list)


class TrajectoryRequest(BaseModel):
    """Request body for the trajectory endpoint."""

    metric: str = Field(..., description="focus_density, reaction_time, impulse_control or memory_span")
    history: list[ScoreSample] = Field(default_factory=list)
    baseline: Optional[Baseline] = None
    as_of: Optional[datetime.datetime] = None
