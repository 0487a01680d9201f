"""
Domain scorer schemas.

Each domain scorer turns one domain's raw inputs plus the user's
:class:`~app.schemas.state_vector.Baseline` into a score, an ordered
list of human-readable reasons and (for the mind domain) a candidate
protocol.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.labels import FocusQuality
from app.schemas.state_vector import Baseline


# ---------------------------------------------------------------------------
# Mind domain
# ---------------------------------------------------------------------------

class CognitiveScores(BaseModel):
    """Latest cognitive test metrics (all optional)."""

    reaction_time: Optional[float] = Field(None, gt=0.0, le=5000.0, description="Reaction time (ms)")
    memory_span: Optional[float] = Field(None, ge=0.0, le=50.0, description="Digit span (count)")
    focus_density: Optional[float] = Field(None, ge=0.0, le=100.0, description="Focus density (%)")
    impulse_control: Optional[float] = Field(None, ge=0.0, le=100.0, description="Go/no-go accuracy (%)")


class MindState(BaseModel):
    """Self-reported mental state and cognitive test results."""

    stress: float = Field(..., ge=0.0, le=10.0)
    mood: float = Field(..., ge=0.0, le=10.0)
    focus_quality: FocusQuality = FocusQuality.NEUTRAL
    cognitive_scores: CognitiveScores = Field(default_factory=CognitiveScores)


class DomainScoreResult(BaseModel):
    """Output of a domain scorer."""

    score: int = Field(..., ge=1, le=100)
    penalty: float = Field(..., description="Total penalty subtracted from 100")
    penalties: dict[str, float] = Field(
        default_factory=dict,
        description="Signed contribution of each component to the total penalty",
    )
    reasons: list[str] = Field(default_factory=list)
    recommended_protocol: Optional[str] = None


class MindEvaluationRequest(BaseModel):
    """Request body for the mind scorer endpoint."""

    state: MindState
    baseline: Baseline = Field(default_factory=Baseline)


# ---------------------------------------------------------------------------
# Sleep domain
# ---------------------------------------------------------------------------

class SleepState(BaseModel):
    """Last night's sleep and morning physiology."""

    duration: float = Field(..., ge=0.0, le=24.0, description="Sleep duration (hours)")
    efficiency: float = Field(100.0, ge=0.0, le=100.0, description="Sleep efficiency (%)")
    hrv: Optional[float] = Field(None, gt=0.0, le=300.0, description="Morning RMSSD (ms)")
    resting_hr: Optional[float] = Field(None, gt=0.0, le=200.0, description="Morning resting HR (bpm)")
    wake_time: Optional[datetime.time] = Field(None, description="Usual wake time (HH:MM)")


class SleepEvaluation(BaseModel):
    """Output of the sleep scorer."""

    sleep_factor: float = Field(..., ge=0.0, le=100.0)
    hrv_factor: float = Field(..., ge=0.0)
    penalty: float
    rhr_penalty: float
    reasons: list[str] = Field(default_factory=list)
    hygiene_action: Optional[str] = None
    recommended_bedtime: str = Field(..., description="HH:MM")
    is_acute_overload: bool = False


class SleepEvaluationRequest(BaseModel):
    """Request body for the sleep scorer endpoint."""

    state: SleepState
    baseline: Baseline = Field(default_factory=Baseline)
