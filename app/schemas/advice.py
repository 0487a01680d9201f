"""
Session advice schemas.

The advisor runs the whole engine once: domain scorers, journal
analysis, state-vector fusion, weighted domain fusion and context
gating, and returns everything a presentation layer needs to render a
recommendation.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.context import Context
from app.schemas.domain_score import DomainScoreResult, MindState, SleepEvaluation, SleepState
from app.schemas.journal import JournalAnalysisResult
from app.schemas.profile import ReadinessWeights, UserProfile
from app.schemas.state_vector import Baseline, CognitiveTestResult, StateVector


class FusedReadiness(BaseModel):
    """Weighted fusion of the available domain scores."""

    score: float = Field(..., ge=0.0, le=100.0, description="Weighted mean of available domain scores")
    status: str = Field(..., description="One of: ready, partial, compromised, no_data")
    bottleneck_domain: Optional[str] = Field(None, description="Domain with the lowest score")
    domain_scores: dict[str, float] = Field(default_factory=dict, description="Scores that entered the fusion")
    weights: ReadinessWeights = Field(..., description="Weights renormalised over the available domains")


class AdviceRequest(BaseModel):
    """Everything known about the user at one point in time."""

    current: StateVector = Field(default_factory=StateVector)
    baseline: Baseline = Field(default_factory=Baseline)
    profile: UserProfile = Field(default_factory=UserProfile)
    context: Context = Field(default_factory=Context)

    mind: MindState
    sleep: Optional[SleepState] = None
    journal_text: Optional[str] = Field(None, max_length=20000)
    cognitive_load: Optional[float] = Field(None, ge=0.0, le=10.0)
    last_test: Optional[CognitiveTestResult] = None

    recovery_score: Optional[float] = Field(None, ge=0.0, le=100.0, description="Externally computed recovery")
    fuel_score: Optional[float] = Field(None, ge=0.0, le=100.0, description="Externally computed fuel score")


class AdviceResponse(BaseModel):
    """Complete engine output for one evaluation."""

    state_vector: StateVector
    readiness: int = Field(..., ge=10, le=100)
    mind: DomainScoreResult
    sleep: Optional[SleepEvaluation] = None
    journal: Optional[JournalAnalysisResult] = None
    fused: FusedReadiness
    available_protocols: list[str]
    triggered_rules: list[str]
    recommended_protocol: Optional[str] = Field(
        None,
        description="Mind scorer's candidate protocol, if the gate allows it",
    )
    withheld_protocol: Optional[str] = Field(
        None,
        description="Candidate protocol removed by the gate",
    )
    evaluated_at: datetime.datetime
