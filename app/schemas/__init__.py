"""Pydantic schemas for engine inputs and outputs."""

from app.schemas.labels import FocusQuality, Grade, ResilienceState, Sentiment, TrendDirection
from app.schemas.journal import (
    JournalAnalysisResult,
    JournalRequest,
    PsychologicalFlexibility,
    ResilienceMarkers,
    RiskSignals,
    SentimentEvolution,
)
from app.schemas.state_vector import (
    Baseline,
    CognitiveTestResult,
    FusionInputs,
    StateVector,
    StateVectorRequest,
    StateVectorResponse,
)
from app.schemas.context import Context, ProtocolRequest, ProtocolResponse, RecentTestResult
from app.schemas.domain_score import (
    CognitiveScores,
    DomainScoreResult,
    MindEvaluationRequest,
    MindState,
    SleepEvaluation,
    SleepEvaluationRequest,
    SleepState,
)
from app.schemas.trajectory import (
    GradedSample,
    Predictions,
    ScoreSample,
    TrajectoryRequest,
    TrajectoryResult,
    Trend,
)
from app.schemas.profile import ClinicalProfile, ReadinessWeights, UserProfile
from app.schemas.advice import AdviceRequest, AdviceResponse, FusedReadiness

__all__ = [
    "FocusQuality",
    "Grade",
    "ResilienceState",
    "Sentiment",
    "TrendDirection",
    "JournalAnalysisResult",
    "JournalRequest",
    "PsychologicalFlexibility",
    "ResilienceMarkers",
    "RiskSignals",
    "SentimentEvolution",
    "Baseline",
    "CognitiveTestResult",
    "FusionInputs",
    "StateVector",
    "StateVectorRequest",
    "StateVectorResponse",
    "Context",
    "ProtocolRequest",
    "ProtocolResponse",
    "RecentTestResult",
    "CognitiveScores",
    "DomainScoreResult",
    "MindEvaluationRequest",
    "MindState",
    "SleepEvaluation",
    "SleepEvaluationRequest",
    "SleepState",
    "GradedSample",
    "Predictions",
    "ScoreSample",
    "TrajectoryRequest",
    "TrajectoryResult",
    "Trend",
    "ClinicalProfile",
    "ReadinessWeights",
    "UserProfile",
    "AdviceRequest",
    "AdviceResponse",
    "FusedReadiness",
]
