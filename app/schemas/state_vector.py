"""
Psychophysiological state vector schemas.

The :class:`StateVector` is the fundamental snapshot of a user's mental
state.  It is never mutated: every evaluation returns a fresh vector and
the caller decides where to keep the "current" one.

- Inputs: ``stress``, ``mood``, ``cognitive_load`` (0-10 sliders)
- Derived: ``autonomic_balance`` (-10 sympathetic .. +10 parasympathetic)
  and ``emotional_valence`` (-10 .. +10), always clamped
- Categorical: ``resilience_state``, last test grade, journal sentiment
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.journal import JournalAnalysisResult
from app.schemas.labels import Grade, ResilienceState, Sentiment


class StateVector(BaseModel):
    """Current psychophysiological snapshot."""

    stress: float = Field(5.0, ge=0.0, le=10.0, description="Subjective stress (0-10)")
    mood: float = Field(5.0, ge=0.0, le=10.0, description="Subjective mood (0-10)")
    cognitive_load: float = Field(5.0, ge=0.0, le=10.0, description="Perceived cognitive load (0-10)")

    autonomic_balance: float = Field(0.0, ge=-10.0, le=10.0,
                                     description="-10 sympathetic dominance .. +10 parasympathetic")
    emotional_valence: float = Field(0.0, ge=-10.0, le=10.0, description="-10 negative .. +10 positive affect")
    resilience_state: ResilienceState = ResilienceState.STABLE

    last_test_type: Optional[str] = Field(None, description="Type of the last cognitive test")
    last_test_grade: Optional[Grade] = None
    last_test_delta: float = Field(0.0, description="Improvement vs baseline (positive = better)")

    journal_confidence: float = Field(0.0, ge=0.0, le=1.0)
    last_journal_sentiment: Sentiment = Sentiment.NEUTRAL

    state_age_minutes: float = Field(0.0, ge=0.0, description="Minutes since last recomputation")

    @classmethod
    def neutral(cls) -> StateVector:
        """Return a neutral vector (all sliders at 5, derived at 0)."""
        return cls()


class Baseline(BaseModel):
    """Per-user reference constants.  Immutable within an evaluation."""

    model_config = ConfigDict(frozen=True)

    resting_hr: float = Field(60.0, gt=0.0, le=200.0, description="Resting heart rate (bpm)")
    hrv_baseline: Optional[float] = Field(None, gt=0.0, le=300.0,
                                          description="Reference RMSSD (ms); None if not yet known")
    reaction_time: float = Field(250.0, ge=0.0, le=2000.0,
                                 description="Reference reaction time (ms); 0 means unknown")
    sleep_need: float = Field(8.0, gt=0.0, le=24.0, description="Nightly sleep need (hours)")


class CognitiveTestResult(BaseModel):
    """A discrete cognitive test observation."""

    type: str = Field(..., description="Test type, e.g. reaction, memory, focus")
    score: float = Field(..., description="Raw test score (ms for reaction)")
    timestamp: datetime.datetime


class FusionInputs(BaseModel):
    """Raw observations folded into the state vector."""

    stress_slider: Optional[float] = Field(None, ge=0.0, le=10.0)
    mood_slider: Optional[float] = Field(None, ge=0.0, le=10.0)
    cognitive_load_slider: Optional[float] = Field(None, ge=0.0, le=10.0)
    journal_analysis: Optional[JournalAnalysisResult] = None
    last_test: Optional[CognitiveTestResult] = None
    hrv: Optional[float] = Field(None, gt=0.0, le=300.0, description="Current RMSSD (ms)")
    sleep_hours: Optional[float] = Field(None, ge=0.0, le=24.0)


class StateVectorRequest(BaseModel):
    """Request body for the state-vector endpoint."""

    current: StateVector = Field(default_factory=StateVector)
    inputs: FusionInputs = Field(default_factory=FusionInputs)
    baseline: Baseline = Field(default_factory=Baseline)


class StateVectorResponse(BaseModel):
    """Updated vector plus its readiness score."""

    state_vector: StateVector
    readiness: int = Field(..., ge=10, le=100)
