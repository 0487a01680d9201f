"""
Journal analysis schemas.

A journal entry is reduced to four families of signals:

- **Psychological flexibility**: five ACT processes (acceptance,
  cognitive defusion, values alignment, present moment, committed
  action).  0-10, neutral midpoint 5.
- **Risk signals**: catastrophizing, avoidance, rumination, isolation,
  perfectionism.  0-10, neutral 0.
- **Resilience markers**: growth mindset and agency are computed; the
  other three are fixed lexicon constants.
- **Sentiment** and its evolution from first to last sentence.
"""

from pydantic import BaseModel, Field

from app.schemas.labels import Sentiment


class PsychologicalFlexibility(BaseModel):
    """Five-axis ACT profile (0 = rigid, 10 = flexible)."""

    acceptance_level: float = Field(5.0, ge=0.0, le=10.0)
    cognitive_defusion: float = Field(5.0, ge=0.0, le=10.0)
    values_alignment: float = Field(5.0, ge=0.0, le=10.0)
    present_moment: float = Field(5.0, ge=0.0, le=10.0)
    committed_action: float = Field(5.0, ge=0.0, le=10.0)


class RiskSignals(BaseModel):
    """Five-axis risk profile (0 = absent, 10 = saturated)."""

    catastrophizing: float = Field(0.0, ge=0.0, le=10.0)
    avoidance: float = Field(0.0, ge=0.0, le=10.0)
    rumination: float = Field(0.0, ge=0.0, le=10.0)
    isolation: float = Field(0.0, ge=0.0, le=10.0)
    perfectionism: float = Field(0.0, ge=0.0, le=10.0)


class ResilienceMarkers(BaseModel):
    """Resilience markers (0-10)."""

    self_compassion: float = Field(5.0, ge=0.0, le=10.0)
    reframing: float = Field(5.0, ge=0.0, le=10.0)
    growth_mindset: float = Field(0.0, ge=0.0, le=10.0)
    perspective_taking: float = Field(5.0, ge=0.0, le=10.0)
    agency: float = Field(0.0, ge=0.0, le=10.0)


class SentimentEvolution(BaseModel):
    """Sentiment of the first vs the last sentence of the entry."""

    start_sentiment: int = Field(5, description="8 positive, 5 neutral, 2 negative")
    end_sentiment: int = Field(5, description="8 positive, 5 neutral, 2 negative")
    trajectory: str = Field("flat", description="One of: improving, declining, flat")


class JournalAnalysisResult(BaseModel):
    """Full lexical analysis of one journal entry."""

    sentiment: Sentiment = Sentiment.NEUTRAL
    psychological_flexibility: PsychologicalFlexibility = Field(default_factory=PsychologicalFlexibility)
    risk_signals: RiskSignals = Field(default_factory=RiskSignals)
    resilience_markers: ResilienceMarkers = Field(default_factory=ResilienceMarkers)
    sentiment_evolution: SentimentEvolution = Field(default_factory=SentimentEvolution)
    analysis_confidence: float = Field(0.0, ge=0.0, le=1.0, description="min(1, text_length / 200)")
    lexicon_version: str = Field(..., description="Version of the phrase lexicon used")


class JournalRequest(BaseModel):
    """Request body for the journal analysis endpoint."""

    text: str = Field("", max_length=20000)
