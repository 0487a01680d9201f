"""
Versioned phrase lexicon for journal analysis.

The journal analyzer is pure logic; all vocabulary lives here.  Phrase
lists are matched as **substrings of the lowercased raw text** (so
``"all"`` also matches inside ``"ball"``), word lists are matched as
**whole tokens**.

Bump ``version`` whenever a list changes: the version is reported in
every :class:`~app.schemas.journal.JournalAnalysisResult` so stored
analyses can be traced back to the vocabulary that produced them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AxisPhrases(BaseModel):
    """Positive and negative phrase lists for one ACT axis."""

    positive: list[str] = Field(default_factory=list)
    negative: list[str] = Field(default_factory=list)
    negative_weight: float = Field(2.0, description="Points removed per negative phrase")


class JournalLexicon(BaseModel):
    """All vocabulary consumed by :func:`app.asf.journal.analyze_journal`."""

    version: str = "2024.1"

    # ACT psychological flexibility axes
    acceptance: AxisPhrases
    defusion: AxisPhrases
    values: AxisPhrases
    present_moment: AxisPhrases
    committed_action: AxisPhrases
    positive_weight: float = Field(2.0, description="Points added per positive phrase")

    # Risk signals (phrase counts, x2, capped at 10)
    catastrophizing: list[str]
    avoidance: list[str]
    isolation: list[str]
    perfectionism: list[str]
    rumination_diversity: float = Field(0.6, description="Lexical diversity below this signals rumination")

    # Resilience
    growth_words: list[str]
    agency_phrases: list[str]
    placeholder_markers: dict[str, float] = Field(
        default_factory=lambda: {
            "self_compassion": 5.0,
            "reframing": 5.0,
            "perspective_taking": 5.0,
        },
        description="Markers not yet computed; reported as fixed values",
    )

    # Sentiment (token matches)
    positive_words: list[str]
    negative_words: list[str]
    sentiment_margin: int = Field(1, description="Net score must exceed this to leave Neutral")

    # Confidence: min(1, len(text) / confidence_length)
    confidence_length: int = 200


DEFAULT_LEXICON = JournalLexicon(
    acceptance=AxisPhrases(
        positive=["feel x and", "accept", "despite", "willing to", "that's okay", "allow", "room for"],
        negative=["can't when", "must not", "need to avoid", "stop feeling", "shouldn't feel"],
    ),
    defusion=AxisPhrases(
        positive=["notice the", "my mind said", "thinking", "brain telling me", "just a thought",
                  "story my mind"],
        negative=["i am anxious", "i'm a failure", "i can't", "truth is"],
    ),
    values=AxisPhrases(
        positive=["for my team", "because it matters", "proud of", "love to", "passion for", "legacy",
                  "identity as"],
        negative=["have to", "should", "can't let down", "prove myself", "winning is everything"],
        negative_weight=1.5,
    ),
    present_moment=AxisPhrases(
        positive=["right now", "today", "this moment", "what i can do", "breath", "step"],
        negative=["worried about", "next week", "what if", "future", "will fail", "when i compete"],
    ),
    committed_action=AxisPhrases(
        positive=["i did", "i trained", "despite", "even though", "i'm choosing to", "i will", "showed up"],
        negative=["i want to but", "i can't right now", "i'll try later", "maybe tomorrow"],
    ),
    catastrophizing=["never", "always", "impossible", "everyone", "no one", "all", "can't", "won't",
                     "failure"],
    avoidance=["they made me", "it's not my fault", "the team failed me", "coach didn't", "genetics",
               "bad luck"],
    isolation=["don't want to talk", "isolated", "alone", "don't want to see"],
    perfectionism=["must be perfect", "can't make mistakes", "have to be best", "no excuses", "unacceptable"],
    growth_words=["learn", "grow", "yet", "process", "improve"],
    agency_phrases=["i can", "i will", "choice", "control"],
    positive_words=["good", "great", "happy", "strong", "ready", "excited", "love"],
    negative_words=["bad", "sad", "weak", "tired", "anxious", "hate", "fail"],
)
