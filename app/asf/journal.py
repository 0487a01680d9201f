"""
Journal text signal extraction (lexical heuristics, no ML).

Pipeline for one entry:

1. Tokenize: lowercase, strip punctuation, split on whitespace.
2. ACT flexibility axes: ``clamp(5 + 2·pos - w·neg, 0, 10)`` where pos /
   neg count how many phrases of the axis lists occur as substrings of
   the lowercased text (``w`` is 2, or 1.5 for values alignment).
3. Risk axes: ``min(10, 2·count)``; rumination instead comes from
   lexical diversity (``unique / total`` tokens below 0.6 scores
   ``(1 - diversity) × 10``).
4. Resilience: growth mindset from growth-vocabulary *tokens*, agency
   from agency *phrases*; the other markers are lexicon constants.
5. Sentiment: net count of positive vs negative tokens (> 1 Positive,
   < -1 Negative), and the same classifier on the first and last
   sentence for the evolution.
6. Confidence: ``min(1, len(text) / 200)``.

All vocabulary comes from :mod:`app.asf.lexicon`.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from app.asf.lexicon import DEFAULT_LEXICON, AxisPhrases, JournalLexicon
from app.schemas.journal import (
    JournalAnalysisResult,
    PsychologicalFlexibility,
    ResilienceMarkers,
    RiskSignals,
    SentimentEvolution,
)
from app.schemas.labels import Sentiment

logger = logging.getLogger(__name__)

_PUNCTUATION = re.compile(r"[^\w\s]")
_SENTENCE_END = re.compile(r"[.!?]+")

_SENTIMENT_VALUE: dict[Sentiment, int] = {
    Sentiment.POSITIVE: 8,
    Sentiment.NEUTRAL: 5,
    Sentiment.NEGATIVE: 2,
}


# ======================================================================
# Helpers
# ======================================================================


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation and split on whitespace."""
    return _PUNCTUATION.sub("", text.lower()).split()


def split_sentences(text: str) -> list[str]:
    """Split on ``.``, ``!`` and ``?``; drop blank fragments."""
    return [s for s in _SENTENCE_END.split(text) if s.strip()]


def count_phrases(text: str, phrases: list[str]) -> int:
    """Number of distinct phrases that occur (as substrings) in *text*."""
    lower = text.lower()
    return sum(1 for phrase in phrases if phrase in lower)


def _axis_score(text: str, axis: AxisPhrases, positive_weight: float) -> float:
    pos = count_phrases(text, axis.positive)
    neg = count_phrases(text, axis.negative)
    score = 5 + pos * positive_weight - neg * axis.negative_weight
    return round(max(0.0, min(10.0, score)), 1)


def classify_sentiment(tokens: list[str], lexicon: Optional[JournalLexicon] = None) -> Sentiment:
    """Net positive minus negative word count, with a ±margin dead zone."""
    lex = lexicon or DEFAULT_LEXICON
    positive = set(lex.positive_words)
    negative = set(lex.negative_words)

    score = 0
    for token in tokens:
        if token in positive:
            score += 1
        if token in negative:
            score -= 1

    if score > lex.sentiment_margin:
        return Sentiment.POSITIVE
    if score < -lex.sentiment_margin:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


# ======================================================================
# Signal families
# ======================================================================


def extract_flexibility(text: str, lexicon: JournalLexicon) -> PsychologicalFlexibility:
    """Score the five ACT processes."""
    w = lexicon.positive_weight
    return PsychologicalFlexibility(
        acceptance_level=_axis_score(text, lexicon.acceptance, w),
        cognitive_defusion=_axis_score(text, lexicon.defusion, w),
        values_alignment=_axis_score(text, lexicon.values, w),
        present_moment=_axis_score(text, lexicon.present_moment, w),
        committed_action=_axis_score(text, lexicon.committed_action, w),
    )


def extract_risk_signals(text: str, tokens: list[str], lexicon: JournalLexicon) -> RiskSignals:
    """Score the five risk signals."""
    rumination = 0.0
    if tokens:
        diversity = len(set(tokens)) / len(tokens)
        if diversity < lexicon.rumination_diversity:
            rumination = round((1 - diversity) * 10, 1)

    return RiskSignals(
        catastrophizing=min(10, count_phrases(text, lexicon.catastrophizing) * 2),
        avoidance=min(10, count_phrases(text, lexicon.avoidance) * 2),
        rumination=rumination,
        isolation=min(10, count_phrases(text, lexicon.isolation) * 2),
        perfectionism=min(10, count_phrases(text, lexicon.perfectionism) * 2),
    )


def extract_resilience_markers(text: str, tokens: list[str], lexicon: JournalLexicon) -> ResilienceMarkers:
    """Growth mindset and agency are computed; the rest are constants."""
    growth_words = set(lexicon.growth_words)
    growth_count = sum(1 for token in tokens if token in growth_words)
    agency_count = count_phrases(text, lexicon.agency_phrases)

    return ResilienceMarkers(
        growth_mindset=min(10, growth_count * 2),
        agency=min(10, agency_count * 2),
        **lexicon.placeholder_markers,
    )


def analyze_sentiment_evolution(sentences: list[str], lexicon: JournalLexicon) -> SentimentEvolution:
    """Compare the sentiment of the first and the last sentence."""
    if len(sentences) < 2:
        return SentimentEvolution(start_sentiment=5, end_sentiment=5, trajectory="flat")

    start = _SENTIMENT_VALUE[classify_sentiment(tokenize(sentences[0]), lexicon)]
    end = _SENTIMENT_VALUE[classify_sentiment(tokenize(sentences[-1]), lexicon)]

    trajectory = "flat"
    if end > start:
        trajectory = "improving"
    elif end < start:
        trajectory = "declining"

    return SentimentEvolution(start_sentiment=start, end_sentiment=end, trajectory=trajectory)


# ======================================================================
# Main entry point
# ======================================================================


def analyze_journal(text: str, lexicon: Optional[JournalLexicon] = None) -> JournalAnalysisResult:
    """Extract psychological signals from one journal entry.

    Empty text yields the neutral defaults: sentiment
    Neutral, confidence 0, flexibility axes 5, risk axes 0.
    """
    lex = lexicon or DEFAULT_LEXICON
    text = text or ""
    tokens = tokenize(text)
    sentences = split_sentences(text)

    result = JournalAnalysisResult(
        sentiment=classify_sentiment(tokens, lex),
        psychological_flexibility=extract_flexibility(text, lex),
        risk_signals=extract_risk_signals(text, tokens, lex),
        resilience_markers=extract_resilience_markers(text, tokens, lex),
        sentiment_evolution=analyze_sentiment_evolution(sentences, lex),
        analysis_confidence=round(min(1.0, len(text) / lex.confidence_length), 2),
        lexicon_version=lex.version,
    )

    logger.debug(
        "journal tokens=%d sentiment=%s confidence=%.2f",
        len(tokens), result.sentiment.value, result.analysis_confidence,
    )
    return result
