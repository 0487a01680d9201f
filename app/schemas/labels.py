"""
Shared categorical labels.

These enums are ``str`` subclasses so they serialise as plain strings
and compare equal to their literal values (``Grade.F == "F"``).
"""

from enum import Enum


class Grade(str, Enum):
    """Letter grade for a cognitive test or a trajectory sample."""
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    F = "F"


class Sentiment(str, Enum):
    """Coarse journal sentiment."""
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class ResilienceState(str, Enum):
    """Direction of the user's resilience."""
    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"


class TrendDirection(str, Enum):
    """Direction of a score series (regression slope banding)."""
    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"


class FocusQuality(str, Enum):
    """Self-reported quality of attention."""
    TUNNEL = "tunnel"
    SCATTERED = "scattered"
    NEUTRAL = "neutral"
    FLOW = "flow"
