"""ASF core algorithms: domain scorers, journal signals, trajectory, gating, weights, fusion."""

from app.asf.advisor import compute_session_advice
from app.asf.fusion import calculate_readiness, evaluate_state_vector, fuse_domain_scores
from app.asf.gating import DEFAULT_GATING_RULES, PROTOCOL_CATALOG, GatingRule, get_available_protocols
from app.asf.journal import analyze_journal
from app.asf.lexicon import DEFAULT_LEXICON, JournalLexicon
from app.asf.mind import evaluate_mind_state
from app.asf.sleep import evaluate_sleep
from app.asf.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from app.asf.trajectory import calculate_trajectory, calculate_trend
from app.asf.weights import calculate_weights

__all__ = [
    "compute_session_advice",
    "calculate_readiness",
    "evaluate_state_vector",
    "fuse_domain_scores",
    "DEFAULT_GATING_RULES",
    "PROTOCOL_CATALOG",
    "GatingRule",
    "get_available_protocols",
    "analyze_journal",
    "DEFAULT_LEXICON",
    "JournalLexicon",
    "evaluate_mind_state",
    "evaluate_sleep",
    "DEFAULT_THRESHOLDS",
    "ThresholdConfig",
    "calculate_trajectory",
    "calculate_trend",
    "calculate_weights",
]
