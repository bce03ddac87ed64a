"""Candidate-job matching engine module."""

from .advanced import (
    calculate_advanced_score,
    generate_detailed_match_reasons,
    sort_advanced_matches,
)
from .matching_engine import MatchingEngine, create_matching_engine
from .scoring import ScoreResult, compute_match_score

__all__ = [
    "MatchingEngine",
    "ScoreResult",
    "calculate_advanced_score",
    "compute_match_score",
    "create_matching_engine",
    "generate_detailed_match_reasons",
    "sort_advanced_matches",
]
