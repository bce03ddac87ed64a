"""
Application-wide constants for the jobmatch engine.

Scoring weights, bonus values and enumerations shared by the matchers,
the data models and the CLI. Changing a weight here changes rankings,
so treat these values as part of the matching contract.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "jobmatch"
APP_DISPLAY_NAME: Final[str] = "Candidate-Job Matching Engine"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Base Scoring Constants
# =============================================================================

# Points awarded by the score primitive, evaluated independently and summed
SCORE_WEIGHTS: Final[dict[str, int]] = {
    "qualification": 40,
    "stream": 30,
    "graduation_year": 20,
    "graduation_year_partial": 10,
    "gpa": 10,
    "perfect_match_bonus": 5,
}

# A graduation year this close to the earliest accepted year earns partial credit
GRADUATION_YEAR_TOLERANCE: Final[int] = 1

# Highest score the primitive can return (not clamped to 100)
MAX_BASE_SCORE: Final[int] = (
    SCORE_WEIGHTS["qualification"]
    + SCORE_WEIGHTS["stream"]
    + SCORE_WEIGHTS["graduation_year"]
    + SCORE_WEIGHTS["gpa"]
    + SCORE_WEIGHTS["perfect_match_bonus"]
)


# =============================================================================
# Advanced Scoring Constants
# =============================================================================

ADVANCED_BONUSES: Final[dict[str, int]] = {
    "qualification_filter": 10,
    "work_mode_filter": 5,
    "recent_posting": 3,
}

RECENT_POSTING_DAYS: Final[int] = 7

# Advanced scores are clamped to this range
MIN_ADVANCED_SCORE: Final[int] = 0
MAX_ADVANCED_SCORE: Final[int] = 100

# Sub-scores shown next to each detailed reason in the UI breakdown
DETAILED_REASON_SCORES: Final[dict[str, int]] = {
    "qualification": 25,
    "stream": 20,
    "experience": 15,
    "location": 10,
    "cgpa": 10,
}

# Graduates within this many years count as recent graduates
RECENT_GRADUATE_YEARS: Final[int] = 2


# =============================================================================
# Query Constants
# =============================================================================

# Reverse matching over-fetches to make up for the GPA gate
REVERSE_MATCH_PREFETCH_FACTOR: Final[int] = 2

# Profile fields that may be grouped for statistics
STATISTICS_FIELDS: Final[tuple[str, ...]] = (
    "qualification",
    "stream",
    "graduation_year",
)

# Reported until match outcomes are tracked
PLACEHOLDER_AVERAGE_MATCH_SCORE: Final[int] = 75

# Score thresholds on the base-score scale
SCORE_THRESHOLDS: Final[dict[str, int]] = {
    "excellent": 90,
    "good": 70,
    "fair": 50,
}


# =============================================================================
# Enums
# =============================================================================


class JobType(str, Enum):
    """Kind of posting."""

    JOB = "job"
    INTERNSHIP = "internship"


class WorkMode(str, Enum):
    """Where the work happens."""

    REMOTE = "remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"


class SortMode(str, Enum):
    """Ordering applied to advanced match results."""

    RELEVANCE = "relevance"
    DATE = "date"
    SALARY = "salary"


class MatchReasonType(str, Enum):
    """Category of a detailed match reason."""

    QUALIFICATION = "qualification"
    STREAM = "stream"
    EXPERIENCE = "experience"
    LOCATION = "location"
    CGPA = "cgpa"


class MatchingEfficiency(str, Enum):
    """Coarse label reported with matching statistics."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MatchScoreLevel(Enum):
    """Categorical levels for match scores."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def from_score(cls, score: float) -> "MatchScoreLevel":
        """Convert a numeric score to a level."""
        if score >= SCORE_THRESHOLDS["excellent"]:
            return cls.EXCELLENT
        elif score >= SCORE_THRESHOLDS["good"]:
            return cls.GOOD
        elif score >= SCORE_THRESHOLDS["fair"]:
            return cls.FAIR
        return cls.POOR
