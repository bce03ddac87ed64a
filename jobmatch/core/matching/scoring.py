"""
Score primitive for candidate-job matching.

Scores a candidate profile against a job's eligibility rule using a
fixed table of independent factors:

- Qualification (40)
- Stream (30)
- Graduation year (20, or 10 within a year of the earliest accepted year)
- GPA floor (10)
- Perfect-match bonus (5) when qualification, stream and year all match

The factors are summed and not normalized, so the maximum is 105.
"""

from dataclasses import dataclass, field

from jobmatch.data.models import CandidateProfile, JobEligibility
from jobmatch.utils.constants import GRADUATION_YEAR_TOLERANCE, SCORE_WEIGHTS


@dataclass
class ScoreResult:
    """Outcome of scoring one profile against one eligibility rule."""

    score: int = 0
    reasons: list[str] = field(default_factory=list)

    # Factor outcomes
    qualification_matched: bool = False
    stream_matched: bool = False
    year_matched: bool = False
    year_partially_matched: bool = False
    gpa_met: bool = False

    @property
    def is_perfect_match(self) -> bool:
        """Qualification, stream and graduation year all matched exactly."""
        return self.qualification_matched and self.stream_matched and self.year_matched


def _format_gpa(value: float) -> str:
    return f"{value:g}"


def compute_match_score(
    profile: CandidateProfile,
    eligibility: JobEligibility,
) -> ScoreResult:
    """
    Score a profile against an eligibility rule.

    Every factor appends exactly one reason, matched or not, and the
    perfect-match bonus adds a fifth when it applies. Never raises:
    missing profile fields simply fail their factor.

    Args:
        profile: Candidate profile snapshot
        eligibility: Eligibility rule of the job

    Returns:
        ScoreResult with the summed score and ordered reasons
    """
    result = ScoreResult()

    # Qualification
    result.qualification_matched = bool(profile.qualification) and (
        profile.qualification in eligibility.qualifications
    )
    if result.qualification_matched:
        result.score += SCORE_WEIGHTS["qualification"]
        result.reasons.append("Qualification matches job requirements")
    else:
        result.reasons.append("Qualification does not match job requirements")

    # Stream
    result.stream_matched = bool(profile.stream) and profile.stream in eligibility.streams
    if result.stream_matched:
        result.score += SCORE_WEIGHTS["stream"]
        result.reasons.append("Academic stream matches job requirements")
    else:
        result.reasons.append("Academic stream does not match job requirements")

    # Graduation year
    year = profile.graduation_year
    earliest = eligibility.earliest_graduation_year
    result.year_matched = year is not None and year in eligibility.graduation_years
    if result.year_matched:
        result.score += SCORE_WEIGHTS["graduation_year"]
        result.reasons.append("Graduation year matches job requirements")
    elif year is not None and earliest is not None and abs(year - earliest) <= GRADUATION_YEAR_TOLERANCE:
        result.year_partially_matched = True
        result.score += SCORE_WEIGHTS["graduation_year_partial"]
        result.reasons.append("Graduation year is within acceptable range")
    else:
        result.reasons.append("Graduation year does not match job requirements")

    # GPA floor
    min_gpa = eligibility.min_gpa
    gpa = profile.gpa_or_percentage
    if min_gpa is None:
        result.gpa_met = True
        result.reasons.append("No CGPA requirement specified")
    elif gpa is None:
        result.reasons.append(f"CGPA not provided (minimum requirement {_format_gpa(min_gpa)})")
    elif gpa >= min_gpa:
        result.gpa_met = True
        result.reasons.append(
            f"CGPA ({_format_gpa(gpa)}) meets minimum requirement ({_format_gpa(min_gpa)})"
        )
    else:
        result.reasons.append(
            f"CGPA ({_format_gpa(gpa)}) below minimum requirement ({_format_gpa(min_gpa)})"
        )
    if result.gpa_met:
        result.score += SCORE_WEIGHTS["gpa"]

    # Bonus for exact matches
    if result.is_perfect_match:
        result.score += SCORE_WEIGHTS["perfect_match_bonus"]
        result.reasons.append("Perfect match bonus")

    return result
