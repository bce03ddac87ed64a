"""
Advanced matching helpers.

Bonus scoring on top of the score primitive, typed match reasons for
the UI breakdown, and the sort modes of advanced matching.
"""

from datetime import datetime

from jobmatch.data.models import (
    AdvancedJobMatch,
    AdvancedMatchFilters,
    CandidateProfile,
    DetailedMatchReason,
    JobListing,
    parse_salary_amount,
)
from jobmatch.utils.constants import (
    ADVANCED_BONUSES,
    DETAILED_REASON_SCORES,
    MAX_ADVANCED_SCORE,
    MIN_ADVANCED_SCORE,
    RECENT_GRADUATE_YEARS,
    RECENT_POSTING_DAYS,
    MatchReasonType,
    SortMode,
    WorkMode,
)

from .scoring import ScoreResult


def calculate_advanced_score(
    base_score: int,
    profile: CandidateProfile,
    listing: JobListing,
    filters: AdvancedMatchFilters,
    now: datetime,
) -> int:
    """
    Add the advanced bonuses to a base score and clamp to [0, 100].

    Bonuses:
    - qualification_filter: the candidate's qualification was explicitly asked for
    - work_mode_filter: the listing's work mode was explicitly asked for
    - recent_posting: posted within the last week
    """
    score = base_score

    if profile.qualification and profile.qualification in filters.qualifications:
        score += ADVANCED_BONUSES["qualification_filter"]

    if listing.work_mode in filters.work_modes:
        score += ADVANCED_BONUSES["work_mode_filter"]

    if listing.days_since_posted(now) <= RECENT_POSTING_DAYS:
        score += ADVANCED_BONUSES["recent_posting"]

    return max(MIN_ADVANCED_SCORE, min(MAX_ADVANCED_SCORE, score))


def generate_detailed_match_reasons(
    profile: CandidateProfile,
    listing: JobListing,
    score_result: ScoreResult,
    now: datetime,
) -> list[DetailedMatchReason]:
    """Build typed reasons with their UI sub-scores."""
    reasons = []

    if score_result.qualification_matched:
        reasons.append(DetailedMatchReason(
            type=MatchReasonType.QUALIFICATION,
            message=f"Your {profile.qualification} qualification matches the job requirements",
            score=DETAILED_REASON_SCORES["qualification"],
        ))

    if score_result.stream_matched:
        reasons.append(DetailedMatchReason(
            type=MatchReasonType.STREAM,
            message=f"Your {profile.stream} stream is exactly what they're looking for",
            score=DETAILED_REASON_SCORES["stream"],
        ))

    if profile.graduation_year is not None:
        years_since_graduation = now.year - profile.graduation_year
        if 0 <= years_since_graduation <= RECENT_GRADUATE_YEARS:
            plural = "" if years_since_graduation == 1 else "s"
            reasons.append(DetailedMatchReason(
                type=MatchReasonType.EXPERIENCE,
                message=f"Recent graduate ({years_since_graduation} year{plural} experience)",
                score=DETAILED_REASON_SCORES["experience"],
            ))

    if listing.work_mode == WorkMode.REMOTE:
        reasons.append(DetailedMatchReason(
            type=MatchReasonType.LOCATION,
            message="Remote work available - flexible location",
            score=DETAILED_REASON_SCORES["location"],
        ))

    if listing.eligibility.min_gpa is not None and score_result.gpa_met:
        reasons.append(DetailedMatchReason(
            type=MatchReasonType.CGPA,
            message=f"Your CGPA meets the minimum of {listing.eligibility.min_gpa:g}",
            score=DETAILED_REASON_SCORES["cgpa"],
        ))

    return reasons


def sort_advanced_matches(
    matches: list[AdvancedJobMatch],
    sort_by: SortMode,
) -> list[AdvancedJobMatch]:
    """
    Order advanced matches.

    relevance: advanced score, newest first among equals
    date: newest first
    salary: highest numeric salary or stipend first, unparseable as zero
    """
    if sort_by == SortMode.DATE:
        return sorted(matches, key=lambda m: m.posted_at, reverse=True)

    if sort_by == SortMode.SALARY:
        return sorted(
            matches,
            key=lambda m: parse_salary_amount(m.salary or m.stipend),
            reverse=True,
        )

    by_recency = sorted(matches, key=lambda m: m.posted_at, reverse=True)
    return sorted(by_recency, key=lambda m: m.advanced_match_score, reverse=True)
