"""
Candidate-job matching engine.

Ranks jobs for a candidate (forward matching), candidates for a job
(reverse matching), runs filtered and sorted advanced queries, and
reports population statistics. Every call reads a fresh snapshot from
the profile and job stores and keeps no state between calls.
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, Optional

from jobmatch.core.exceptions import JobNotFoundError, ProfileNotFoundError
from jobmatch.data.models import (
    AdvancedJobMatch,
    AdvancedMatchFilters,
    AdvancedMatchOptions,
    CandidateProfile,
    JobListing,
    JobMatch,
    JobQuery,
    MatchingStatistics,
    RecommendationPreferences,
    UserMatch,
    utc_now,
)
from jobmatch.data.repositories import (
    JobRepository,
    JobStore,
    ProfileRepository,
    ProfileStore,
)
from jobmatch.utils.config import MatchingSettings, get_settings
from jobmatch.utils.constants import (
    PLACEHOLDER_AVERAGE_MATCH_SCORE,
    REVERSE_MATCH_PREFETCH_FACTOR,
    MatchingEfficiency,
    MatchScoreLevel,
)
from jobmatch.utils.logger import get_logger

from .advanced import (
    calculate_advanced_score,
    generate_detailed_match_reasons,
    sort_advanced_matches,
)
from .scoring import compute_match_score

logger = get_logger(__name__)


@contextmanager
def _log_failure(operation: str, **context) -> Iterator[None]:
    """Log a failed operation with its context and re-raise."""
    try:
        yield
    except Exception as e:
        logger.error(f"{operation} failed | {context} | {e}")
        raise


class MatchingEngine:
    """
    Engine for scoring and ranking candidates and job listings.

    Uses the score primitive for every pair:
    - Forward matching ranks listings for a profile, GPA is a scored factor
    - Reverse matching ranks profiles for a listing, GPA is a hard gate
    - Advanced matching adds caller filters, bonuses and sort modes
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        job_store: JobStore,
        settings: Optional[MatchingSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the matching engine.

        Args:
            profile_store: Read access to candidate profiles
            job_store: Read access to job listings
            settings: Default limits; taken from the app settings if omitted
            clock: Returns the current naive UTC time
        """
        self.profile_store = profile_store
        self.job_store = job_store
        self.settings = settings or get_settings().matching
        self.clock = clock or utc_now

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _get_profile(self, profile_id: str) -> CandidateProfile:
        profile = self.profile_store.get_by_id(profile_id)
        if profile is None:
            raise ProfileNotFoundError(profile_id)
        return profile

    def _get_job(self, job_id: str) -> JobListing:
        job = self.job_store.get_by_id(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    # -------------------------------------------------------------------------
    # Forward Matching
    # -------------------------------------------------------------------------

    def recommend_jobs_for_user(
        self,
        profile_id: str,
        preferences: Optional[RecommendationPreferences] = None,
    ) -> list[JobMatch]:
        """
        Recommend open listings for a candidate.

        Args:
            profile_id: Candidate profile id
            preferences: Job types, work modes, minimum score and result cap

        Returns:
            Listings scoring at least the minimum, best first

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        preferences = preferences or RecommendationPreferences()
        min_score = (
            preferences.min_score
            if preferences.min_score is not None
            else self.settings.min_match_score
        )
        max_results = preferences.max_results or self.settings.max_recommendations

        with _log_failure("Get job recommendations", profile_id=profile_id):
            profile = self._get_profile(profile_id)
            listings = self.job_store.query_active(JobQuery(
                job_types=preferences.job_types,
                work_modes=preferences.work_modes,
                deadline_after=self.clock(),
            ))

        logger.debug(f"Scoring {len(listings)} listings for profile {profile_id}")
        matches = [
            match
            for match in (self._to_job_match(profile, listing) for listing in listings)
            if match.score >= min_score
        ]

        ranked = self.rank_job_matches(matches)[:max_results]
        logger.info(f"Recommended {len(ranked)} jobs for profile {profile_id}")
        return ranked

    def find_matching_jobs_for_user(
        self,
        profile_id: str,
        limit: Optional[int] = None,
    ) -> list[JobMatch]:
        """
        Rank every active listing with a non-zero score for a candidate.

        Unlike recommendations this applies no deadline, preference or
        minimum-score filter.

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        limit = limit or self.settings.matching_jobs_limit

        with _log_failure("Find matching jobs for user", profile_id=profile_id):
            profile = self._get_profile(profile_id)
            listings = self.job_store.query_active(JobQuery())

        matches = [
            match
            for match in (self._to_job_match(profile, listing) for listing in listings)
            if match.score > 0
        ]

        ranked = self.rank_job_matches(matches)[:limit]
        logger.info(f"Found {len(ranked)} matching jobs for profile {profile_id}")
        return ranked

    def _to_job_match(self, profile: CandidateProfile, listing: JobListing) -> JobMatch:
        scored = compute_match_score(profile, listing.eligibility)
        return JobMatch(
            subject_id=listing.id_str,
            score=scored.score,
            reasons=scored.reasons,
            score_level=MatchScoreLevel.from_score(scored.score),
            title=listing.title,
            organization=listing.organization,
            type=listing.type,
            work_mode=listing.work_mode,
            posted_at=listing.posted_at,
            application_deadline=listing.application_deadline,
            salary=listing.salary,
            stipend=listing.stipend,
        )

    @staticmethod
    def rank_job_matches(matches: list[JobMatch]) -> list[JobMatch]:
        """
        Sort job matches by score, most recently posted first among equals.

        Args:
            matches: Unordered job matches

        Returns:
            New sorted list with highest scores first
        """
        return sorted(matches, key=lambda m: (m.score, m.posted_at), reverse=True)

    # -------------------------------------------------------------------------
    # Reverse Matching
    # -------------------------------------------------------------------------

    def match_users_for_job(
        self,
        job_id: str,
        max_results: Optional[int] = None,
    ) -> list[UserMatch]:
        """
        Rank candidates who qualify for a listing.

        Profiles are pre-filtered on qualification, stream and graduation
        year by the store. A profile below the listing's GPA floor, or
        without a GPA when a floor is set, is excluded before scoring.

        Args:
            job_id: Job listing id
            max_results: Result cap

        Returns:
            Qualifying candidates, best first

        Raises:
            JobNotFoundError: If the listing does not exist
        """
        max_results = max_results or self.settings.max_user_matches

        with _log_failure("Find matching users for job", job_id=job_id):
            job = self._get_job(job_id)
            eligibility = job.eligibility
            candidates = self.profile_store.query_by_eligibility(
                qualifications=eligibility.qualifications,
                streams=eligibility.streams,
                graduation_years=eligibility.graduation_years,
                limit=max_results * REVERSE_MATCH_PREFETCH_FACTOR,
            )

        logger.debug(f"Pre-filter returned {len(candidates)} profiles for job {job_id}")
        matches = []
        for profile in candidates:
            if not self._meets_gpa_floor(profile, eligibility.min_gpa):
                continue

            scored = compute_match_score(profile, eligibility)
            matches.append(UserMatch(
                subject_id=profile.subject_id,
                score=scored.score,
                reasons=scored.reasons,
                score_level=MatchScoreLevel.from_score(scored.score),
                name=profile.name,
                email=profile.email,
                profile=profile.summary(),
            ))

        ranked = sorted(matches, key=lambda m: m.score, reverse=True)[:max_results]
        logger.info(f"Matched {len(ranked)} users for job {job_id}")
        return ranked

    @staticmethod
    def _meets_gpa_floor(profile: CandidateProfile, min_gpa: Optional[float]) -> bool:
        if min_gpa is None:
            return True
        return profile.gpa_or_percentage is not None and profile.gpa_or_percentage >= min_gpa

    # -------------------------------------------------------------------------
    # Advanced Matching
    # -------------------------------------------------------------------------

    def advanced_match(
        self,
        requester_id: str,
        filters: Optional[AdvancedMatchFilters] = None,
        options: Optional[AdvancedMatchOptions] = None,
    ) -> list[AdvancedJobMatch]:
        """
        Score one page of filtered listings with bonuses and sort it.

        The page is cut by the store before scoring, so ordering holds
        within a page only.

        Args:
            requester_id: Profile id of the candidate being matched
            filters: Listing filters; also drive the bonus pass
            options: Page limit/offset and sort mode

        Returns:
            The sorted page of advanced matches

        Raises:
            ProfileNotFoundError: If the profile does not exist
        """
        filters = filters or AdvancedMatchFilters()
        options = options or AdvancedMatchOptions()
        now = self.clock()

        with _log_failure("Advanced job matching", requester_id=requester_id):
            profile = self._get_profile(requester_id)
            listings = self.job_store.query_active(JobQuery(
                job_types=filters.job_types,
                work_modes=filters.work_modes,
                qualifications=filters.qualifications,
                streams=filters.streams,
                min_salary=filters.min_salary,
                max_salary=filters.max_salary,
                deadline_after=now,
                skip=options.offset,
                limit=options.limit or self.settings.advanced_page_limit,
            ))

        matches = []
        for listing in listings:
            scored = compute_match_score(profile, listing.eligibility)
            matches.append(AdvancedJobMatch(
                job_id=listing.id_str,
                title=listing.title,
                organization=listing.organization,
                type=listing.type,
                work_mode=listing.work_mode,
                salary=listing.salary,
                stipend=listing.stipend,
                base_match_score=scored.score,
                advanced_match_score=calculate_advanced_score(
                    scored.score, profile, listing, filters, now
                ),
                match_reasons=generate_detailed_match_reasons(profile, listing, scored, now),
                application_deadline=listing.application_deadline,
                posted_at=listing.posted_at,
            ))

        ranked = sort_advanced_matches(matches, options.sort_by)
        logger.info(
            f"Advanced matching returned {len(ranked)} jobs for {requester_id} "
            f"(sort={options.sort_by.value}, offset={options.offset})"
        )
        return ranked

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def matching_statistics(self) -> MatchingStatistics:
        """
        Aggregate counts and top qualification/stream distributions.

        The average score and efficiency are fixed placeholders.
        """
        top_k = self.settings.statistics_top_k

        with _log_failure("Get matching statistics"):
            stats = MatchingStatistics(
                total_users=self.profile_store.count_all(),
                total_jobs=self.job_store.count_active(),
                average_match_score=PLACEHOLDER_AVERAGE_MATCH_SCORE,
                top_qualifications=self.profile_store.top_field_frequencies("qualification", top_k),
                top_streams=self.profile_store.top_field_frequencies("stream", top_k),
                matching_efficiency=MatchingEfficiency.HIGH,
                last_updated=self.clock(),
            )

        logger.info(f"Matching statistics: {stats.total_users} users, {stats.total_jobs} jobs")
        return stats


def create_matching_engine(
    profile_store: Optional[ProfileStore] = None,
    job_store: Optional[JobStore] = None,
) -> MatchingEngine:
    """Build an engine, defaulting to the MongoDB repositories."""
    return MatchingEngine(
        profile_store=profile_store or ProfileRepository(),
        job_store=job_store or JobRepository(),
    )
