"""
Match result and request models.

Results are built per call and handed back to the caller; the engine
never stores them.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from jobmatch.utils.constants import (
    JobType,
    MatchingEfficiency,
    MatchReasonType,
    MatchScoreLevel,
    SortMode,
    WorkMode,
)

from .base import EmbeddedModel, utc_now
from .profile import ProfileSummary


# -------------------------------------------------------------------------
# Results
# -------------------------------------------------------------------------


class MatchResult(EmbeddedModel):
    """Score and explanation for one subject (a job or a candidate)."""

    subject_id: str
    score: int = Field(0, ge=0)
    reasons: list[str] = Field(default_factory=list)
    score_level: MatchScoreLevel = MatchScoreLevel.POOR


class JobMatch(MatchResult):
    """A listing ranked for a candidate, with its summary fields."""

    title: str
    organization: str
    type: JobType
    work_mode: WorkMode
    posted_at: datetime
    application_deadline: datetime
    salary: Optional[str] = None
    stipend: Optional[str] = None

    @property
    def job_id(self) -> str:
        return self.subject_id


class UserMatch(MatchResult):
    """A candidate ranked for a listing."""

    name: Optional[str] = None
    email: Optional[str] = None
    profile: ProfileSummary = Field(default_factory=ProfileSummary)

    @property
    def user_id(self) -> str:
        return self.subject_id


class DetailedMatchReason(EmbeddedModel):
    """A typed reason with the sub-score it contributes to the UI breakdown."""

    type: MatchReasonType
    message: str
    score: int = Field(0, ge=0)


class AdvancedJobMatch(EmbeddedModel):
    """A listing scored by the advanced matcher."""

    job_id: str
    title: str
    organization: str
    type: JobType
    work_mode: WorkMode
    salary: Optional[str] = None
    stipend: Optional[str] = None
    base_match_score: int = Field(0, ge=0)
    advanced_match_score: int = Field(0, ge=0, le=100)
    match_reasons: list[DetailedMatchReason] = Field(default_factory=list)
    application_deadline: datetime
    posted_at: datetime


class FieldFrequency(EmbeddedModel):
    """How many profiles share one value of a field."""

    value: str
    count: int = Field(0, ge=0)


class MatchingStatistics(EmbeddedModel):
    """Population-level counts and distributions."""

    total_users: int = 0
    total_jobs: int = 0
    average_match_score: float = 0.0
    top_qualifications: list[FieldFrequency] = Field(default_factory=list)
    top_streams: list[FieldFrequency] = Field(default_factory=list)
    matching_efficiency: MatchingEfficiency = MatchingEfficiency.HIGH
    last_updated: datetime = Field(default_factory=utc_now)


# -------------------------------------------------------------------------
# Requests
# -------------------------------------------------------------------------


class RecommendationPreferences(BaseModel):
    """Candidate preferences for forward matching. Empty lists mean "all"."""

    job_types: list[JobType] = Field(default_factory=list)
    work_modes: list[WorkMode] = Field(default_factory=list)
    min_score: Optional[int] = Field(default=None, ge=0)
    max_results: Optional[int] = Field(default=None, ge=1)


class AdvancedMatchFilters(BaseModel):
    """Caller-supplied filters for advanced matching."""

    job_types: list[JobType] = Field(default_factory=list)
    work_modes: list[WorkMode] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    streams: list[str] = Field(default_factory=list)
    min_salary: Optional[float] = Field(default=None, ge=0)
    max_salary: Optional[float] = Field(default=None, ge=0)
    experience_level: Optional[str] = None  # accepted for API compatibility, not applied


class AdvancedMatchOptions(BaseModel):
    """Pagination and ordering for advanced matching."""

    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)
    sort_by: SortMode = SortMode.RELEVANCE
