"""
Pydantic data models for the jobmatch engine.

This module provides the read-only projections of profiles and job
postings, and the result and request records of the matchers.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, utc_now

# Profile models
from .profile import CandidateProfile, ProfileSummary

# Job models
from .job import JobEligibility, JobListing, JobQuery, parse_salary_amount

# Match models
from .match import (
    AdvancedJobMatch,
    AdvancedMatchFilters,
    AdvancedMatchOptions,
    DetailedMatchReason,
    FieldFrequency,
    JobMatch,
    MatchingStatistics,
    MatchResult,
    RecommendationPreferences,
    UserMatch,
)

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "utc_now",
    # Profile
    "CandidateProfile",
    "ProfileSummary",
    # Job
    "JobEligibility",
    "JobListing",
    "JobQuery",
    "parse_salary_amount",
    # Match
    "AdvancedJobMatch",
    "AdvancedMatchFilters",
    "AdvancedMatchOptions",
    "DetailedMatchReason",
    "FieldFrequency",
    "JobMatch",
    "MatchingStatistics",
    "MatchResult",
    "RecommendationPreferences",
    "UserMatch",
]
