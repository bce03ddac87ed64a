"""
Shared test fixtures for the jobmatch test suite.

Sets environment variables before any jobmatch imports so settings load
in testing mode without file logging, then provides factory fixtures for
profiles and job listings and an engine over in-memory stores.
"""

import os

# === Set environment BEFORE any jobmatch imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "job_board_test")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")
os.environ.setdefault("LOG_CONSOLE_OUTPUT", "false")

from datetime import datetime, timedelta
from typing import Any, Optional

import pytest
from bson import ObjectId

from jobmatch.core.matching import MatchingEngine
from jobmatch.data.models import CandidateProfile, JobEligibility, JobListing
from jobmatch.data.repositories import InMemoryJobStore, InMemoryProfileStore
from jobmatch.utils.config import MatchingSettings
from jobmatch.utils.constants import JobType, WorkMode

# Fixed "current time" shared by every engine under test
NOW = datetime(2025, 6, 1, 12, 0, 0)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_profile():
    """Factory that returns a callable to build CandidateProfile models."""

    def _factory(
        qualification: Optional[str] = "B.Tech",
        stream: Optional[str] = "CSE",
        graduation_year: Optional[int] = 2024,
        gpa: Optional[float] = 8.0,
        name: Optional[str] = "Asha Rao",
        email: Optional[str] = "asha@example.com",
        user_id: Optional[str] = None,
        **kwargs: Any,
    ) -> CandidateProfile:
        return CandidateProfile(
            _id=kwargs.pop("id", None) or ObjectId(),
            user_id=user_id,
            name=name,
            email=email,
            qualification=qualification,
            stream=stream,
            graduation_year=graduation_year,
            gpa_or_percentage=gpa,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_eligibility():
    """Factory that returns a callable to build JobEligibility models."""

    def _factory(
        qualifications: Optional[list[str]] = None,
        streams: Optional[list[str]] = None,
        graduation_years: Optional[list[int]] = None,
        min_gpa: Optional[float] = 7.5,
    ) -> JobEligibility:
        return JobEligibility(
            qualifications=qualifications or ["B.Tech"],
            streams=streams or ["CSE"],
            graduation_years=graduation_years or [2024],
            min_gpa=min_gpa,
        )

    return _factory


@pytest.fixture
def make_job(make_eligibility):
    """Factory that returns a callable to build JobListing models."""

    def _factory(
        title: str = "Backend Engineer",
        organization: str = "Acme",
        type: JobType = JobType.JOB,
        work_mode: WorkMode = WorkMode.ONSITE,
        eligibility: Optional[JobEligibility] = None,
        posted_days_ago: int = 10,
        deadline_in_days: int = 30,
        salary: Optional[str] = None,
        stipend: Optional[str] = None,
        is_active: bool = True,
        **kwargs: Any,
    ) -> JobListing:
        return JobListing(
            _id=kwargs.pop("id", None) or ObjectId(),
            title=title,
            organization=organization,
            type=type,
            work_mode=work_mode,
            eligibility=eligibility or make_eligibility(),
            posted_at=NOW - timedelta(days=posted_days_ago),
            application_deadline=NOW + timedelta(days=deadline_in_days),
            salary=salary,
            stipend=stipend,
            is_active=is_active,
            **kwargs,
        )

    return _factory


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def matching_settings():
    return MatchingSettings()


@pytest.fixture
def make_engine(matching_settings):
    """Factory that returns a callable to build an engine over in-memory stores."""

    def _factory(
        profiles: Optional[list[CandidateProfile]] = None,
        jobs: Optional[list[JobListing]] = None,
        settings: Optional[MatchingSettings] = None,
    ) -> MatchingEngine:
        return MatchingEngine(
            profile_store=InMemoryProfileStore(profiles or []),
            job_store=InMemoryJobStore(jobs or []),
            settings=settings or matching_settings,
            clock=lambda: NOW,
        )

    return _factory
