"""
Tests for jobmatch.data.models: Pydantic data model validation.
"""

from datetime import datetime

import pytest
from bson import ObjectId
from pydantic import ValidationError

from jobmatch.data.models import (
    AdvancedMatchFilters,
    AdvancedMatchOptions,
    AdvancedJobMatch,
    CandidateProfile,
    JobEligibility,
    JobListing,
    JobQuery,
    MatchResult,
    RecommendationPreferences,
    parse_salary_amount,
)
from jobmatch.utils.constants import JobType, SortMode, WorkMode


# ── parse_salary_amount ──────────────────────────────────────────────────────


class TestParseSalaryAmount:
    @pytest.mark.parametrize("text,expected", [
        ("₹6,00,000 per annum", 600000.0),
        ("12 LPA", 12.0),
        ("15000/month", 15000.0),
        ("4.5 lakh", 4.5),
        ("Negotiable", 0.0),
        ("", 0.0),
        (None, 0.0),
    ])
    def test_parse(self, text, expected):
        assert parse_salary_amount(text) == expected


# ── CandidateProfile ─────────────────────────────────────────────────────────


class TestCandidateProfile:
    def test_loads_mongo_document(self):
        oid = ObjectId()
        profile = CandidateProfile.model_validate({
            "_id": oid,
            "user_id": "u1",
            "qualification": " B.Tech ",
            "stream": "CSE",
            "graduation_year": 2024,
            "gpa_or_percentage": 8.2,
            "resume_url": "ignored",
        })
        assert profile.id == oid
        assert profile.id_str == str(oid)
        assert profile.qualification == "B.Tech"

    def test_missing_fields_default_empty(self):
        profile = CandidateProfile(qualification=None)
        assert profile.qualification == ""
        assert profile.stream == ""
        assert profile.graduation_year is None
        assert profile.id_str == ""

    def test_string_id_converted(self):
        oid = ObjectId()
        profile = CandidateProfile(_id=str(oid))
        assert profile.id == oid

    def test_gpa_out_of_range(self):
        with pytest.raises(ValidationError):
            CandidateProfile(gpa_or_percentage=120)

    def test_percentage_accepted(self):
        assert CandidateProfile(gpa_or_percentage=82.5).gpa_or_percentage == 82.5

    def test_summary(self, make_profile):
        summary = make_profile(gpa=7.9).summary()
        assert summary.qualification == "B.Tech"
        assert summary.gpa == 7.9


# ── JobEligibility / JobListing ──────────────────────────────────────────────


class TestJobEligibility:
    def test_requires_non_empty_sets(self):
        with pytest.raises(ValidationError):
            JobEligibility(qualifications=[], streams=["CSE"], graduation_years=[2024])

    def test_negative_min_gpa_rejected(self):
        with pytest.raises(ValidationError):
            JobEligibility(qualifications=["B.Tech"], streams=["CSE"], graduation_years=[2024], min_gpa=-1)

    def test_earliest_graduation_year(self):
        eligibility = JobEligibility(qualifications=["B.Tech"], streams=["CSE"], graduation_years=[2025, 2023])
        assert eligibility.earliest_graduation_year == 2023
        assert eligibility.min_gpa is None


class TestJobListing:
    def test_enum_values_stored(self, make_job):
        job = make_job(type=JobType.INTERNSHIP, work_mode=WorkMode.HYBRID)
        assert job.type == "internship"
        assert job.work_mode == "hybrid"

    def test_invalid_work_mode_rejected(self, make_eligibility):
        with pytest.raises(ValidationError):
            JobListing(
                title="X",
                organization="Y",
                type="job",
                work_mode="moon",
                eligibility=make_eligibility(),
                posted_at=datetime(2025, 1, 1),
                application_deadline=datetime(2025, 2, 1),
            )

    def test_compensation_prefers_salary(self, make_job):
        job = make_job(salary="10 LPA", stipend="20000")
        assert job.compensation == "10 LPA"
        assert job.compensation_amount == 10.0
        assert make_job(stipend="20000").compensation_amount == 20000.0

    def test_is_open(self, make_job, now):
        assert make_job().is_open(now)
        assert not make_job(deadline_in_days=-1).is_open(now)
        assert not make_job(is_active=False).is_open(now)

    def test_days_since_posted(self, make_job, now):
        assert make_job(posted_days_ago=4).days_since_posted(now) == 4

    def test_aware_timestamps_stored_as_naive_utc(self, make_eligibility):
        job = JobListing(
            title="X",
            organization="Y",
            type=JobType.JOB,
            work_mode=WorkMode.REMOTE,
            eligibility=make_eligibility(),
            posted_at="2025-01-01T10:00:00+05:30",
            application_deadline="2025-02-01T00:00:00Z",
        )
        assert job.posted_at == datetime(2025, 1, 1, 4, 30)
        assert job.posted_at.tzinfo is None
        assert job.application_deadline == datetime(2025, 2, 1)
        assert job.is_open(datetime(2025, 1, 15))


# ── JobQuery ─────────────────────────────────────────────────────────────────


class TestJobQuery:
    def test_empty_query_matches_active(self, make_job):
        assert JobQuery().matches(make_job())
        assert not JobQuery().matches(make_job(is_active=False))

    def test_deadline(self, make_job, now):
        query = JobQuery(deadline_after=now)
        assert query.matches(make_job(deadline_in_days=1))
        assert not query.matches(make_job(deadline_in_days=0))

    def test_salary_bounds(self, make_job):
        query = JobQuery(min_salary=10, max_salary=100)
        assert query.has_salary_bounds
        assert query.matches(make_job(salary="50"))
        assert not query.matches(make_job(salary="500"))
        assert not query.matches(make_job())

    def test_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            JobQuery(limit=0)


# ── Results and requests ─────────────────────────────────────────────────────


class TestResultsAndRequests:
    def test_match_result_rejects_negative_score(self):
        with pytest.raises(ValidationError):
            MatchResult(subject_id="x", score=-1)

    def test_advanced_score_capped_at_100(self, make_job):
        job = make_job()
        with pytest.raises(ValidationError):
            AdvancedJobMatch(
                job_id=job.id_str,
                title=job.title,
                organization=job.organization,
                type=job.type,
                work_mode=job.work_mode,
                advanced_match_score=101,
                application_deadline=job.application_deadline,
                posted_at=job.posted_at,
            )

    def test_request_defaults(self):
        preferences = RecommendationPreferences()
        assert preferences.job_types == []
        assert preferences.min_score is None

        options = AdvancedMatchOptions()
        assert options.offset == 0
        assert options.sort_by == SortMode.RELEVANCE

    def test_sort_mode_from_string(self):
        assert AdvancedMatchOptions(sort_by="salary").sort_by == SortMode.SALARY

    def test_negative_salary_filter_rejected(self):
        with pytest.raises(ValidationError):
            AdvancedMatchFilters(min_salary=-5)
