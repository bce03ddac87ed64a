"""
In-memory profile and job stores.

Used by the test suite and by the CLI's ``--data`` option, which loads
a JSON fixture of the form ``{"profiles": [...], "jobs": [...]}``.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Iterable, Optional

from jobmatch.data.models import (
    CandidateProfile,
    FieldFrequency,
    JobListing,
    JobQuery,
)
from jobmatch.utils.constants import STATISTICS_FIELDS
from jobmatch.utils.logger import get_logger

from .base import JobStore, ProfileStore

logger = get_logger(__name__)


class InMemoryProfileStore(ProfileStore):
    """ProfileStore backed by a list, kept in insertion order."""

    def __init__(self, profiles: Iterable[CandidateProfile] = ()) -> None:
        self._profiles = list(profiles)

    def get_by_id(self, profile_id: str) -> Optional[CandidateProfile]:
        for profile in self._profiles:
            if profile.id_str == str(profile_id):
                return profile
        return None

    def query_by_eligibility(
        self,
        qualifications: list[str],
        streams: list[str],
        graduation_years: list[int],
        limit: int,
    ) -> list[CandidateProfile]:
        results = []
        for profile in self._profiles:
            if qualifications and profile.qualification not in qualifications:
                continue
            if streams and profile.stream not in streams:
                continue
            if graduation_years and profile.graduation_year not in graduation_years:
                continue
            results.append(profile)
            if len(results) >= limit:
                break
        return results

    def count_all(self) -> int:
        return len(self._profiles)

    def top_field_frequencies(self, field: str, k: int) -> list[FieldFrequency]:
        if field not in STATISTICS_FIELDS:
            raise ValueError(f"Unsupported statistics field: {field}")

        counts = Counter(
            str(value)
            for value in (getattr(p, field) for p in self._profiles)
            if value not in (None, "")
        )
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [FieldFrequency(value=value, count=count) for value, count in ranked[:k]]


class InMemoryJobStore(JobStore):
    """JobStore backed by a list."""

    def __init__(self, jobs: Iterable[JobListing] = ()) -> None:
        self._jobs = list(jobs)

    def get_by_id(self, job_id: str) -> Optional[JobListing]:
        for job in self._jobs:
            if job.id_str == str(job_id):
                return job
        return None

    def query_active(self, query: JobQuery) -> list[JobListing]:
        listings = sorted(
            (job for job in self._jobs if query.matches(job)),
            key=lambda job: job.posted_at,
            reverse=True,
        )
        end = query.skip + query.limit if query.limit else None
        return listings[query.skip:end]

    def count_active(self) -> int:
        return sum(1 for job in self._jobs if job.is_active)


def load_memory_stores(path: str | Path) -> tuple[InMemoryProfileStore, InMemoryJobStore]:
    """
    Build in-memory stores from a JSON fixture file.

    Args:
        path: File containing ``profiles`` and ``jobs`` arrays. Documents
            use the same field names as the MongoDB collections.

    Returns:
        Tuple of (profile store, job store)
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Data file not found: {path}")

    with path.open(encoding="utf-8") as f:
        payload = json.load(f)

    profiles = [CandidateProfile.model_validate(doc) for doc in payload.get("profiles", [])]
    jobs = [JobListing.model_validate(doc) for doc in payload.get("jobs", [])]
    logger.info(f"Loaded {len(profiles)} profiles and {len(jobs)} jobs from {path}")

    return InMemoryProfileStore(profiles), InMemoryJobStore(jobs)
