"""
Candidate profile repository.

MongoDB implementation of ``ProfileStore`` over the profile
subsystem's collection.
"""

from typing import Any, Optional

from pymongo.collection import Collection

from jobmatch.data.models import CandidateProfile, FieldFrequency
from jobmatch.utils.config import get_settings
from jobmatch.utils.constants import STATISTICS_FIELDS
from jobmatch.utils.logger import get_logger

from .base import BaseRepository, ProfileStore

logger = get_logger(__name__)


class ProfileRepository(BaseRepository[CandidateProfile], ProfileStore):
    """Repository for candidate profile documents."""

    def __init__(self, collection: Optional[Collection] = None) -> None:
        super().__init__(collection)
        self._collection_name = get_settings().database.profiles_collection

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def model_class(self) -> type[CandidateProfile]:
        return CandidateProfile

    # -------------------------------------------------------------------------
    # ProfileStore
    # -------------------------------------------------------------------------

    def get_by_id(self, profile_id: str) -> Optional[CandidateProfile]:
        """Get a profile by its ID."""
        return self.find_by_id(profile_id)

    def query_by_eligibility(
        self,
        qualifications: list[str],
        streams: list[str],
        graduation_years: list[int],
        limit: int,
    ) -> list[CandidateProfile]:
        """Get profiles passing the qualification/stream/year pre-filter."""
        query: dict[str, Any] = {}

        if qualifications:
            query["qualification"] = {"$in": list(qualifications)}

        if streams:
            query["stream"] = {"$in": list(streams)}

        if graduation_years:
            query["graduation_year"] = {"$in": list(graduation_years)}

        logger.debug(f"Profile eligibility query: {query} (limit {limit})")
        return self.find(query, limit=limit)

    def count_all(self) -> int:
        """Count every profile."""
        return self.count()

    def top_field_frequencies(self, field: str, k: int) -> list[FieldFrequency]:
        """Group profiles by a field and return the k most common values."""
        if field not in STATISTICS_FIELDS:
            raise ValueError(f"Unsupported statistics field: {field}")

        pipeline = [
            {"$match": {field: {"$nin": [None, ""]}}},
            {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
            {"$limit": k},
        ]
        results = self.aggregate(pipeline)
        return [FieldFrequency(value=str(r["_id"]), count=r["count"]) for r in results]
