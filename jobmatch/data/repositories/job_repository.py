"""
Job listing repository.

MongoDB implementation of ``JobStore`` over the job-posting
subsystem's collection.
"""

from typing import Any, Optional

from pymongo.collection import Collection

from jobmatch.data.models import JobListing, JobQuery
from jobmatch.utils.config import get_settings
from jobmatch.utils.logger import get_logger

from .base import BaseRepository, JobStore

logger = get_logger(__name__)


class JobRepository(BaseRepository[JobListing], JobStore):
    """Repository for job listing documents."""

    def __init__(self, collection: Optional[Collection] = None) -> None:
        super().__init__(collection)
        self._collection_name = get_settings().database.jobs_collection

    @property
    def collection_name(self) -> str:
        return self._collection_name

    @property
    def model_class(self) -> type[JobListing]:
        return JobListing

    # -------------------------------------------------------------------------
    # Query Building
    # -------------------------------------------------------------------------

    @staticmethod
    def build_query(query: JobQuery) -> dict[str, Any]:
        """
        Translate a JobQuery into a MongoDB filter.

        Salary bounds are not part of the filter: salaries are display
        strings, so they are checked after loading.
        """
        mongo_query: dict[str, Any] = {"is_active": True}

        if query.deadline_after is not None:
            mongo_query["application_deadline"] = {"$gt": query.deadline_after}

        if query.job_types:
            mongo_query["type"] = {"$in": [t.value for t in query.job_types]}

        if query.work_modes:
            mongo_query["work_mode"] = {"$in": [m.value for m in query.work_modes]}

        if query.qualifications:
            mongo_query["eligibility.qualifications"] = {"$in": list(query.qualifications)}

        if query.streams:
            mongo_query["eligibility.streams"] = {"$in": list(query.streams)}

        return mongo_query

    # -------------------------------------------------------------------------
    # JobStore
    # -------------------------------------------------------------------------

    def get_by_id(self, job_id: str) -> Optional[JobListing]:
        """Get a listing by its ID."""
        return self.find_by_id(job_id)

    def query_active(self, query: JobQuery) -> list[JobListing]:
        """Get active listings matching the query, newest first."""
        mongo_query = self.build_query(query)
        logger.debug(f"Active job query: {mongo_query} (skip {query.skip}, limit {query.limit})")

        if not query.has_salary_bounds:
            return self.find(
                mongo_query,
                skip=query.skip,
                limit=query.limit,
                sort_by="posted_at",
                sort_order=-1,
            )

        # Paginate after the salary check so pages stay full
        listings = [
            listing
            for listing in self.find(mongo_query, sort_by="posted_at", sort_order=-1)
            if query.salary_in_bounds(listing.compensation_amount)
        ]
        end = query.skip + query.limit if query.limit else None
        return listings[query.skip:end]

    def count_active(self) -> int:
        """Count listings flagged active."""
        return self.count({"is_active": True})
