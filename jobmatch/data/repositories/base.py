"""
Store contracts and the MongoDB base repository.

The matching engine depends only on ``ProfileStore`` and ``JobStore``.
MongoDB-backed and in-memory implementations live next to this module.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from pymongo.collection import Collection

from jobmatch.data.database import get_database_manager
from jobmatch.data.models import (
    BaseDocument,
    CandidateProfile,
    FieldFrequency,
    JobListing,
    JobQuery,
)
from jobmatch.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


# -------------------------------------------------------------------------
# Store Contracts
# -------------------------------------------------------------------------


class ProfileStore(ABC):
    """Read access to candidate profiles."""

    @abstractmethod
    def get_by_id(self, profile_id: str) -> Optional[CandidateProfile]:
        """Get a profile by id, or None if it does not exist."""

    @abstractmethod
    def query_by_eligibility(
        self,
        qualifications: list[str],
        streams: list[str],
        graduation_years: list[int],
        limit: int,
    ) -> list[CandidateProfile]:
        """
        Get profiles whose qualification, stream and graduation year each
        fall in the given sets. An empty set does not restrict its field.
        """

    @abstractmethod
    def count_all(self) -> int:
        """Count every profile."""

    @abstractmethod
    def top_field_frequencies(self, field: str, k: int) -> list[FieldFrequency]:
        """Most common values of a profile field, most frequent first."""


class JobStore(ABC):
    """Read access to job listings."""

    @abstractmethod
    def get_by_id(self, job_id: str) -> Optional[JobListing]:
        """Get a listing by id, or None if it does not exist."""

    @abstractmethod
    def query_active(self, query: JobQuery) -> list[JobListing]:
        """Get active listings matching the query, newest first."""

    @abstractmethod
    def count_active(self) -> int:
        """Count listings flagged active."""


# -------------------------------------------------------------------------
# MongoDB Base Repository
# -------------------------------------------------------------------------


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing read operations over a collection.

    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, collection: Optional[Collection] = None) -> None:
        """
        Initialize repository.

        Args:
            collection: Collection to read from. Defaults to the one named
                by ``collection_name`` on the shared database manager.
        """
        self._collection = collection

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_collection(self) -> Collection:
        """Get collection instance."""
        if self._collection is None:
            self._collection = get_database_manager().get_collection(self.collection_name)
        return self._collection

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> Optional[ObjectId]:
        """Convert string to ObjectId, None when it is not a valid id."""
        if isinstance(id_value, ObjectId):
            return id_value
        if isinstance(id_value, str) and ObjectId.is_valid(id_value):
            return ObjectId(id_value)
        return None

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def find_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            logger.debug(f"Ignoring malformed {self.collection_name} id: {id_value!r}")
            return None
        document = self._get_collection().find_one({"_id": object_id})
        return self._to_model(document)

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query."""
        cursor = self._get_collection().find(query)

        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)

        return self._to_models(list(cursor))

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        return self._get_collection().count_documents(query or {})

    def aggregate(self, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Run an aggregation pipeline and return raw documents."""
        return list(self._get_collection().aggregate(pipeline))
