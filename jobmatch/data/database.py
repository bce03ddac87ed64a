"""
Database connection manager for the jobmatch engine.

Provides MongoDB connection management through a synchronous PyMongo
client. The engine only reads; index management is offered for the
operator running ``jobmatch init-db``.
"""

from typing import Any, Optional
from urllib.parse import quote_plus

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from jobmatch.utils.config import get_settings
from jobmatch.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages the MongoDB client used by the profile and job stores.

    Implements singleton pattern for connection reuse.
    """

    _instance: Optional["DatabaseManager"] = None
    _client: Optional[MongoClient] = None

    def __new__(cls) -> "DatabaseManager":
        """Ensure singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize database manager with settings."""
        if hasattr(self, "_initialized") and self._initialized:
            return

        self._settings = get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._initialized = True

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Credentials are URL-encoded; hosts containing shell or query
        metacharacters are rejected.
        """
        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{db_settings.port}"

    # -------------------------------------------------------------------------
    # Client Access
    # -------------------------------------------------------------------------

    def get_client(self) -> MongoClient:
        """Get or create the MongoDB client."""
        if self._client is None:
            logger.info("Creating MongoDB client")
            try:
                self._client = MongoClient(
                    self._uri,
                    serverSelectionTimeoutMS=5000,
                    connectTimeoutMS=5000,
                    maxPoolSize=50,
                    minPoolSize=5,
                )
            except Exception as e:
                self._client = None
                logger.error(f"Failed to create client: {e}")
                raise
        return self._client

    def get_database(self) -> Database:
        """Get database instance."""
        return self.get_client()[self._db_name]

    def get_collection(self, collection_name: str) -> Any:
        """Get a collection by name."""
        return self.get_database()[collection_name]

    def check_connection(self) -> bool:
        """Check if the connection is healthy."""
        try:
            self.get_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Connection check failed: {e}")
            self._client = None
            return False

    def close(self) -> None:
        """Close the client connection."""
        if self._client:
            logger.info("Closing MongoDB client")
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> None:
        """Create the indexes the matching queries rely on."""
        logger.info("Ensuring database indexes")
        db_settings = self._settings.database

        # Reverse-match pre-filter and statistics grouping
        profiles = self.get_collection(db_settings.profiles_collection)
        profiles.create_index("qualification")
        profiles.create_index("stream")
        profiles.create_index("graduation_year")
        profiles.create_index("gpa_or_percentage")
        profiles.create_index(
            [("qualification", ASCENDING), ("stream", ASCENDING), ("graduation_year", ASCENDING)]
        )
        profiles.create_index(
            [("qualification", ASCENDING), ("stream", ASCENDING), ("gpa_or_percentage", ASCENDING)]
        )

        # Active-listing queries
        jobs = self.get_collection(db_settings.jobs_collection)
        jobs.create_index([("is_active", ASCENDING), ("application_deadline", ASCENDING)])
        jobs.create_index("type")
        jobs.create_index("work_mode")
        jobs.create_index("eligibility.qualifications")
        jobs.create_index("eligibility.streams")
        jobs.create_index([("posted_at", DESCENDING)])

        logger.info("Database indexes created successfully")


def get_database_manager() -> DatabaseManager:
    """Get the database manager instance."""
    return DatabaseManager()
