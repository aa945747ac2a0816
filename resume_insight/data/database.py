"""
Database connection manager for Resume Insight.

Provides MongoDB connection management through a shared PyMongo client.
Extraction runs execute on worker threads, and a single MongoClient is
thread-safe and pooled, so one client serves the whole process.
"""

from contextlib import contextmanager
from typing import Any, Optional
from urllib.parse import quote_plus

from pymongo import ASCENDING, TEXT, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from resume_insight.utils.config import get_settings
from resume_insight.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages MongoDB database connections.

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

        Security: URL-encodes credentials to prevent injection attacks.
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
                    minPoolSize=1,
                )
            except Exception as e:
                self._client = None
                logger.error(f"Failed to create MongoDB client: {e}")
                raise
        return self._client

    def get_database(self) -> Database:
        """Get database instance."""
        return self.get_client()[self._db_name]

    def get_collection(self, collection_name: str) -> Any:
        """Get a collection by name."""
        return self.get_database()[collection_name]

    @contextmanager
    def session(self):
        """Context manager for a database session."""
        client = self.get_client()
        session = client.start_session()
        try:
            yield session
        finally:
            session.end_session()

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
        """Close client connection."""
        if self._client:
            logger.info("Closing MongoDB client")
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> None:
        """Create indexes used by extraction status tracking and search."""
        logger.info("Ensuring database indexes")

        resumes = self.get_collection("resumes")
        resumes.create_index("user_id")
        resumes.create_index("extracted_data.extraction_status")
        resumes.create_index("skills")
        resumes.create_index("experience_years")
        resumes.create_index("location")
        resumes.create_index("file.file_hash")
        resumes.create_index("created_at")
        resumes.create_index([("searchable_text", TEXT)])

        users = self.get_collection("users")
        users.create_index([("email", ASCENDING)], unique=True, sparse=True)
        users.create_index("created_at")

        logger.info("Database indexes created successfully")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_db() -> Database:
    """Convenience function to get the database."""
    return get_database_manager().get_database()
