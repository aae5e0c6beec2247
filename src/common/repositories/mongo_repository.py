"""
MongoDB Job Repository

Wraps PyMongo access to the jobs collection behind JobRepositoryInterface.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConfigurationError, PyMongoError, ServerSelectionTimeoutError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .base import JobRepositoryInterface, WriteResult

logger = logging.getLogger(__name__)


class MongoJobRepository(JobRepositoryInterface):
    """
    MongoDB-backed job repository.

    Connection Management:
    - Class-level MongoClient shared by every instance (one pool per process)
    - Established lazily on first use and verified with a ping
    - Concurrent first callers share one attempt (class-level lock)
    - Transient connection failures (DNS, server selection) are retried
      with exponential backoff
    - If connecting still fails the cached client is discarded so the
      next call starts a fresh attempt

    Error Handling:
    - Fail-fast: All errors propagate to caller
    """

    _client: Optional[MongoClient] = None
    _collection: Optional[Collection] = None
    _connect_lock = threading.Lock()

    def __init__(
        self,
        mongodb_uri: str,
        database: str = "job_tracker",
        collection: str = "jobs",
        timeout_ms: int = 5000,
    ):
        """
        Initialize repository with connection parameters.

        Args:
            mongodb_uri: MongoDB connection string
            database: Database name (default: "job_tracker")
            collection: Collection name (default: "jobs")
            timeout_ms: Server selection / connect / socket timeout
        """
        self._mongodb_uri = mongodb_uri
        self._database_name = database
        self._collection_name = collection
        self._timeout_ms = timeout_ms

    @retry(
        retry=retry_if_exception_type((ConfigurationError, ServerSelectionTimeoutError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    def _connect(self) -> Collection:
        client = MongoClient(
            self._mongodb_uri,
            serverSelectionTimeoutMS=self._timeout_ms,
            connectTimeoutMS=self._timeout_ms,
            socketTimeoutMS=self._timeout_ms,
        )
        try:
            client.admin.command("ping")
        except PyMongoError:
            client.close()
            raise
        MongoJobRepository._client = client
        return client[self._database_name][self._collection_name]

    def _get_collection(self) -> Collection:
        """
        Get the MongoDB collection, connecting if needed.

        Returns:
            MongoDB collection instance

        Raises:
            PyMongoError: If the connection cannot be established
        """
        if MongoJobRepository._collection is not None:
            return MongoJobRepository._collection

        # Concurrent first requests wait for a single connection attempt
        with MongoJobRepository._connect_lock:
            if MongoJobRepository._collection is None:
                try:
                    MongoJobRepository._collection = self._connect()
                except PyMongoError as e:
                    logger.error(f"MongoDB connection failed: {e}")
                    MongoJobRepository.reset_connection()
                    raise
                logger.info(
                    f"MongoDB repository connected: {self._database_name}.{self._collection_name}"
                )
            return MongoJobRepository._collection

    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        collection = self._get_collection()
        return collection.find_one(filter)

    def find(
        self,
        filter: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
    ) -> List[Dict[str, Any]]:
        collection = self._get_collection()
        cursor = collection.find(filter)
        if sort:
            cursor = cursor.sort(sort)
        return list(cursor)

    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        collection = self._get_collection()
        result = collection.insert_one(document)

        return WriteResult(
            matched_count=0,
            modified_count=0,
            inserted_id=str(result.inserted_id) if result.inserted_id else None,
        )

    def update_one(self, filter: Dict[str, Any], update: Dict[str, Any]) -> WriteResult:
        collection = self._get_collection()
        result = collection.update_one(filter, update)

        return WriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        collection = self._get_collection()
        result = collection.delete_one(filter)

        return WriteResult(
            matched_count=result.deleted_count,
            modified_count=result.deleted_count,
        )

    def ping(self) -> bool:
        """Quick reachability check used by the health endpoint."""
        try:
            self._get_collection()
            MongoJobRepository._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    @classmethod
    def reset_connection(cls) -> None:
        """
        Reset the cached connection.

        Used after a failed connection attempt, for testing, or for
        connection recovery.
        """
        if cls._client:
            cls._client.close()
        cls._client = None
        cls._collection = None
        logger.info("MongoDB repository connection reset")
