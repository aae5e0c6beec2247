"""
Repository settings and the process-wide job repository.

The API shares one repository (and so one MongoDB connection pool) across
requests. Nothing connects until the first query.
"""

import os
import logging
from dataclasses import dataclass
from typing import List, Optional

from src.common.config import env_int

from .base import JobRepositoryInterface

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000


@dataclass
class RepositoryConfig:
    """Where the jobs collection lives and how long to wait for it."""

    mongodb_uri: str
    database: str = "job_tracker"
    collection: str = "jobs"
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """
        Read MONGODB_URI, MONGODB_DATABASE, MONGODB_COLLECTION and
        MONGODB_TIMEOUT_MS from the environment.

        Raises:
            ValueError: If MONGODB_URI is not set
        """
        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI environment variable is required")

        problems: List[str] = []
        timeout_ms = env_int("MONGODB_TIMEOUT_MS", DEFAULT_TIMEOUT_MS, problems)
        for problem in problems:
            logger.warning(f"{problem}; using {DEFAULT_TIMEOUT_MS}")

        return cls(
            mongodb_uri=mongodb_uri,
            database=os.getenv("MONGODB_DATABASE", "job_tracker"),
            collection=os.getenv("MONGODB_COLLECTION", "jobs"),
            timeout_ms=timeout_ms,
        )


_repository: Optional[JobRepositoryInterface] = None


def get_job_repository() -> JobRepositoryInterface:
    """
    Return the shared job repository, creating it on first use.

    Raises:
        ValueError: If MONGODB_URI is not configured
    """
    global _repository

    if _repository is None:
        settings = RepositoryConfig.from_env()

        from .mongo_repository import MongoJobRepository
        _repository = MongoJobRepository(
            mongodb_uri=settings.mongodb_uri,
            database=settings.database,
            collection=settings.collection,
            timeout_ms=settings.timeout_ms,
        )
        logger.info(f"Job repository ready for {settings.database}.{settings.collection}")

    return _repository


def reset_repository() -> None:
    """Forget the shared repository and close its cached connection."""
    global _repository

    if _repository is not None:
        from .mongo_repository import MongoJobRepository
        if isinstance(_repository, MongoJobRepository):
            MongoJobRepository.reset_connection()

    _repository = None
