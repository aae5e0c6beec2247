"""
Data access for the jobs collection.

    from src.common.repositories import get_job_repository

    repo = get_job_repository()
    repo.update_one({"_id": ObjectId(job_id)}, {"$set": {"status": "Interviewing"}})
"""

from .base import JobRepositoryInterface, WriteResult
from .config import RepositoryConfig, get_job_repository, reset_repository

__all__ = [
    "JobRepositoryInterface",
    "RepositoryConfig",
    "WriteResult",
    "get_job_repository",
    "reset_repository",
]
