"""
Job Service

Single-document CRUD over the jobs collection. Every operation touches
exactly one document (list reads the whole collection).

Failures are raised as the tracker error taxonomy:
    - JobValidationError: payload fails the schema
    - JobNotFoundError: identifier does not name a stored job
    - anything else (PyMongo errors included) propagates unchanged

Usage:
    service = JobService(get_job_repository())
    job = service.create_job({"company": "Acme", "role": "Engineer"})
    service.update_job(job["_id"], {"status": "Interviewing"})
"""

import logging
from datetime import datetime
from typing import Any, Dict, List

from pymongo import DESCENDING

from src.common.error_handling import JobNotFoundError
from src.common.job_model import (
    serialize_job,
    to_object_id,
    validate_job_update,
    validate_new_job,
)
from src.common.repositories import JobRepositoryInterface

logger = logging.getLogger(__name__)


class JobService:
    """CRUD operations for job application records."""

    def __init__(self, repository: JobRepositoryInterface):
        """
        Args:
            repository: Job repository (MongoDB in production, in-memory in tests)
        """
        self.repository = repository

    def list_jobs(self) -> List[Dict[str, Any]]:
        """Return every job, most recent application first."""
        jobs = self.repository.find({}, sort=[("dateApplied", DESCENDING)])
        return [serialize_job(job) for job in jobs]

    def create_job(self, payload: Any) -> Dict[str, Any]:
        """
        Validate and insert a new job.

        Returns:
            The created job with its identifier as a string

        Raises:
            JobValidationError: If the payload is invalid
        """
        document = validate_new_job(payload)
        now = datetime.utcnow()
        document["createdAt"] = now
        document["updatedAt"] = now

        result = self.repository.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(f"Created job {result.inserted_id} ({document['company']} / {document['role']})")
        return serialize_job(document)

    def get_job(self, job_id: str) -> Dict[str, Any]:
        """
        Raises:
            JobNotFoundError: If no job has this identifier
        """
        return serialize_job(self._find_or_raise(job_id))

    def update_job(self, job_id: str, payload: Any) -> Dict[str, Any]:
        """
        Merge a partial update into an existing job.

        Fields absent from the payload keep their stored values.

        Returns:
            The updated job

        Raises:
            JobNotFoundError: If no job has this identifier
            JobValidationError: If the merged record is invalid
        """
        existing = self._find_or_raise(job_id)
        changes = validate_job_update(existing, payload)
        changes["updatedAt"] = datetime.utcnow()

        result = self.repository.update_one({"_id": existing["_id"]}, {"$set": changes})
        if result.matched_count == 0:
            # Deleted between the read and the write
            raise JobNotFoundError(job_id)

        existing.update(changes)
        logger.info(f"Updated job {job_id}: {', '.join(k for k in changes if k != 'updatedAt') or 'no fields'}")
        return serialize_job(existing)

    def delete_job(self, job_id: str) -> None:
        """
        Raises:
            JobNotFoundError: If no job was deleted
        """
        object_id = to_object_id(job_id)
        if object_id is None:
            raise JobNotFoundError(job_id)

        result = self.repository.delete_one({"_id": object_id})
        if result.matched_count == 0:
            raise JobNotFoundError(job_id)
        logger.info(f"Deleted job {job_id}")

    def _find_or_raise(self, job_id: str) -> Dict[str, Any]:
        object_id = to_object_id(job_id)
        if object_id is None:
            raise JobNotFoundError(job_id)

        job = self.repository.find_one({"_id": object_id})
        if not job:
            raise JobNotFoundError(job_id)
        return job
