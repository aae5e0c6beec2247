"""
Services module for job application records.

Services sit between the HTTP layer and the repository and raise the
tracker error taxonomy (validation / not found) on failure.
"""

from src.services.job_service import JobService

__all__ = [
    "JobService",
]
