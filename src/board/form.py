"""
Create/edit form for a job card.

The form is empty with defaults when adding and pre-populated when editing.
Submitting produces the API payload with the date in YYYY-MM-DD form.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from src.common.job_model import DEFAULT_STATUS, format_date, today_utc


@dataclass
class JobForm:
    """Form state. job_id is set only when editing an existing card."""

    company: str = ""
    role: str = ""
    date_applied: str = field(default_factory=lambda: today_utc().isoformat())
    status: str = DEFAULT_STATUS
    job_id: Optional[str] = None

    @classmethod
    def for_new(cls) -> "JobForm":
        return cls()

    @classmethod
    def for_edit(cls, job: Dict[str, Any]) -> "JobForm":
        """Pre-populate the form from a card."""
        return cls(
            company=job.get("company", ""),
            role=job.get("role", ""),
            date_applied=format_date(job["dateApplied"]) if job.get("dateApplied") else today_utc().isoformat(),
            status=job.get("status", DEFAULT_STATUS),
            job_id=job.get("_id"),
        )

    @property
    def is_editing(self) -> bool:
        return bool(self.job_id)

    def to_payload(self) -> Dict[str, Any]:
        """
        Build the request body.

        Raises:
            ValueError: If date_applied is not a readable date
        """
        return {
            "company": self.company,
            "role": self.role,
            "dateApplied": format_date(self.date_applied),
            "status": self.status,
        }
