"""
Job application record: statuses, validation schemas and serialization.

A job lives in exactly one of four status columns. Payloads are validated
with pydantic before they reach MongoDB; unknown fields are dropped.
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from .error_handling import JobValidationError


class JobStatus(str, Enum):
    """Board columns, in display order."""

    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFER_RECEIVED = "Offer Received"
    REJECTED = "Rejected"


STATUSES: List[str] = [status.value for status in JobStatus]
DEFAULT_STATUS = JobStatus.APPLIED.value

# Fields a client may write. Everything else in a payload is ignored.
EDITABLE_FIELDS = ("company", "role", "dateApplied", "status")


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def parse_date(value: Any) -> date:
    """
    Parse a calendar date from a date, datetime or ISO-8601 string.

    Accepts "2024-01-15" as well as full datetimes such as
    "2024-01-15T00:00:00.000Z"; the time part is discarded.

    Raises:
        ValueError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("dateApplied is required")
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    raise ValueError(f"Invalid date: {value!r}")


def format_date(value: Any) -> str:
    """Normalize a date-like value to the canonical YYYY-MM-DD form."""
    return parse_date(value).isoformat()


def date_to_storage(value: date) -> datetime:
    """BSON has no date type: store midnight UTC as a naive datetime."""
    return datetime.combine(value, time.min)


def _required(value: Any, info: ValidationInfo) -> Any:
    """An explicit null counts as a missing field, not a malformed one."""
    if value is None:
        raise PydanticCustomError("missing", "Path `{field}` is required.", {"field": info.field_name})
    return value


class JobFields(BaseModel):
    """Complete, validated job record (without store-managed fields)."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    company: str = Field(..., min_length=1, description="Company name")
    role: str = Field(..., min_length=1, description="Role / position title")
    dateApplied: date = Field(default_factory=today_utc, description="Date the application was sent")
    status: JobStatus = Field(default=JobStatus.APPLIED, description="Board column")

    @field_validator("company", "role", mode="before")
    @classmethod
    def reject_null_text(cls, value: Any, info: ValidationInfo) -> Any:
        return _required(value, info)

    @field_validator("dateApplied", mode="before")
    @classmethod
    def coerce_date(cls, value: Any, info: ValidationInfo) -> date:
        return parse_date(_required(value, info))

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any, info: ValidationInfo) -> Any:
        _required(value, info)
        if value not in STATUSES:
            raise PydanticCustomError(
                "enum",
                "`{value}` is not a valid status. Must be one of: {allowed}",
                {"value": str(value), "allowed": ", ".join(STATUSES)},
            )
        return value

    def to_document(self) -> Dict[str, Any]:
        """Render as a MongoDB document body."""
        return {
            "company": self.company,
            "role": self.role,
            "dateApplied": date_to_storage(self.dateApplied),
            "status": self.status.value,
        }


def validate_new_job(payload: Any) -> Dict[str, Any]:
    """
    Validate a create payload and return the document to insert.

    Raises:
        JobValidationError: If the payload is not an object or fails validation
    """
    if not isinstance(payload, dict):
        raise JobValidationError.for_field("body", "Request body must be a JSON object")
    try:
        return JobFields(**payload).to_document()
    except ValidationError as e:
        raise JobValidationError.from_pydantic(e)


def validate_job_update(existing: Dict[str, Any], payload: Any) -> Dict[str, Any]:
    """
    Merge a partial update into an existing document and re-validate it.

    Only the editable fields present in the payload are returned, so
    untouched fields are never rewritten.

    Args:
        existing: Stored job document
        payload: Partial update (e.g. {"status": "Interviewing"})

    Returns:
        Dict of validated fields to $set

    Raises:
        JobValidationError: If the payload is not an object or the merged record is invalid
    """
    if not isinstance(payload, dict):
        raise JobValidationError.for_field("body", "Request body must be a JSON object")

    changes = {field: payload[field] for field in EDITABLE_FIELDS if field in payload}
    merged = {field: existing.get(field) for field in EDITABLE_FIELDS}
    merged.update(changes)

    try:
        document = JobFields(**merged).to_document()
    except ValidationError as e:
        raise JobValidationError.from_pydantic(e)

    return {field: document[field] for field in changes}


def serialize_job(job: Dict[str, Any]) -> Dict[str, Any]:
    """
    Serialize a MongoDB job document for JSON response.

    Handles ObjectId conversion and date formatting.
    """
    result = {}
    for key, value in job.items():
        if isinstance(value, ObjectId):
            result[key] = str(value)
        elif isinstance(value, datetime):
            result[key] = value.isoformat()
        elif isinstance(value, date):
            result[key] = value.isoformat()
        else:
            result[key] = value
    return result


def to_object_id(job_id: Optional[str]) -> Optional[ObjectId]:
    """Return the ObjectId for job_id, or None if it is not a valid identifier."""
    if not job_id or not ObjectId.is_valid(job_id):
        return None
    return ObjectId(job_id)
