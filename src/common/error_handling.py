"""
Centralized error handling for the job application tracker.

Every failure that reaches the HTTP boundary is one of three kinds:

- JobValidationError: field-level problems with a payload (HTTP 400)
- JobNotFoundError: the identifier does not name a stored job (HTTP 404)
- anything else: an internal error (HTTP 500)

error_response() maps an exception to the JSON body and status code
the API returns, so endpoints share one response shape per kind.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from pydantic import ValidationError


VALIDATION_FAILED = "Validation failed"
JOB_NOT_FOUND = "Job not found"


class TrackerError(Exception):
    """Base class for tracker errors. Unclassified failures map to HTTP 500."""

    status_code = 500


@dataclass
class FieldError:
    """A single field-level validation problem."""

    path: str
    message: str
    kind: str = "invalid"

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "kind": self.kind, "path": self.path}


class JobValidationError(TrackerError):
    """Payload failed schema validation."""

    status_code = 400

    def __init__(self, errors: Dict[str, FieldError]):
        self.errors = errors
        super().__init__(
            f"{VALIDATION_FAILED}: "
            + ", ".join(f"{path}: {err.message}" for path, err in errors.items())
        )

    @classmethod
    def from_pydantic(cls, error: ValidationError) -> "JobValidationError":
        """
        Build field-level errors from a pydantic ValidationError.

        Only the first problem per field is kept. Errors without a location
        (model-level) are reported under "body".
        """
        errors: Dict[str, FieldError] = {}
        for issue in error.errors():
            path = ".".join(str(part) for part in issue.get("loc", ()) if part != "__root__")
            path = path or "body"
            if path in errors:
                continue
            errors[path] = FieldError(
                path=path,
                message=_clean_pydantic_message(issue.get("msg", "Invalid value")),
                kind=_error_kind(issue.get("type", "")),
            )
        return cls(errors)

    @classmethod
    def for_field(cls, path: str, message: str, kind: str = "invalid") -> "JobValidationError":
        return cls({path: FieldError(path=path, message=message, kind=kind)})


class JobNotFoundError(TrackerError):
    """No job matches the given identifier."""

    status_code = 404

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"{JOB_NOT_FOUND}: {job_id}")


def _clean_pydantic_message(message: str) -> str:
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    return message


def _error_kind(error_type: str) -> str:
    """Collapse pydantic error types into a small set of kinds."""
    if error_type in ("missing", "string_too_short"):
        return "required"
    if error_type in ("enum", "literal_error"):
        return "enum"
    if error_type.startswith("date") or error_type.startswith("datetime"):
        return "date"
    return "invalid"


def error_response(error: Exception, failure_message: str) -> Tuple[Dict[str, Any], int]:
    """
    Map an exception to the API's JSON error body and HTTP status.

    Args:
        error: Exception raised while serving a request
        failure_message: Message for unclassified failures (e.g. "Error fetching jobs")

    Returns:
        Tuple of (JSON-serializable body, HTTP status code)
    """
    if isinstance(error, JobValidationError):
        return {
            "message": VALIDATION_FAILED,
            "errors": {path: err.to_dict() for path, err in error.errors.items()},
        }, error.status_code

    if isinstance(error, JobNotFoundError):
        return {"message": JOB_NOT_FOUND}, error.status_code

    return {"message": failure_message}, 500
