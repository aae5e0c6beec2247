"""
HTTP client for the tracker JSON API.

Every failure, transport or HTTP, surfaces as TrackerApiError so callers
have one exception to handle.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from src.common.config import Config

logger = logging.getLogger(__name__)


class TrackerApiError(Exception):
    """
    A request to the tracker API failed.

    Attributes:
        status_code: HTTP status (None for transport errors)
        message: Server message or transport error description
        field_errors: Field-level validation messages (400 responses)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        field_errors: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.field_errors = field_errors or {}
        super().__init__(message)

    def describe(self) -> str:
        """Human-readable description, listing each invalid field."""
        if self.field_errors:
            details = "".join(
                f"\n\t- {field}: {message}" for field, message in self.field_errors.items()
            )
            return f"Validation Failed: Check the following fields: {details}"
        return self.message


class TrackerClient:
    """Thin wrapper over the /jobs endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: API root including the prefix (default: Config.TRACKER_API_URL)
            timeout: Request timeout in seconds (default: Config.REQUEST_TIMEOUT)
            session: Optional requests session (for connection reuse / testing)
        """
        self.base_url = (base_url or Config.TRACKER_API_URL).rstrip("/")
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def list_jobs(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/jobs")

    def create_job(self, job: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/jobs", json=job)

    def get_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/jobs/{job_id}")

    def update_job(self, job_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/jobs/{job_id}", json=changes)

    def delete_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/jobs/{job_id}")

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"Sending request: {method} {url}")

        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise TrackerApiError(f"Request timed out: {method} {path}")
        except requests.exceptions.ConnectionError:
            raise TrackerApiError(f"Cannot connect to tracker API at {self.base_url}")
        except requests.exceptions.RequestException as e:
            raise TrackerApiError(f"Request failed: {e}")

        if not response.ok:
            raise self._error_from_response(response)

        # 204 or an empty 200: nothing to decode
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            raise TrackerApiError(
                f"Invalid JSON in response to {method} {path}",
                status_code=response.status_code,
            )

    @staticmethod
    def _error_from_response(response: requests.Response) -> TrackerApiError:
        try:
            body = response.json()
        except ValueError:
            return TrackerApiError(
                f"Server responded with status {response.status_code} but no details.",
                status_code=response.status_code,
            )

        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or f"Server responded with status {response.status_code}"
        field_errors = {}
        errors = body.get("errors")
        if isinstance(errors, dict):
            for field, detail in errors.items():
                if isinstance(detail, dict):
                    field_errors[field] = detail.get("message", "invalid")
                else:
                    field_errors[field] = str(detail)

        return TrackerApiError(message, status_code=response.status_code, field_errors=field_errors)
