"""
Kanban board state.

Holds every card and applies add/edit/delete/move with optimistic updates:
local state changes first, then the API call is made. When the call fails
the user is warned through the notify callback and the local change is
rolled back, so the board never silently diverges from the server.

Usage:
    board = BoardState(TrackerClient(), notify=print, confirm=ask_yes_no)
    board.reload()
    board.move(job_id, "Interviewing")      # drop on a column
    board.move(job_id, other_job_id)        # drop on another card
"""

import copy
from typing import Any, Callable, Dict, List, Optional

from src.board.client import TrackerApiError, TrackerClient
from src.board.form import JobForm
from src.common.job_model import STATUSES, format_date
from src.common.logger import get_logger

logger = get_logger(__name__, context="board")

DELETE_CONFIRMATION = "Are you sure you want to delete this job application?"


def group_by_status(jobs: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Group cards into columns.

    Every status is present (possibly empty); cards keep their list order.
    """
    columns: Dict[str, List[Dict[str, Any]]] = {status: [] for status in STATUSES}
    for job in jobs:
        columns.setdefault(job.get("status"), []).append(job)
    return columns


def normalize_card(job: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a card with dateApplied reduced to YYYY-MM-DD."""
    card = dict(job)
    if card.get("dateApplied"):
        try:
            card["dateApplied"] = format_date(card["dateApplied"])
        except ValueError:
            logger.warning(f"Card {card.get('_id')} has unreadable dateApplied {card['dateApplied']!r}")
    return card


def _log_warning(message: str) -> None:
    logger.warning(message)


def _decline(message: str) -> bool:
    """Default confirmation: without an interactive prompt, deletions are declined."""
    return False


class BoardState:
    """Client-side board: the full card list plus the operations that change it."""

    def __init__(
        self,
        client: TrackerClient,
        jobs: Optional[List[Dict[str, Any]]] = None,
        notify: Optional[Callable[[str], None]] = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        """
        Args:
            client: API client used to persist changes
            jobs: Initial cards (e.g. from a previous list call)
            notify: Called with a user-facing warning when a request fails
            confirm: Called with a question; must return True to proceed with a delete
        """
        self.client = client
        self.jobs: List[Dict[str, Any]] = [normalize_card(job) for job in jobs or []]
        self.notify = notify or _log_warning
        self.confirm = confirm or _decline

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def by_status(self) -> Dict[str, List[Dict[str, Any]]]:
        return group_by_status(self.jobs)

    def find(self, job_id: str) -> Optional[Dict[str, Any]]:
        return next((job for job in self.jobs if job.get("_id") == job_id), None)

    def resolve_drop_status(self, over_id: Optional[str]) -> Optional[str]:
        """
        Status a card takes when released over over_id.

        over_id is either a column (status name) or another card, whose
        column is inherited. Returns None for an unknown target.
        """
        if over_id is None:
            return None
        if over_id in STATUSES:
            return over_id
        target = self.find(over_id)
        return target.get("status") if target else None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def reload(self) -> bool:
        """Replace local state with the server's list."""
        try:
            jobs = self.client.list_jobs()
        except TrackerApiError as e:
            self.notify(f"Failed to load jobs: {e.describe()}")
            return False
        self.jobs = [normalize_card(job) for job in jobs]
        return True

    def refresh(self, job_id: str) -> Optional[Dict[str, Any]]:
        """
        Re-fetch one card from the server.

        A card the server no longer has is dropped from the board.

        Returns:
            The fresh card, or None if it could not be loaded
        """
        try:
            job = self.client.get_job(job_id)
        except TrackerApiError as e:
            if e.status_code == 404:
                self.jobs = [card for card in self.jobs if card.get("_id") != job_id]
                self.notify(f"Job {job_id} no longer exists.")
            else:
                self.notify(f"Failed to load job. ({e.describe()})")
            return None

        card = normalize_card(job)
        if self.find(job_id) is None:
            self.jobs.insert(0, card)
        else:
            self._replace(job_id, card)
        return card

    def move(self, job_id: str, over_id: Optional[str]) -> bool:
        """
        Handle a drag release of job_id over over_id.

        A drop outside any target, on an unknown target, or onto the card's
        current column is a no-op: no state change and no request.

        Returns:
            True if the move was persisted
        """
        card = self.find(job_id)
        if card is None:
            return False

        new_status = self.resolve_drop_status(over_id)
        if not new_status or new_status == card.get("status"):
            return False

        previous = copy.deepcopy(card)
        self._replace(job_id, {**card, "status": new_status})

        try:
            saved = self.client.update_job(job_id, {"status": new_status})
        except TrackerApiError as e:
            self._replace(job_id, previous)
            logger.info(f"Rolled back move of {job_id} to {new_status}")
            self.notify(f"Failed to update status on server. Please check your connection. ({e.describe()})")
            return False

        self._replace(job_id, normalize_card(saved))
        return True

    def open_form(self, job_id: Optional[str] = None) -> JobForm:
        """Empty form for a new card, or one pre-populated from job_id."""
        if job_id is None:
            return JobForm.for_new()
        card = self.find(job_id)
        if card is None:
            raise KeyError(job_id)
        return JobForm.for_edit(card)

    def save(self, form: JobForm) -> Optional[Dict[str, Any]]:
        """
        Submit the form: create when it has no job_id, update otherwise.

        Returns:
            The saved card, or None if the request failed
        """
        try:
            payload = form.to_payload()
        except ValueError as e:
            self.notify(f"Failed to save job: invalid date ({e})")
            return None

        if form.is_editing:
            return self._update(form.job_id, payload)
        return self._create(payload)

    def delete(self, job_id: str) -> bool:
        """
        Delete a card after interactive confirmation.

        Returns:
            True if the card was deleted on the server
        """
        card = self.find(job_id)
        if card is None:
            return False
        if not self.confirm(DELETE_CONFIRMATION):
            return False

        index = self.jobs.index(card)
        self.jobs.pop(index)

        try:
            self.client.delete_job(job_id)
        except TrackerApiError as e:
            self.jobs.insert(index, card)
            logger.info(f"Restored {job_id} after failed delete")
            self.notify(f"Failed to delete job. ({e.describe()})")
            return False
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _create(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            saved = self.client.create_job(payload)
        except TrackerApiError as e:
            self.notify(f"Failed to save job. {e.describe()}")
            return None

        card = normalize_card(saved)
        self.jobs.insert(0, card)
        return card

    def _update(self, job_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        card = self.find(job_id)
        if card is None:
            self.notify("Cannot update job: it is no longer on the board.")
            return None

        previous = copy.deepcopy(card)
        self._replace(job_id, {**card, **payload})

        try:
            saved = self.client.update_job(job_id, payload)
        except TrackerApiError as e:
            self._replace(job_id, previous)
            logger.info(f"Rolled back edit of {job_id}")
            self.notify(f"Failed to save job. {e.describe()}")
            return None

        card = normalize_card(saved)
        self._replace(job_id, card)
        return card

    def _replace(self, job_id: str, card: Dict[str, Any]) -> None:
        self.jobs = [card if job.get("_id") == job_id else job for job in self.jobs]
