"""
Client-side Kanban board: API client, board state manager and job form.
"""

from src.board.client import TrackerApiError, TrackerClient
from src.board.form import JobForm
from src.board.state import BoardState, group_by_status

__all__ = [
    "BoardState",
    "JobForm",
    "TrackerApiError",
    "TrackerClient",
    "group_by_status",
]
