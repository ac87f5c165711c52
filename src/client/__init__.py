"""HTTP client for the Task Board API."""

from .session import ClientSession
from .task_board_client import TaskBoardApiError, TaskBoardClient, TaskBoardClientError, TaskBoardTimeoutError

__all__ = [
    "ClientSession",
    "TaskBoardApiError",
    "TaskBoardClient",
    "TaskBoardClientError",
    "TaskBoardTimeoutError",
]
