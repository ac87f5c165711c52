"""TaskScope value object.

A scoped filter: the query predicate narrowed to the tasks a given
principal may act on.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TaskScope:
    """Restriction applied to every task read, update and delete.

    `assignee_id` of None means the scope is unrestricted (administrators).
    Otherwise only tasks whose `assigned_to` equals `assignee_id` are visible.
    """

    assignee_id: str | None = None

    @staticmethod
    def unrestricted() -> "TaskScope":
        return TaskScope()

    @staticmethod
    def assigned_to(user_id: str) -> "TaskScope":
        return TaskScope(assignee_id=user_id)

    @property
    def is_unrestricted(self) -> bool:
        return self.assignee_id is None

    def to_filter(self, task_id: str | None = None) -> dict[str, Any]:
        """Render the scope as a MongoDB filter document.

        Args:
            task_id: Optional task id to narrow the filter to a single document

        Returns:
            Filter suitable for find/find_one_and_update/find_one_and_delete
        """
        filter_doc: dict[str, Any] = {}
        if task_id is not None:
            filter_doc["id"] = task_id
        if self.assignee_id is not None:
            filter_doc["assigned_to"] = self.assignee_id
        return filter_doc

    def matches(self, task: Any, task_id: str | None = None) -> bool:
        """Evaluate the same predicate as `to_filter` against an in-memory task."""
        if task_id is not None and getattr(task, "id", None) != task_id:
            return False
        if self.assignee_id is not None and getattr(task, "assigned_to", None) != self.assignee_id:
            return False
        return True
