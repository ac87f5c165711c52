"""TaskMutation value object."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TaskMutation:
    """A single atomic change to one task document.

    `set_fields` replaces scalar fields; `appends` pushes exactly one item onto
    each named sequence (`comments`, `subtasks`). Stores must apply both parts
    in one operation so that concurrent appends never overwrite each other.
    """

    set_fields: dict[str, Any] = field(default_factory=dict)
    appends: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.set_fields and not self.appends

    def with_set(self, **fields: Any) -> "TaskMutation":
        return TaskMutation(set_fields={**self.set_fields, **fields}, appends=dict(self.appends))

    def with_append(self, sequence: str, item: Any) -> "TaskMutation":
        return TaskMutation(set_fields=dict(self.set_fields), appends={**self.appends, sequence: item})
