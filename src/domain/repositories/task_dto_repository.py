"""Abstract repository for the task store."""

from abc import ABC, abstractmethod

from neuroglia.data.infrastructure.abstractions import Repository

from domain.models import TaskMutation, TaskScope
from integration.models.task_dto import TaskDto


class TaskDtoRepository(Repository[TaskDto, str], ABC):
    """Abstract repository for task documents.

    Every method that reads or changes an existing task takes a TaskScope so
    that the authorization predicate is part of the store query itself. A
    scoped miss is reported as None/False without telling whether the task
    is absent or merely out of scope.
    """

    @abstractmethod
    async def find_async(self, scope: TaskScope) -> list[TaskDto]:
        """Retrieve the tasks visible through the scope, newest first."""
        pass

    @abstractmethod
    async def get_scoped_async(self, task_id: str, scope: TaskScope) -> TaskDto | None:
        """Retrieve one task if it is visible through the scope."""
        pass

    @abstractmethod
    async def apply_mutation_async(self, task_id: str, scope: TaskScope, mutation: TaskMutation) -> TaskDto | None:
        """Atomically apply field sets and sequence appends; returns the updated task."""
        pass

    @abstractmethod
    async def toggle_subtask_async(self, task_id: str, subtask_id: str, scope: TaskScope) -> TaskDto | None:
        """Atomically flip one subtask's completed flag; returns the updated task."""
        pass

    @abstractmethod
    async def delete_scoped_async(self, task_id: str, scope: TaskScope) -> bool:
        """Delete the task if it is visible through the scope."""
        pass
