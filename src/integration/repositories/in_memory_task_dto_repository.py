"""In-memory task store implementation (for testing/development)."""

import copy
import dataclasses
import logging
from datetime import UTC, datetime

from neuroglia.hosting.abstractions import ApplicationBuilderBase

from domain.models import TaskMutation, TaskScope
from domain.repositories.task_dto_repository import TaskDtoRepository
from integration.models.task_dto import TaskDto

logger = logging.getLogger(__name__)


class InMemoryTaskDtoRepository(TaskDtoRepository):
    """
    In-memory implementation of TaskDtoRepository.

    Mirrors the semantics of the MongoDB implementation: scoped filters,
    single-step mutations and copies on the way in and out so callers never
    share state with the store. None of the mutating methods await while
    holding a document, so each one is atomic with respect to the event loop.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, TaskDto] = {}

    async def get_async(self, id: str) -> TaskDto | None:
        task = self._tasks.get(id)
        return copy.deepcopy(task) if task else None

    async def get_all_async(self) -> list[TaskDto]:
        return await self.find_async(TaskScope.unrestricted())

    async def add_async(self, entity: TaskDto) -> TaskDto:
        now = datetime.now(UTC)
        entity.created_at = entity.created_at or now
        entity.updated_at = entity.updated_at or now
        self._tasks[entity.id] = copy.deepcopy(entity)
        logger.debug(f"Added task {entity.id}")
        return entity

    async def update_async(self, entity: TaskDto) -> TaskDto:
        entity.updated_at = datetime.now(UTC)
        self._tasks[entity.id] = copy.deepcopy(entity)
        return entity

    async def remove_async(self, id: str) -> None:
        self._tasks.pop(id, None)

    async def contains_async(self, id: str) -> bool:
        return id in self._tasks

    async def _do_add_async(self, entity: TaskDto) -> TaskDto:
        """Internal add implementation required by Repository base class."""
        return await self.add_async(entity)

    async def _do_update_async(self, entity: TaskDto) -> TaskDto:
        """Internal update implementation required by Repository base class."""
        return await self.update_async(entity)

    async def _do_remove_async(self, id: str) -> None:
        """Internal remove implementation required by Repository base class."""
        await self.remove_async(id)

    async def find_async(self, scope: TaskScope) -> list[TaskDto]:
        tasks = [copy.deepcopy(task) for task in self._tasks.values() if scope.matches(task)]
        return sorted(tasks, key=lambda t: t.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)

    async def get_scoped_async(self, task_id: str, scope: TaskScope) -> TaskDto | None:
        task = self._tasks.get(task_id)
        if task is None or not scope.matches(task, task_id):
            return None
        return copy.deepcopy(task)

    async def apply_mutation_async(self, task_id: str, scope: TaskScope, mutation: TaskMutation) -> TaskDto | None:
        task = self._tasks.get(task_id)
        if task is None or not scope.matches(task, task_id):
            return None

        for name, value in mutation.set_fields.items():
            setattr(task, name, copy.deepcopy(value))
        for sequence, item in mutation.appends.items():
            getattr(task, sequence).append(copy.deepcopy(item))
        return copy.deepcopy(task)

    async def toggle_subtask_async(self, task_id: str, subtask_id: str, scope: TaskScope) -> TaskDto | None:
        task = self._tasks.get(task_id)
        if task is None or not scope.matches(task, task_id):
            return None
        if not any(subtask.id == subtask_id for subtask in task.subtasks):
            return None

        task.subtasks = [dataclasses.replace(s, completed=not s.completed) if s.id == subtask_id else s for s in task.subtasks]
        task.updated_at = datetime.now(UTC)
        return copy.deepcopy(task)

    async def delete_scoped_async(self, task_id: str, scope: TaskScope) -> bool:
        task = self._tasks.get(task_id)
        if task is None or not scope.matches(task, task_id):
            return False
        del self._tasks[task_id]
        logger.debug(f"Removed task {task_id}")
        return True

    def clear_all(self) -> None:
        """Clear all tasks (for testing)."""
        self._tasks.clear()

    @staticmethod
    def configure(builder: ApplicationBuilderBase) -> None:
        """
        Configure InMemoryTaskDtoRepository in the service collection.

        Args:
            builder: The application builder
        """
        repository = InMemoryTaskDtoRepository()

        builder.services.add_singleton(InMemoryTaskDtoRepository, singleton=repository)
        builder.services.add_singleton(TaskDtoRepository, singleton=repository)

        logger.info("Configured InMemoryTaskDtoRepository")
