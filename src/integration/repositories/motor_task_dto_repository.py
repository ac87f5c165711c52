"""MongoDB repository implementation for the task store."""

import datetime
import logging
from typing import Any

from neuroglia.data.infrastructure.mongo import MotorRepository
from pymongo import ReturnDocument

from domain.models import TaskMutation, TaskScope
from domain.repositories.task_dto_repository import TaskDtoRepository
from integration.models.task_dto import TaskDto

from .document_values import to_document_value

log = logging.getLogger(__name__)


def build_update_document(mutation: TaskMutation) -> dict[str, Any]:
    """Translate a TaskMutation into a single `$set`/`$push` update document."""
    update: dict[str, Any] = {}
    if mutation.set_fields:
        update["$set"] = {name: to_document_value(value) for name, value in mutation.set_fields.items()}
    if mutation.appends:
        update["$push"] = {sequence: to_document_value(item) for sequence, item in mutation.appends.items()}
    return update


def build_toggle_subtask_pipeline(subtask_id: str, updated_at: datetime.datetime) -> list[dict[str, Any]]:
    """Aggregation-pipeline update flipping `completed` on one subtask server-side.

    The whole subtasks array is rewritten by the store in one step, so there is
    no read-modify-write window between concurrent togglers.
    """
    return [
        {
            "$set": {
                "subtasks": {
                    "$map": {
                        "input": "$subtasks",
                        "as": "subtask",
                        "in": {
                            "$cond": [
                                {"$eq": ["$$subtask.id", {"$literal": subtask_id}]},
                                {"$mergeObjects": ["$$subtask", {"completed": {"$not": ["$$subtask.completed"]}}]},
                                "$$subtask",
                            ]
                        },
                    }
                },
                "updated_at": {"$literal": to_document_value(updated_at)},
            }
        }
    ]


class MotorTaskDtoRepository(MotorRepository[TaskDto, str], TaskDtoRepository):
    """
    MongoDB-based repository for task documents.

    Extends Neuroglia's MotorRepository to inherit standard CRUD operations
    and implements TaskDtoRepository for scoped, atomic task operations.
    """

    async def find_async(self, scope: TaskScope) -> list[TaskDto]:
        cursor = self.collection.find(scope.to_filter()).sort("created_at", -1)

        entities = []
        async for doc in cursor:
            entity = self._deserialize_entity(doc)
            if entity:
                entities.append(entity)

        return entities

    async def get_scoped_async(self, task_id: str, scope: TaskScope) -> TaskDto | None:
        doc = await self.collection.find_one(scope.to_filter(task_id))
        if doc:
            return self._deserialize_entity(doc)
        return None

    async def apply_mutation_async(self, task_id: str, scope: TaskScope, mutation: TaskMutation) -> TaskDto | None:
        """Apply the mutation with find_one_and_update against the scoped filter."""
        if mutation.is_empty:
            return await self.get_scoped_async(task_id, scope)

        doc = await self.collection.find_one_and_update(
            scope.to_filter(task_id),
            build_update_document(mutation),
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            log.debug(f"Scoped update matched no task (id={task_id}, scope={scope})")
            return None
        return self._deserialize_entity(doc)

    async def toggle_subtask_async(self, task_id: str, subtask_id: str, scope: TaskScope) -> TaskDto | None:
        filter_doc = scope.to_filter(task_id)
        filter_doc["subtasks.id"] = subtask_id
        doc = await self.collection.find_one_and_update(
            filter_doc,
            build_toggle_subtask_pipeline(subtask_id, datetime.datetime.now(datetime.UTC)),
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return self._deserialize_entity(doc)

    async def delete_scoped_async(self, task_id: str, scope: TaskScope) -> bool:
        doc = await self.collection.find_one_and_delete(scope.to_filter(task_id))
        return doc is not None
