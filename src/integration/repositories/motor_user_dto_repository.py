"""MongoDB repository implementation for the user directory."""

import datetime

from neuroglia.data.infrastructure.mongo import MotorRepository
from pymongo import ReturnDocument

from domain.enums import UserRole
from domain.repositories.user_dto_repository import UserDtoRepository
from integration.models.user_dto import UserDto

from .document_values import to_document_value


class MotorUserDtoRepository(MotorRepository[UserDto, str], UserDtoRepository):
    """
    MongoDB-based repository for account documents.

    Email uniqueness is backed by the unique index created at startup by
    DatabaseInitializer.
    """

    async def get_all_async(self) -> list[UserDto]:
        cursor = self.collection.find({}).sort("name", 1)

        entities = []
        async for doc in cursor:
            entity = self._deserialize_entity(doc)
            if entity:
                entities.append(entity)

        return entities

    async def get_by_email_async(self, email: str) -> UserDto | None:
        doc = await self.collection.find_one({"email": email})
        if doc:
            return self._deserialize_entity(doc)
        return None

    async def get_many_async(self, user_ids: list[str]) -> list[UserDto]:
        if not user_ids:
            return []

        cursor = self.collection.find({"id": {"$in": list(set(user_ids))}})

        entities = []
        async for doc in cursor:
            entity = self._deserialize_entity(doc)
            if entity:
                entities.append(entity)

        return entities

    async def set_role_async(self, user_id: str, role: UserRole) -> UserDto | None:
        doc = await self.collection.find_one_and_update(
            {"id": user_id},
            {"$set": {"role": role.value, "updated_at": to_document_value(datetime.datetime.now(datetime.UTC))}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return self._deserialize_entity(doc)
