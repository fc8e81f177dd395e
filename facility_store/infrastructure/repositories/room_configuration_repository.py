"""Room Configuration Repository - Infrastructure Layer"""

from typing import Any, Dict

from facility_store.domain.entities.facility import RoomConfiguration
from facility_store.domain.repositories.room_configuration_repository import (
    IRoomConfigurationRepository,
)
from facility_store.domain.services.entity_validator import (
    validate_room_configuration,
)
from facility_store.infrastructure.repositories.base import DocumentRepository
from facility_store.infrastructure.repositories.documents import (
    room_configuration_from_document,
    room_configuration_to_document,
)
from facility_store.shared import Collection


class RoomConfigurationRepository(
    DocumentRepository[RoomConfiguration], IRoomConfigurationRepository
):
    """Document store implementation of the RoomConfigurationRepository."""

    COLLECTION = Collection.ROOM_CONFIGURATIONS
    KIND = "room configuration"

    def _to_document(self, entity: RoomConfiguration) -> Dict[str, Any]:
        return room_configuration_to_document(entity)

    def _to_entity(self, document: Dict[str, Any]) -> RoomConfiguration:
        return room_configuration_from_document(document)

    async def create(self, entity: RoomConfiguration) -> RoomConfiguration:
        validate_room_configuration(entity)
        created = await self._insert(entity)
        await self._announce("created", created.id)
        return created

    async def update(
        self, entity_id: str, entity: RoomConfiguration
    ) -> RoomConfiguration:
        validate_room_configuration(entity)
        updated = await self._save(entity_id, entity)
        await self._announce("updated", updated.id, previous_id=entity_id)
        return updated

    async def delete(self, entity_id: str) -> None:
        await self._remove(entity_id)
        await self._announce("deleted", entity_id)
