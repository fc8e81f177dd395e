"""
Device Type Repository - Infrastructure Layer

Device types are often created partially specified, ahead of their devices,
so only the ID is validated unless a deep check is requested.
"""

from typing import Any, Dict

from facility_store.domain.entities.device import DeviceType
from facility_store.domain.repositories.device_type_repository import (
    IDeviceTypeRepository,
)
from facility_store.domain.services.entity_validator import validate_device_type
from facility_store.infrastructure.repositories.base import DocumentRepository
from facility_store.infrastructure.repositories.documents import (
    device_type_from_document,
    device_type_to_document,
)
from facility_store.shared import Collection


class DeviceTypeRepository(DocumentRepository[DeviceType], IDeviceTypeRepository):
    """Document store implementation of the DeviceTypeRepository."""

    COLLECTION = Collection.DEVICE_TYPES
    KIND = "device type"

    def _to_document(self, entity: DeviceType) -> Dict[str, Any]:
        return device_type_to_document(entity)

    def _to_entity(self, document: Dict[str, Any]) -> DeviceType:
        return device_type_from_document(document)

    async def create(self, entity: DeviceType, deep: bool = False) -> DeviceType:
        validate_device_type(entity, deep=deep)
        created = await self._insert(entity)
        await self._announce("created", created.id)
        return created

    async def update(self, entity_id: str, entity: DeviceType) -> DeviceType:
        validate_device_type(entity)
        updated = await self._save(entity_id, entity)
        await self._announce("updated", updated.id, previous_id=entity_id)
        return updated

    async def delete(self, entity_id: str) -> None:
        await self._remove(entity_id)
        await self._announce("deleted", entity_id)
