"""
Room Repository - Infrastructure Layer

A room can only be created inside an existing building. It cannot be deleted
while devices remain in it, and renaming it moves every device along.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from facility_store.domain.entities.cascade import ChildMove, RenameResult
from facility_store.domain.entities.device import Device
from facility_store.domain.entities.errors import (
    CascadePartialFailureError,
    NotFoundError,
)
from facility_store.domain.entities.facility import Room
from facility_store.domain.gateways.document_store_gateway import (
    IDocumentStoreGateway,
)
from facility_store.domain.gateways.event_publisher import IEventPublisher
from facility_store.domain.repositories.device_repository import IDeviceRepository
from facility_store.domain.repositories.room_repository import IRoomRepository
from facility_store.domain.services.cascade_engine import CascadeEngine
from facility_store.domain.services.entity_validator import validate_room
from facility_store.domain.services.identifier_scheme import (
    DEFAULT_ID_SCHEME,
    HierarchicalIdScheme,
)
from facility_store.infrastructure.database.prefix_query import PrefixQueryEngine
from facility_store.infrastructure.repositories.base import DocumentRepository
from facility_store.infrastructure.repositories.documents import (
    room_from_document,
    room_to_document,
)
from facility_store.shared import Collection, get_logger

logger = get_logger(__name__)


class RoomRepository(DocumentRepository[Room], IRoomRepository):
    """Document store implementation of the RoomRepository."""

    COLLECTION = Collection.ROOMS
    KIND = "room"

    def __init__(
        self,
        gateway: IDocumentStoreGateway,
        query_engine: PrefixQueryEngine,
        device_repository: IDeviceRepository,
        cascade_engine: CascadeEngine,
        event_publisher: Optional[IEventPublisher] = None,
        scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME,
    ):
        super().__init__(gateway, query_engine, event_publisher, scheme)
        self.device_repository = device_repository
        self.cascade_engine = cascade_engine

    def _to_document(self, entity: Room) -> Dict[str, Any]:
        return room_to_document(entity)

    def _to_entity(self, document: Dict[str, Any]) -> Room:
        return room_from_document(document)

    async def create(self, entity: Room) -> Room:
        validate_room(entity, self.scheme)
        await self._verify_references(entity)
        created = await self._insert(entity)
        await self._announce("created", created.id)
        return created

    async def update(self, entity_id: str, entity: Room) -> Room:
        if entity_id == entity.id:
            validate_room(entity, self.scheme)
            await self._verify_references(entity)
            updated = await self._replace(entity_id, entity)
            await self._announce("updated", updated.id)
            return updated

        result = await self.rename(entity_id, entity)
        if result.cascade is not None and result.cascade.partial:
            raise CascadePartialFailureError(result.cascade)
        return result.entity

    async def rename(
        self,
        old_id: str,
        entity: Room,
        endpoint_prefixes: Optional[Tuple[str, str]] = None,
    ) -> RenameResult[Room]:
        if old_id == entity.id:
            return RenameResult(entity=await self.update(old_id, entity))

        validate_room(entity, self.scheme)
        await self._verify_references(entity)

        devices = await self.device_repository.find_by_room(old_id, resolve_types=False)
        moved = await self._move(old_id, entity)
        await self._announce("renamed", moved.id, previous_id=old_id)

        old_prefix, new_prefix = endpoint_prefixes or (old_id, moved.id)
        moves = [
            ChildMove(
                child_id=device.id,
                new_child_id=self.scheme.rebase(device.id, old_id, moved.id),
                entity=self._rehome_device(
                    device, old_id, moved.id, old_prefix, new_prefix
                ),
            )
            for device in devices
        ]
        outcome = await self.cascade_engine.propagate_rename(
            self.KIND, old_id, moved.id, moves, self._move_device
        )
        return RenameResult(entity=moved, cascade=outcome)

    async def delete(self, entity_id: str) -> None:
        current = await self._fetch(entity_id)
        devices = await self.query_engine.find_children(
            Collection.DEVICES.value, entity_id
        )
        self.cascade_engine.ensure_no_children(
            self.KIND, entity_id, "device", [doc["_id"] for doc in devices]
        )
        await self._remove(entity_id, rev=current["_rev"])
        await self._announce("deleted", entity_id)

    async def find_by_building(self, building_id: str) -> List[Room]:
        documents = await self.query_engine.find_children(self.collection, building_id)
        return [self._to_entity(document) for document in documents]

    async def _verify_references(self, room: Room) -> None:
        building_id = self.scheme.building_id_of(room.id)
        if not await self._document_exists(Collection.BUILDINGS.value, building_id):
            raise NotFoundError(
                f"unable to write room {room.id}: building {building_id} "
                f"doesn't exist",
                details={"room_id": room.id, "building_id": building_id},
            )

        if room.configuration_id and not await self._document_exists(
            Collection.ROOM_CONFIGURATIONS.value, room.configuration_id
        ):
            raise NotFoundError(
                f"unable to write room {room.id}: room configuration "
                f"{room.configuration_id} doesn't exist",
                details={
                    "room_id": room.id,
                    "configuration_id": room.configuration_id,
                },
            )

    async def _move_device(self, move: ChildMove[Device]) -> Device:
        # siblings named by ports move in the same batch
        return await self.device_repository.update(
            move.child_id, move.entity, verify_references=False
        )

    def _rehome_device(
        self,
        device: Device,
        old_room_id: str,
        new_room_id: str,
        old_prefix: str,
        new_prefix: str,
    ) -> Device:
        def _rebase(device_id: str) -> str:
            if device_id and self.scheme.is_descendant(device_id, old_prefix):
                return self.scheme.rebase(device_id, old_prefix, new_prefix)
            return device_id

        ports = [
            replace(
                port,
                source_device=_rebase(port.source_device),
                destination_device=_rebase(port.destination_device),
            )
            for port in device.ports
        ]
        return replace(
            device,
            id=self.scheme.rebase(device.id, old_room_id, new_room_id),
            ports=ports,
        )
