"""
Building Repository - Infrastructure Layer

Buildings sit at the top of the hierarchy. A building cannot be deleted while
rooms with its prefix exist; renaming a building moves every room (and, in
turn, their devices) to the new prefix.
"""

from dataclasses import replace
from typing import Any, Dict, Optional

from facility_store.domain.entities.cascade import (
    CascadeOutcome,
    ChildMove,
    RenameResult,
)
from facility_store.domain.entities.errors import CascadePartialFailureError
from facility_store.domain.entities.facility import Building, Room
from facility_store.domain.gateways.document_store_gateway import (
    IDocumentStoreGateway,
)
from facility_store.domain.gateways.event_publisher import IEventPublisher
from facility_store.domain.repositories.building_repository import (
    IBuildingRepository,
)
from facility_store.domain.repositories.room_repository import IRoomRepository
from facility_store.domain.services.cascade_engine import CascadeEngine
from facility_store.domain.services.entity_validator import validate_building
from facility_store.domain.services.identifier_scheme import (
    DEFAULT_ID_SCHEME,
    HierarchicalIdScheme,
)
from facility_store.infrastructure.database.prefix_query import PrefixQueryEngine
from facility_store.infrastructure.repositories.base import DocumentRepository
from facility_store.infrastructure.repositories.documents import (
    building_from_document,
    building_to_document,
)
from facility_store.shared import Collection


class BuildingRepository(DocumentRepository[Building], IBuildingRepository):
    """Document store implementation of the BuildingRepository."""

    COLLECTION = Collection.BUILDINGS
    KIND = "building"

    def __init__(
        self,
        gateway: IDocumentStoreGateway,
        query_engine: PrefixQueryEngine,
        room_repository: IRoomRepository,
        cascade_engine: CascadeEngine,
        event_publisher: Optional[IEventPublisher] = None,
        scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME,
    ):
        super().__init__(gateway, query_engine, event_publisher, scheme)
        self.room_repository = room_repository
        self.cascade_engine = cascade_engine

    def _to_document(self, entity: Building) -> Dict[str, Any]:
        return building_to_document(entity)

    def _to_entity(self, document: Dict[str, Any]) -> Building:
        return building_from_document(document)

    async def create(self, entity: Building) -> Building:
        validate_building(entity, self.scheme)
        created = await self._insert(entity)
        await self._announce("created", created.id)
        return created

    async def update(self, entity_id: str, entity: Building) -> Building:
        """
        Replace a building, or rename it when ``entity.id`` differs.

        Raises:
            CascadePartialFailureError: The building was renamed but some rooms
                could not be moved; the error carries the full outcome
        """
        if entity_id == entity.id:
            validate_building(entity, self.scheme)
            updated = await self._replace(entity_id, entity)
            await self._announce("updated", updated.id)
            return updated

        result = await self.rename(entity_id, entity)
        if result.cascade is not None and result.cascade.partial:
            raise CascadePartialFailureError(result.cascade)
        return result.entity

    async def rename(self, old_id: str, entity: Building) -> RenameResult[Building]:
        if old_id == entity.id:
            return RenameResult(entity=await self.update(old_id, entity))

        validate_building(entity, self.scheme)

        rooms = await self.room_repository.find_by_building(old_id)
        moved = await self._move(old_id, entity)
        await self._announce("renamed", moved.id, previous_id=old_id)

        moves = [
            ChildMove(
                child_id=room.id,
                new_child_id=self.scheme.rebase(room.id, old_id, moved.id),
                entity=replace(room, id=self.scheme.rebase(room.id, old_id, moved.id)),
            )
            for room in rooms
        ]

        async def _move_room(move: ChildMove[Room]) -> Optional[CascadeOutcome]:
            # a moved room counts as moved; its device failures nest below it
            result = await self.room_repository.rename(
                move.child_id, move.entity, endpoint_prefixes=(old_id, moved.id)
            )
            return result.cascade

        outcome = await self.cascade_engine.propagate_rename(
            self.KIND, old_id, moved.id, moves, _move_room
        )
        return RenameResult(entity=moved, cascade=outcome)

    async def delete(self, entity_id: str) -> None:
        current = await self._fetch(entity_id)
        rooms = await self.query_engine.find_children(
            Collection.ROOMS.value, entity_id
        )
        self.cascade_engine.ensure_no_children(
            self.KIND, entity_id, "room", [doc["_id"] for doc in rooms]
        )
        await self._remove(entity_id, rev=current["_rev"])
        await self._announce("deleted", entity_id)
