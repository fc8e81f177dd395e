"""Room Repository Interface"""

from abc import abstractmethod
from typing import List, Optional, Tuple

from facility_store.domain.entities.cascade import RenameResult
from facility_store.domain.entities.facility import Room
from facility_store.domain.repositories.entity_repository import IEntityRepository


class IRoomRepository(IEntityRepository[Room]):
    """Rooms; deletes are blocked by devices, renames cascade to devices."""

    @abstractmethod
    async def find_by_building(self, building_id: str) -> List[Room]:
        """List the rooms whose ID starts with ``<building_id>-``."""
        pass

    @abstractmethod
    async def rename(
        self,
        old_id: str,
        room: Room,
        endpoint_prefixes: Optional[Tuple[str, str]] = None,
    ) -> RenameResult[Room]:
        """
        Move a room to ``room.id`` and re-home all of its devices.

        Port endpoints under the old room are rewritten to the new room.
        ``endpoint_prefixes`` (old, new) widens that to a whole building
        when the room moves as part of a building rename.
        """
        pass
