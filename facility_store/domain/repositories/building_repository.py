"""Building Repository Interface"""

from abc import abstractmethod

from facility_store.domain.entities.cascade import RenameResult
from facility_store.domain.entities.facility import Building
from facility_store.domain.repositories.entity_repository import IEntityRepository


class IBuildingRepository(IEntityRepository[Building]):
    """Buildings; deletes are blocked by rooms, renames cascade to rooms."""

    @abstractmethod
    async def rename(self, old_id: str, building: Building) -> RenameResult[Building]:
        """
        Move a building to ``building.id`` and re-home all of its rooms.

        Returns:
            The new building and the outcome of moving each room
        """
        pass
