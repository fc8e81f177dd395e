"""UI Config Repository Interface"""

from abc import abstractmethod

from facility_store.domain.entities.facility import UIConfig
from facility_store.domain.repositories.entity_repository import IEntityRepository


class IUIConfigRepository(IEntityRepository[UIConfig]):
    """Per-room UI configurations, keyed by room ID."""

    @abstractmethod
    async def create_for_room(self, room_id: str, ui_config: UIConfig) -> UIConfig:
        """Store ``ui_config`` under ``room_id``, whatever its own ID says."""
        pass
