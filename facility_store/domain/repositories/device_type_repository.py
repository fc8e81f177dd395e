"""Device Type Repository Interface"""

from abc import abstractmethod

from facility_store.domain.entities.device import DeviceType
from facility_store.domain.repositories.entity_repository import IEntityRepository


class IDeviceTypeRepository(IEntityRepository[DeviceType]):
    """Device types; devices reference them by ID."""

    @abstractmethod
    async def create(self, entity: DeviceType, deep: bool = False) -> DeviceType:
        """
        Create a device type.

        Args:
            entity: Device type to create
            deep: Also validate ports, commands, roles and power states
        """
        pass
