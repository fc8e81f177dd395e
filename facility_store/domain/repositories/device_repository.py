"""Device Repository Interface"""

from abc import abstractmethod
from typing import List

from facility_store.domain.entities.device import Device
from facility_store.domain.repositories.entity_repository import IEntityRepository


class IDeviceRepository(IEntityRepository[Device]):
    """Devices, validated against their room, type and port references."""

    @abstractmethod
    async def update(
        self, entity_id: str, entity: Device, verify_references: bool = True
    ) -> Device:
        """
        Replace or rename a device.

        Args:
            entity_id: ID the device is currently stored under
            entity: New device content
            verify_references: Check the room, type and port references first
        """
        pass

    @abstractmethod
    async def find_by_room(
        self, room_id: str, resolve_types: bool = True
    ) -> List[Device]:
        """Devices whose ID starts with ``<room_id>-``.

        Args:
            room_id: Room to list
            resolve_types: Substitute the live DeviceType into each device
        """
        pass

    @abstractmethod
    async def find_by_room_and_role(self, room_id: str, role_id: str) -> List[Device]:
        """Devices in a room having the role (case-insensitive)."""
        pass

    @abstractmethod
    async def find_by_role_and_type(self, role_id: str, type_id: str) -> List[Device]:
        """Devices anywhere having both the role and the type."""
        pass
