"""Document store implementations of the domain repositories."""

from .base import DocumentRepository
from .building_repository import BuildingRepository
from .device_repository import DeviceRepository
from .device_type_repository import DeviceTypeRepository
from .room_configuration_repository import RoomConfigurationRepository
from .room_repository import RoomRepository
from .ui_config_repository import UIConfigRepository

__all__ = [
    "BuildingRepository",
    "DeviceRepository",
    "DeviceTypeRepository",
    "DocumentRepository",
    "RoomConfigurationRepository",
    "RoomRepository",
    "UIConfigRepository",
]
