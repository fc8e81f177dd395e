"""
Repositories Package

Interfaces defining the public per-entity API. Implementations live in the
infrastructure layer.
"""

from .building_repository import IBuildingRepository
from .device_repository import IDeviceRepository
from .device_type_repository import IDeviceTypeRepository
from .entity_repository import IEntityRepository
from .room_configuration_repository import IRoomConfigurationRepository
from .room_repository import IRoomRepository
from .ui_config_repository import IUIConfigRepository

__all__ = [
    "IEntityRepository",
    "IBuildingRepository",
    "IRoomRepository",
    "IDeviceRepository",
    "IDeviceTypeRepository",
    "IRoomConfigurationRepository",
    "IUIConfigRepository",
]
