"""
Domain Entities Package

Facility hierarchy entities, cascade outcomes and the error taxonomy.
"""

from .cascade import CascadeOutcome, ChildFailure, ChildMove, RenameResult
from .device import (
    Command,
    Device,
    DeviceType,
    Endpoint,
    Microservice,
    Port,
    PowerState,
    Role,
)
from .errors import (
    BadRequestError,
    CascadePartialFailureError,
    ConflictError,
    DomainError,
    NotFoundError,
    PreconditionFailedError,
    StoreError,
    TransportError,
    UnknownStoreError,
    ValidationFailedError,
)
from .facility import Building, Evaluator, Room, RoomConfiguration, UIConfig

__all__ = [
    "Building",
    "Room",
    "RoomConfiguration",
    "Evaluator",
    "UIConfig",
    "Device",
    "DeviceType",
    "Port",
    "Role",
    "Command",
    "Microservice",
    "Endpoint",
    "PowerState",
    "CascadeOutcome",
    "ChildFailure",
    "ChildMove",
    "RenameResult",
    "DomainError",
    "StoreError",
    "NotFoundError",
    "ConflictError",
    "BadRequestError",
    "UnknownStoreError",
    "TransportError",
    "ValidationFailedError",
    "PreconditionFailedError",
    "CascadePartialFailureError",
]
