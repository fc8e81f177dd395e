"""
Domain Entities - Devices

Devices, device types and the value objects attached to them. A device holds
its type by reference; the ``type`` attribute is either a bare reference
(only ``id`` set) or the live DeviceType resolved at read time.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class Role:
    """A role a device plays in the room (e.g. ``AudioOut``)."""

    id: str
    description: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Port:
    """A directed edge between two devices."""

    id: str
    friendly_name: str = ""
    port_type: str = ""
    source_device: str = ""
    destination_device: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass(slots=True)
class PowerState:
    id: str
    description: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Microservice:
    id: str
    description: str = ""
    address: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Endpoint:
    id: str
    description: str = ""
    path: str = ""
    tags: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Command:
    """An API call used to drive devices of a type."""

    id: str
    description: str = ""
    microservice: Microservice = field(default_factory=lambda: Microservice(id=""))
    endpoint: Endpoint = field(default_factory=lambda: Endpoint(id=""))
    priority: int = 0
    tags: List[str] = field(default_factory=list)


@dataclass
class DeviceType:
    """Type level information shared by every device of the type."""

    id: str
    description: str = ""
    display_name: str = ""
    input: bool = False
    output: bool = False
    source: bool = False
    destination: bool = False
    roles: List[Role] = field(default_factory=list)
    ports: List[Port] = field(default_factory=list)
    power_states: List[PowerState] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    rev: Optional[str] = None

    def is_reference_only(self) -> bool:
        """True when nothing but the ID is known about the type."""
        return not any(
            (
                self.description,
                self.display_name,
                self.input,
                self.output,
                self.source,
                self.destination,
                self.roles,
                self.ports,
                self.power_states,
                self.commands,
                self.tags,
            )
        )

    def as_reference(self) -> "DeviceType":
        return DeviceType(id=self.id)


@dataclass
class Device:
    """A device in a room, ID ``<building>-<room>-<device>``."""

    id: str
    name: str = ""
    type: DeviceType = field(default_factory=lambda: DeviceType(id=""))
    address: str = ""
    description: str = ""
    display_name: str = ""
    roles: List[Role] = field(default_factory=list)
    ports: List[Port] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    rev: Optional[str] = None

    def has_role(self, role_id: str) -> bool:
        wanted = role_id.lower()
        return any(role.id.lower() == wanted for role in self.roles)

    def is_of_type(self, type_id: str) -> bool:
        return self.type.id.lower() == type_id.lower()
