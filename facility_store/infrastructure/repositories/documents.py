"""
Document mapping - Infrastructure Layer

Conversions between domain entities and the JSON documents kept in the
store. Field names follow the store's conventions (``_id``, ``_rev``,
snake_case); revision tokens travel as query parameters and are never
written into a document body.
"""

from typing import Any, Dict, List, Optional

from facility_store.domain.entities.device import (
    Command,
    Device,
    DeviceType,
    Endpoint,
    Microservice,
    Port,
    PowerState,
    Role,
)
from facility_store.domain.entities.facility import (
    Building,
    Evaluator,
    Room,
    RoomConfiguration,
    UIConfig,
)

UI_CONFIG_FIELDS = ("_id", "_rev", "api", "panels", "presets")


def _strings(payload: Any) -> List[str]:
    if not payload:
        return []
    return [str(item) for item in payload]


def _dicts(payload: Any) -> List[Dict[str, Any]]:
    if not payload:
        return []
    return [item for item in payload if isinstance(item, dict)]


def _ref(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        return payload.get("_id") or None
    if isinstance(payload, str):
        return payload or None
    return None


# Value objects -----------------------------------------------------------


def role_to_document(role: Role) -> Dict[str, Any]:
    return {"_id": role.id, "description": role.description, "tags": role.tags}


def role_from_document(data: Dict[str, Any]) -> Role:
    return Role(
        id=str(data.get("_id", "")),
        description=str(data.get("description", "")),
        tags=_strings(data.get("tags")),
    )


def port_to_document(port: Port) -> Dict[str, Any]:
    document: Dict[str, Any] = {"_id": port.id}
    for key, value in (
        ("friendly_name", port.friendly_name),
        ("port_type", port.port_type),
        ("source_device", port.source_device),
        ("destination_device", port.destination_device),
        ("description", port.description),
        ("tags", port.tags),
    ):
        if value:
            document[key] = value
    return document


def port_from_document(data: Dict[str, Any]) -> Port:
    return Port(
        id=str(data.get("_id", "")),
        friendly_name=str(data.get("friendly_name", "")),
        port_type=str(data.get("port_type", "")),
        source_device=str(data.get("source_device", "")),
        destination_device=str(data.get("destination_device", "")),
        description=str(data.get("description", "")),
        tags=_strings(data.get("tags")),
    )


def power_state_to_document(state: PowerState) -> Dict[str, Any]:
    return {"_id": state.id, "description": state.description, "tags": state.tags}


def power_state_from_document(data: Dict[str, Any]) -> PowerState:
    return PowerState(
        id=str(data.get("_id", "")),
        description=str(data.get("description", "")),
        tags=_strings(data.get("tags")),
    )


def command_to_document(command: Command) -> Dict[str, Any]:
    return {
        "_id": command.id,
        "description": command.description,
        "microservice": {
            "_id": command.microservice.id,
            "description": command.microservice.description,
            "address": command.microservice.address,
            "tags": command.microservice.tags,
        },
        "endpoint": {
            "_id": command.endpoint.id,
            "description": command.endpoint.description,
            "path": command.endpoint.path,
            "tags": command.endpoint.tags,
        },
        "priority": command.priority,
        "tags": command.tags,
    }


def command_from_document(data: Dict[str, Any]) -> Command:
    microservice = data.get("microservice") or {}
    endpoint = data.get("endpoint") or {}
    return Command(
        id=str(data.get("_id", "")),
        description=str(data.get("description", "")),
        microservice=Microservice(
            id=str(microservice.get("_id", "")),
            description=str(microservice.get("description", "")),
            address=str(microservice.get("address", "")),
            tags=_strings(microservice.get("tags")),
        ),
        endpoint=Endpoint(
            id=str(endpoint.get("_id", "")),
            description=str(endpoint.get("description", "")),
            path=str(endpoint.get("path", "")),
            tags=_strings(endpoint.get("tags")),
        ),
        priority=int(data.get("priority", 0) or 0),
        tags=_strings(data.get("tags")),
    )


# Devices -------------------------------------------------------------------


def device_type_to_document(device_type: DeviceType) -> Dict[str, Any]:
    return {
        "_id": device_type.id,
        "description": device_type.description,
        "display_name": device_type.display_name,
        "input": device_type.input,
        "output": device_type.output,
        "source": device_type.source,
        "destination": device_type.destination,
        "roles": [role_to_document(role) for role in device_type.roles],
        "ports": [port_to_document(port) for port in device_type.ports],
        "power_states": [
            power_state_to_document(state) for state in device_type.power_states
        ],
        "commands": [command_to_document(cmd) for cmd in device_type.commands],
        "tags": device_type.tags,
    }


def device_type_from_document(data: Dict[str, Any]) -> DeviceType:
    return DeviceType(
        id=str(data.get("_id", "")),
        description=str(data.get("description", "")),
        display_name=str(data.get("display_name", "")),
        input=bool(data.get("input", False)),
        output=bool(data.get("output", False)),
        source=bool(data.get("source", False)),
        destination=bool(data.get("destination", False)),
        roles=[role_from_document(item) for item in _dicts(data.get("roles"))],
        ports=[port_from_document(item) for item in _dicts(data.get("ports"))],
        power_states=[
            power_state_from_document(item)
            for item in _dicts(data.get("power_states"))
        ],
        commands=[
            command_from_document(item) for item in _dicts(data.get("commands"))
        ],
        tags=_strings(data.get("tags")),
        rev=data.get("_rev"),
    )


def device_to_document(device: Device) -> Dict[str, Any]:
    """Serialize a device; only the ID of its type is persisted."""
    return {
        "_id": device.id,
        "name": device.name,
        "address": device.address,
        "description": device.description,
        "display_name": device.display_name,
        "type": {"_id": device.type.id},
        "roles": [role_to_document(role) for role in device.roles],
        "ports": [port_to_document(port) for port in device.ports],
        "tags": device.tags,
    }


def device_from_document(data: Dict[str, Any]) -> Device:
    return Device(
        id=str(data.get("_id", "")),
        name=str(data.get("name", "")),
        type=DeviceType(id=_ref(data.get("type")) or ""),
        address=str(data.get("address", "")),
        description=str(data.get("description", "")),
        display_name=str(data.get("display_name", "")),
        roles=[role_from_document(item) for item in _dicts(data.get("roles"))],
        ports=[port_from_document(item) for item in _dicts(data.get("ports"))],
        tags=_strings(data.get("tags")),
        rev=data.get("_rev"),
    )


# Facility ------------------------------------------------------------------


def building_to_document(building: Building) -> Dict[str, Any]:
    return {
        "_id": building.id,
        "name": building.name,
        "description": building.description,
        "tags": building.tags,
    }


def building_from_document(data: Dict[str, Any]) -> Building:
    return Building(
        id=str(data.get("_id", "")),
        name=str(data.get("name", "")),
        description=str(data.get("description", "")),
        tags=_strings(data.get("tags")),
        rev=data.get("_rev"),
    )


def room_to_document(room: Room) -> Dict[str, Any]:
    document: Dict[str, Any] = {
        "_id": room.id,
        "name": room.name,
        "description": room.description,
        "designation": room.designation,
        "tags": room.tags,
    }
    if room.configuration_id:
        document["configuration"] = {"_id": room.configuration_id}
    return document


def room_from_document(data: Dict[str, Any]) -> Room:
    return Room(
        id=str(data.get("_id", "")),
        name=str(data.get("name", "")),
        description=str(data.get("description", "")),
        configuration_id=_ref(data.get("configuration")),
        designation=str(data.get("designation", "")),
        tags=_strings(data.get("tags")),
        rev=data.get("_rev"),
    )


def room_configuration_to_document(configuration: RoomConfiguration) -> Dict[str, Any]:
    return {
        "_id": configuration.id,
        "description": configuration.description,
        "evaluators": [
            {
                "_id": evaluator.id,
                "codekey": evaluator.code_key,
                "description": evaluator.description,
                "priority": evaluator.priority,
            }
            for evaluator in configuration.evaluators
        ],
        "tags": configuration.tags,
    }


def room_configuration_from_document(data: Dict[str, Any]) -> RoomConfiguration:
    return RoomConfiguration(
        id=str(data.get("_id", "")),
        description=str(data.get("description", "")),
        evaluators=[
            Evaluator(
                id=str(item.get("_id", "")),
                code_key=str(item.get("codekey", "")),
                description=str(item.get("description", "")),
                priority=int(item.get("priority", 0) or 0),
            )
            for item in _dicts(data.get("evaluators"))
        ],
        tags=_strings(data.get("tags")),
        rev=data.get("_rev"),
    )


def ui_config_to_document(ui_config: UIConfig) -> Dict[str, Any]:
    document: Dict[str, Any] = {
        key: value
        for key, value in ui_config.extras.items()
        if key not in UI_CONFIG_FIELDS
    }
    document.update(
        {
            "_id": ui_config.id,
            "api": ui_config.api,
            "panels": ui_config.panels,
            "presets": ui_config.presets,
        }
    )
    return document


def ui_config_from_document(data: Dict[str, Any]) -> UIConfig:
    return UIConfig(
        id=str(data.get("_id", "")),
        api=_strings(data.get("api")),
        panels=_dicts(data.get("panels")),
        presets=_dicts(data.get("presets")),
        extras={
            key: value for key, value in data.items() if key not in UI_CONFIG_FIELDS
        },
        rev=data.get("_rev"),
    )
