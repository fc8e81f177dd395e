"""Domain service helpers for validating entities before they reach the store."""

from typing import List
from urllib.parse import urlsplit

from facility_store.domain.entities.device import (
    Command,
    Device,
    DeviceType,
    Port,
    PowerState,
    Role,
)
from facility_store.domain.entities.errors import ValidationFailedError
from facility_store.domain.entities.facility import (
    Building,
    Room,
    RoomConfiguration,
    UIConfig,
)
from facility_store.domain.services.identifier_scheme import (
    DEFAULT_ID_SCHEME,
    HierarchicalIdScheme,
)

MIN_VALUE_ID_LENGTH = 3
MIN_DEVICE_NAME_LENGTH = 2


def _raise_if_any(kind: str, entity_id: str, errors: List[str]) -> None:
    if errors:
        raise ValidationFailedError(
            f"invalid {kind} {entity_id!r}: {errors[0]}",
            details={"kind": kind, "id": entity_id, "errors": errors},
        )


def _check_id(scheme_check, entity_id: str, kind: str, errors: List[str]) -> None:
    if not scheme_check(entity_id):
        errors.append(f"{kind} id {entity_id!r} does not follow the naming scheme.")


def _is_absolute_url(value: str) -> bool:
    parts = urlsplit(value or "")
    return bool(parts.scheme and parts.netloc)


def _validate_roles(roles: List[Role], errors: List[str]) -> None:
    for idx, role in enumerate(roles, start=1):
        if len(role.id) < MIN_VALUE_ID_LENGTH:
            errors.append(
                f"Role #{idx} id must be at least {MIN_VALUE_ID_LENGTH} characters long."
            )


def _validate_ports(ports: List[Port], errors: List[str]) -> None:
    for idx, port in enumerate(ports, start=1):
        if not port.id:
            errors.append(f"Port #{idx} must have a non-empty id.")


def _validate_power_states(states: List[PowerState], errors: List[str]) -> None:
    for idx, state in enumerate(states, start=1):
        if len(state.id) < MIN_VALUE_ID_LENGTH:
            errors.append(
                f"Power state #{idx} id must be at least "
                f"{MIN_VALUE_ID_LENGTH} characters long."
            )


def _validate_commands(commands: List[Command], errors: List[str]) -> None:
    for idx, command in enumerate(commands, start=1):
        prefix = f"Command {command.id or '#' + str(idx)}"
        if len(command.id) < MIN_VALUE_ID_LENGTH:
            errors.append(
                f"{prefix} id must be at least {MIN_VALUE_ID_LENGTH} characters long."
            )
        if len(command.microservice.id) < MIN_VALUE_ID_LENGTH:
            errors.append(f"{prefix} microservice id is too short.")
        if not _is_absolute_url(command.microservice.address):
            errors.append(
                f"{prefix} microservice address "
                f"{command.microservice.address!r} is not an absolute URL."
            )
        if len(command.endpoint.id) < MIN_VALUE_ID_LENGTH:
            errors.append(f"{prefix} endpoint id is too short.")
        if not command.endpoint.path.startswith("/"):
            errors.append(
                f"{prefix} endpoint path {command.endpoint.path!r} must start with '/'."
            )


def validate_building(
    building: Building, scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME
) -> None:
    errors: List[str] = []
    _check_id(scheme.is_valid_building_id, building.id, "Building", errors)
    if not building.name:
        errors.append("Building must have a name.")
    _raise_if_any("building", building.id, errors)


def validate_room(room: Room, scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME) -> None:
    errors: List[str] = []
    _check_id(scheme.is_valid_room_id, room.id, "Room", errors)
    if not room.name:
        errors.append("Room must have a name.")
    _raise_if_any("room", room.id, errors)


def validate_room_configuration(configuration: RoomConfiguration) -> None:
    errors: List[str] = []
    if not configuration.id:
        errors.append("Room configuration must have an id.")
    for idx, evaluator in enumerate(configuration.evaluators, start=1):
        if not evaluator.id:
            errors.append(f"Evaluator #{idx} must have an id.")
    _raise_if_any("room configuration", configuration.id, errors)


def validate_ui_config(
    ui_config: UIConfig, scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME
) -> None:
    errors: List[str] = []
    _check_id(scheme.is_valid_room_id, ui_config.id, "UI config", errors)
    _raise_if_any("ui config", ui_config.id, errors)


def device_type_errors(device_type: DeviceType, deep: bool = False) -> List[str]:
    """Collect validation problems; ``deep`` also checks ports and commands."""
    errors: List[str] = []
    if not device_type.id:
        errors.append("Device type must have an id.")
    if deep:
        _validate_ports(device_type.ports, errors)
        _validate_commands(device_type.commands, errors)
        _validate_roles(device_type.roles, errors)
        _validate_power_states(device_type.power_states, errors)
    return errors


def validate_device_type(device_type: DeviceType, deep: bool = False) -> None:
    _raise_if_any("device type", device_type.id, device_type_errors(device_type, deep))


def is_fully_specified(device_type: DeviceType) -> bool:
    """Whether an inline type carries enough to be provisioned on its own."""
    return not device_type.is_reference_only() and not device_type_errors(
        device_type, deep=True
    )


def validate_device(
    device: Device, scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME
) -> None:
    """Validate a device's local structure.

    Raises:
        ValidationFailedError: If one or more validation rules fail.
    """
    errors: List[str] = []
    _check_id(scheme.is_valid_device_id, device.id, "Device", errors)
    if len(device.name) < MIN_DEVICE_NAME_LENGTH:
        errors.append(
            f"Device name must be at least {MIN_DEVICE_NAME_LENGTH} characters long."
        )
    errors.extend(device_type_errors(device.type, deep=False))
    if not device.roles:
        errors.append("Device must include at least 1 role.")
    _validate_roles(device.roles, errors)
    _validate_ports(device.ports, errors)
    _raise_if_any("device", device.id, errors)
