"""
Device type assembly.

Device documents hold their type by reference. Listings that need type level
information fetch every DeviceType once and substitute the live document into
each device in memory instead of issuing one request per device.
"""

from dataclasses import replace
from enum import Enum
from typing import Dict, Iterable, List

from facility_store.domain.entities.device import Device, DeviceType
from facility_store.domain.entities.errors import NotFoundError
from facility_store.shared import get_logger

logger = get_logger(__name__)


class MissingTypePolicy(str, Enum):
    """What to do with a device whose type reference does not resolve."""

    OMIT = "omit"
    FAIL = "fail"


def index_device_types(types: Iterable[DeviceType]) -> Dict[str, DeviceType]:
    return {device_type.id: device_type for device_type in types}


def assemble_device_types(
    devices: Iterable[Device],
    types: Iterable[DeviceType],
    policy: MissingTypePolicy = MissingTypePolicy.OMIT,
) -> List[Device]:
    """
    Return copies of ``devices`` carrying their resolved DeviceType.

    Raises:
        NotFoundError: If a reference does not resolve and ``policy`` is FAIL.
    """
    types_by_id = index_device_types(types)
    assembled: List[Device] = []
    for device in devices:
        device_type = types_by_id.get(device.type.id)
        if device_type is None:
            if policy is MissingTypePolicy.FAIL:
                raise NotFoundError(
                    f"device type {device.type.id!r} referenced by device "
                    f"{device.id} does not exist",
                    details={"device_id": device.id, "type_id": device.type.id},
                )
            logger.warning(
                "device_types.unresolved_device_omitted",
                device_id=device.id,
                type_id=device.type.id,
            )
            continue
        assembled.append(replace(device, type=device_type))
    return assembled
