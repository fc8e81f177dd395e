from __future__ import annotations

import pytest

from facility_store.domain.entities.device import Device, DeviceType
from facility_store.domain.entities.errors import NotFoundError
from facility_store.domain.services.device_type_assembly import (
    MissingTypePolicy,
    assemble_device_types,
)


def _devices():
    return [
        Device(id="BLDG-101-CP1", name="P1", type=DeviceType(id="Projector")),
        Device(id="BLDG-101-DSP1", name="D1", type=DeviceType(id="DSP")),
    ]


def test_types_are_substituted() -> None:
    projector = DeviceType(id="Projector", description="full")
    dsp = DeviceType(id="DSP", description="full")

    devices = assemble_device_types(_devices(), [projector, dsp])

    assert [device.type for device in devices] == [projector, dsp]


def test_omit_policy_drops_unresolved_devices() -> None:
    devices = assemble_device_types(
        _devices(), [DeviceType(id="Projector")], MissingTypePolicy.OMIT
    )

    assert [device.id for device in devices] == ["BLDG-101-CP1"]


def test_fail_policy_raises() -> None:
    with pytest.raises(NotFoundError) as exc:
        assemble_device_types(
            _devices(), [DeviceType(id="Projector")], MissingTypePolicy.FAIL
        )

    assert exc.value.details["type_id"] == "DSP"
