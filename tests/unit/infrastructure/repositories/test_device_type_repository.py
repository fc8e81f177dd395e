from __future__ import annotations

from dataclasses import replace

import pytest

from facility_store.domain.entities.device import Command, DeviceType
from facility_store.domain.entities.errors import ValidationFailedError


@pytest.mark.asyncio
async def test_shallow_create_accepts_partial_types(repositories, fake_store) -> None:
    created = await repositories.device_types.create(
        DeviceType(id="Draft", commands=[Command(id="x")])
    )

    assert created.rev is not None
    assert fake_store.ids("device_types") == ["Draft"]


@pytest.mark.asyncio
async def test_deep_create_validates_commands(repositories, fake_store) -> None:
    with pytest.raises(ValidationFailedError):
        await repositories.device_types.create(
            DeviceType(id="Draft", commands=[Command(id="x")]), deep=True
        )

    assert fake_store.ids("device_types") == []


@pytest.mark.asyncio
async def test_round_trip_keeps_nested_values(repositories, sample_device_type) -> None:
    await repositories.device_types.create(sample_device_type, deep=True)

    fetched = await repositories.device_types.get("Projector")

    assert fetched.commands[0].microservice.address == "http://projector-ms:8080"
    assert fetched.commands[0].endpoint.path == "/power/on"
    assert [state.id for state in fetched.power_states] == ["active", "standby"]
    assert fetched.ports[0].port_type == "video"
    assert fetched.input is True


@pytest.mark.asyncio
async def test_update_and_delete(repositories, fake_store, sample_device_type) -> None:
    created = await repositories.device_types.create(sample_device_type)

    updated = await repositories.device_types.update(
        "Projector", replace(created, description="Laser projector")
    )
    assert fake_store.document("device_types", "Projector")["description"] == (
        "Laser projector"
    )

    await repositories.device_types.delete(updated.id)
    assert fake_store.ids("device_types") == []
