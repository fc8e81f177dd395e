from __future__ import annotations

from dataclasses import replace

import pytest

from facility_store.domain.entities.device import Port
from facility_store.domain.entities.errors import (
    CascadePartialFailureError,
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
)
from facility_store.domain.entities.facility import Room
from facility_store.infrastructure.repositories.documents import (
    device_to_document,
    device_type_to_document,
)


@pytest.fixture()
def seeded_building(fake_store, sample_building):
    fake_store.seed("buildings", {"_id": sample_building.id, "name": sample_building.name})
    return sample_building


@pytest.mark.asyncio
async def test_create_requires_building(repositories, fake_store, sample_room) -> None:
    with pytest.raises(NotFoundError) as exc:
        await repositories.rooms.create(sample_room)

    assert "building BLDG doesn't exist" in exc.value.message
    assert fake_store.ids("rooms") == []


@pytest.mark.asyncio
async def test_create_requires_existing_configuration(
    repositories, fake_store, seeded_building, sample_room
) -> None:
    room = replace(sample_room, configuration_id="lecture")

    with pytest.raises(NotFoundError) as exc:
        await repositories.rooms.create(room)
    assert exc.value.details["configuration_id"] == "lecture"

    fake_store.seed("room_configurations", {"_id": "lecture"})
    created = await repositories.rooms.create(room)

    stored = fake_store.document("rooms", "BLDG-101")
    assert stored["configuration"] == {"_id": "lecture"}
    assert (await repositories.rooms.get("BLDG-101")).configuration_id == "lecture"
    assert created.rev is not None


@pytest.mark.asyncio
async def test_delete_is_blocked_by_devices(
    repositories, fake_store, seeded_room, device_factory
) -> None:
    fake_store.seed("devices", device_to_document(device_factory("BLDG-101-CP1")))
    fake_store.seed("devices", device_to_document(device_factory("BLDG-1010-CP1")))

    with pytest.raises(PreconditionFailedError) as exc:
        await repositories.rooms.delete("BLDG-101")

    assert exc.value.details["children"] == ["BLDG-101-CP1"]
    assert fake_store.ids("rooms") == ["BLDG-101"]

    del fake_store.collections["devices"]["BLDG-101-CP1"]
    await repositories.rooms.delete("BLDG-101")
    assert fake_store.ids("rooms") == []


@pytest.mark.asyncio
async def test_find_by_building_uses_id_prefix(repositories, fake_store) -> None:
    for room_id in ["BLDG-102", "BLDG-101", "BLDG2-101", "HQ-101"]:
        fake_store.seed("rooms", {"_id": room_id, "name": room_id})

    rooms = await repositories.rooms.find_by_building("BLDG")

    assert [room.id for room in rooms] == ["BLDG-101", "BLDG-102"]


@pytest.mark.asyncio
async def test_rename_moves_devices_and_rewrites_ports(
    repositories, fake_store, seeded_room, sample_device_type, device_factory, event_publisher
) -> None:
    fake_store.seed("device_types", device_type_to_document(sample_device_type))
    fake_store.seed("devices", device_to_document(device_factory("BLDG-101-CP1")))
    fake_store.seed(
        "devices",
        device_to_document(
            device_factory(
                "BLDG-101-SW1",
                ports=[
                    Port(id="IN1", source_device="BLDG-101-CP1"),
                    Port(id="OUT1", destination_device="BLDG-102-D1"),
                ],
            )
        ),
    )
    room = await repositories.rooms.get("BLDG-101")

    result = await repositories.rooms.rename("BLDG-101", replace(room, id="BLDG-201"))

    assert result.complete
    assert result.entity.id == "BLDG-201"
    assert result.cascade.succeeded == ["BLDG-201-CP1", "BLDG-201-SW1"]
    assert fake_store.ids("rooms") == ["BLDG-201"]
    assert fake_store.ids("devices") == ["BLDG-201-CP1", "BLDG-201-SW1"]

    ports = fake_store.document("devices", "BLDG-201-SW1")["ports"]
    assert ports[0]["source_device"] == "BLDG-201-CP1"
    assert ports[1]["destination_device"] == "BLDG-102-D1"
    assert "room.renamed" in event_publisher.types()


@pytest.mark.asyncio
async def test_rename_into_missing_building_changes_nothing(
    repositories, fake_store, seeded_room
) -> None:
    room = await repositories.rooms.get("BLDG-101")

    with pytest.raises(NotFoundError):
        await repositories.rooms.update("BLDG-101", replace(room, id="HQ-101"))

    assert fake_store.ids("rooms") == ["BLDG-101"]


@pytest.mark.asyncio
async def test_update_raises_on_partial_cascade(
    repositories, fake_store, seeded_room, device_factory
) -> None:
    fake_store.seed("devices", device_to_document(device_factory("BLDG-101-CP1")))
    fake_store.seed("devices", device_to_document(device_factory("BLDG-101-CP2")))
    fake_store.seed("devices", device_to_document(device_factory("BLDG-201-CP2")))
    room = await repositories.rooms.get("BLDG-101")

    with pytest.raises(CascadePartialFailureError) as exc:
        await repositories.rooms.update("BLDG-101", replace(room, id="BLDG-201"))

    outcome = exc.value.outcome
    assert outcome.succeeded == ["BLDG-201-CP1"]
    assert [failure.child_id for failure in outcome.failed] == ["BLDG-101-CP2"]
    assert isinstance(outcome.failed[0].error, ConflictError)
    assert fake_store.ids("rooms") == ["BLDG-201"]
    assert "BLDG-101-CP2" in fake_store.ids("devices")


@pytest.mark.asyncio
async def test_update_in_place_keeps_id(repositories, fake_store, seeded_room) -> None:
    room = await repositories.rooms.get("BLDG-101")

    updated = await repositories.rooms.update(
        "BLDG-101", Room(id="BLDG-101", name="Renovated hall", rev=room.rev)
    )

    assert updated.rev.startswith("2-")
    assert fake_store.document("rooms", "BLDG-101")["name"] == "Renovated hall"
