from __future__ import annotations

from dataclasses import replace

import pytest

from facility_store.domain.entities.errors import ConflictError, TransportError
from facility_store.domain.entities.facility import Building


class _BrokenPublisher:
    async def publish(self, event_type, payload):
        raise TransportError("broker down")


@pytest.mark.asyncio
async def test_publisher_failure_does_not_fail_mutation(
    repositories, fake_store, sample_building
) -> None:
    repositories.buildings.event_publisher = _BrokenPublisher()

    await repositories.buildings.create(sample_building)

    assert fake_store.ids("buildings") == ["BLDG"]


@pytest.mark.asyncio
async def test_move_keeps_new_document_when_delete_fails(
    repositories, fake_store, sample_building
) -> None:
    created = await repositories.buildings.create(sample_building)
    fake_store.fail_on(
        "DELETE", "buildings/BLDG", ConflictError("conflict: Document update conflict.")
    )

    with pytest.raises(ConflictError):
        await repositories.buildings.update("BLDG", replace(created, id="HQ"))

    assert fake_store.ids("buildings") == ["BLDG", "HQ"]


@pytest.mark.asyncio
async def test_move_deletes_nothing_when_create_fails(repositories, fake_store) -> None:
    fake_store.seed("buildings", {"_id": "BLDG", "name": "Main"})
    fake_store.seed("buildings", {"_id": "HQ", "name": "Taken"})

    with pytest.raises(ConflictError):
        await repositories.buildings.update("BLDG", Building(id="HQ", name="Main"))

    assert fake_store.ids("buildings") == ["BLDG", "HQ"]
    assert not any(method == "DELETE" for method, _, _ in fake_store.calls)


@pytest.mark.asyncio
async def test_move_with_stale_revision_writes_nothing(
    repositories, fake_store, sample_building
) -> None:
    stale = await repositories.buildings.create(sample_building)
    await repositories.buildings.update("BLDG", replace(stale, name="Renamed"))
    fake_store.calls.clear()

    with pytest.raises(ConflictError) as exc:
        await repositories.buildings.update("BLDG", replace(stale, id="HQ"))

    assert exc.value.details["rev"] == stale.rev
    assert fake_store.ids("buildings") == ["BLDG"]
    writes = [
        (method, path)
        for method, path, _ in fake_store.calls
        if method in ("PUT", "DELETE") or (method, path) == ("POST", "buildings")
    ]
    assert writes == []
