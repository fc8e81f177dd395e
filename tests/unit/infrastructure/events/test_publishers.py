from __future__ import annotations

import json

import pytest

from facility_store.infrastructure.events import (
    LoggingEventPublisher,
    RedisEventPublisher,
    build_event_publisher,
)


class _FakeRedis:
    def __init__(self) -> None:
        self.published = []
        self.closed = False

    async def publish(self, channel: str, message: str) -> int:
        self.published.append((channel, message))
        return 1

    async def aclose(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_redis_publisher_publishes_json_on_prefixed_channel() -> None:
    client = _FakeRedis()
    publisher = RedisEventPublisher("redis://redis:6379/0", "campus", client=client)

    await publisher.publish("device.created", {"id": "BLDG-101-CP1"})
    await publisher.close()

    channel, message = client.published[0]
    assert channel == "campus.device.created"
    assert json.loads(message) == {
        "event_type": "device.created",
        "payload": {"id": "BLDG-101-CP1"},
    }
    assert client.closed is True


@pytest.mark.asyncio
async def test_logging_publisher_accepts_events() -> None:
    publisher = LoggingEventPublisher()

    await publisher.publish("room.deleted", {"id": "BLDG-101"})
    await publisher.close()


def test_build_event_publisher_selects_backend() -> None:
    assert isinstance(build_event_publisher(None), LoggingEventPublisher)
    publisher = build_event_publisher("redis://localhost:6379/0", "facility")
    assert isinstance(publisher, RedisEventPublisher)
    assert publisher.channel_for("building.updated") == "facility.building.updated"
