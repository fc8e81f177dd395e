"""
Redis Event Publisher - Infrastructure Layer

Publishes entity change notifications on Redis pub/sub channels named
``<channel_prefix>.<event_type>``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import redis.asyncio as redis

from facility_store.domain.gateways.event_publisher import IEventPublisher
from facility_store.shared import get_logger

logger = get_logger(__name__)


class RedisEventPublisher(IEventPublisher):
    """Redis pub/sub implementation of the event publisher."""

    def __init__(
        self,
        redis_url: str,
        channel_prefix: str = "facility",
        client: Optional[redis.Redis] = None,
    ):
        self.redis_url = redis_url
        self.channel_prefix = channel_prefix
        self._client = client or redis.Redis.from_url(
            redis_url,
            socket_connect_timeout=1.5,
            socket_timeout=1.5,
        )

    def channel_for(self, event_type: str) -> str:
        return f"{self.channel_prefix}.{event_type}"

    async def publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        channel = self.channel_for(event_type)
        message = json.dumps({"event_type": event_type, "payload": payload})
        receivers = await self._client.publish(channel, message)
        logger.debug("events.redis.published", channel=channel, receivers=receivers)

    async def close(self) -> None:
        await self._client.aclose()
