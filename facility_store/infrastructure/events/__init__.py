"""Event publisher implementations."""

from typing import Optional

from facility_store.domain.gateways.event_publisher import IEventPublisher

from .logging_publisher import LoggingEventPublisher
from .redis_publisher import RedisEventPublisher


def build_event_publisher(
    redis_url: Optional[str] = None, channel_prefix: str = "facility"
) -> IEventPublisher:
    """Use Redis when a URL is configured, the structured log otherwise."""
    if redis_url:
        return RedisEventPublisher(redis_url, channel_prefix=channel_prefix)
    return LoggingEventPublisher()


__all__ = ["LoggingEventPublisher", "RedisEventPublisher", "build_event_publisher"]
