"""Event publisher that records entity changes in the structured log."""

from typing import Any, Dict

from facility_store.domain.gateways.event_publisher import IEventPublisher
from facility_store.shared import get_logger

logger = get_logger(__name__)


class LoggingEventPublisher(IEventPublisher):
    """Default publisher when no broker is configured."""

    async def publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        logger.info("events.published", event_type=event_type, payload=payload)
