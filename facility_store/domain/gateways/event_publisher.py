"""
Event Publisher Interface - Domain Layer

Announces entity changes to interested parties. Repositories never depend on
delivery: a failed publish is logged and the mutation still succeeds.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IEventPublisher(ABC):
    """Interface for entity change notifications."""

    @abstractmethod
    async def publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        """Publish ``payload`` under ``event_type`` (e.g. ``device.created``)."""
        pass

    async def close(self) -> None:
        """Release any underlying connection."""
        return None
