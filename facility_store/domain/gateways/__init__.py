"""
Domain Gateways Package

Interfaces for the external collaborators: the document store and the event
notifier.
"""

from .document_store_gateway import IDocumentStoreGateway
from .event_publisher import IEventPublisher

__all__ = ["IDocumentStoreGateway", "IEventPublisher"]
