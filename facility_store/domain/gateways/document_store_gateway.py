"""
Document Store Gateway Interface - Domain Layer

A generic request/response seam over the document store's HTTP protocol.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IDocumentStoreGateway(ABC):
    """Interface for the document store gateway."""

    @abstractmethod
    async def execute(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Issue one request against the store.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Path relative to the store address, e.g. ``rooms/BLDG-101``
            body: JSON-serializable payload, if any
            params: Query string parameters (e.g. ``{"rev": "..."}``)

        Returns:
            The decoded JSON body of a 2xx response, or None if it was empty

        Raises:
            NotFoundError, ConflictError, BadRequestError, UnknownStoreError:
                The store answered with an error
            TransportError: The store could not be reached in time
        """
        pass
