"""
Entity Repository Interface

Operations every facility entity supports. Concrete repositories add their
hierarchy-scoped queries and cascade behaviour on top.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

T = TypeVar("T")


class IEntityRepository(ABC, Generic[T]):
    """Interface shared by all entity repositories."""

    @abstractmethod
    async def get(self, entity_id: str) -> T:
        """
        Fetch an entity by ID.

        Args:
            entity_id: ID of the document to fetch

        Returns:
            The entity, carrying its current revision token

        Raises:
            NotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """
        Create a new entity.

        Returns:
            The created entity with its newly assigned revision token

        Raises:
            ValidationFailedError: If the entity fails local checks
            ConflictError: If a document with the same ID already exists
        """
        pass

    @abstractmethod
    async def update(self, entity_id: str, entity: T) -> T:
        """
        Replace the entity stored under ``entity_id``.

        When ``entity.id`` differs from ``entity_id`` the entity is renamed:
        the new document is created before the old one is deleted.

        Raises:
            ConflictError: If the revision token is stale
            NotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def delete(self, entity_id: str) -> None:
        """
        Delete an entity by ID, guarded by its current revision token.

        Raises:
            NotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[T]:
        """List every entity in store key order (bounded by the scan limit)."""
        pass
