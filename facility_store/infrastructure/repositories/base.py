"""
Document Repository Base - Infrastructure Layer

CRUD primitives shared by every entity repository: revision-guarded writes,
the two-phase rename (create the new document, then delete the old one) and
change announcements.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import replace
from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar

from facility_store.domain.entities.errors import (
    ConflictError,
    NotFoundError,
    StoreError,
)
from facility_store.domain.gateways.document_store_gateway import (
    IDocumentStoreGateway,
)
from facility_store.domain.gateways.event_publisher import IEventPublisher
from facility_store.domain.services.identifier_scheme import (
    DEFAULT_ID_SCHEME,
    HierarchicalIdScheme,
)
from facility_store.infrastructure.database.prefix_query import PrefixQueryEngine
from facility_store.infrastructure.gateways.document_store_gateway import (
    document_path,
)
from facility_store.shared import Collection, get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class DocumentRepository(Generic[T]):
    """Base class for repositories backed by one store collection."""

    COLLECTION: ClassVar[Collection]
    KIND: ClassVar[str]
    SCAN_LIMIT: ClassVar[int] = 1000

    def __init__(
        self,
        gateway: IDocumentStoreGateway,
        query_engine: PrefixQueryEngine,
        event_publisher: Optional[IEventPublisher] = None,
        scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME,
    ):
        self.gateway = gateway
        self.query_engine = query_engine
        self.event_publisher = event_publisher
        self.scheme = scheme

    @property
    def collection(self) -> str:
        return self.COLLECTION.value

    @abstractmethod
    def _to_document(self, entity: T) -> Dict[str, Any]:
        """Convert an entity to a store document (without ``_rev``)."""

    @abstractmethod
    def _to_entity(self, document: Dict[str, Any]) -> T:
        """Convert a store document to an entity."""

    # Reads ------------------------------------------------------------------

    async def get(self, entity_id: str) -> T:
        return self._to_entity(await self._fetch(entity_id))

    async def exists(self, entity_id: str) -> bool:
        return await self._document_exists(self.collection, entity_id)

    async def find_all(self) -> List[T]:
        documents = await self.query_engine.find_all(
            self.collection, limit=self.SCAN_LIMIT
        )
        return [self._to_entity(document) for document in documents]

    async def _fetch(self, entity_id: str) -> Dict[str, Any]:
        try:
            return await self.gateway.execute(
                "GET", document_path(self.collection, entity_id)
            )
        except NotFoundError as e:
            raise NotFoundError(
                f"{self.KIND} {entity_id} doesn't exist",
                details={**e.details, "kind": self.KIND, "id": entity_id},
            ) from e

    async def _document_exists(self, collection: str, doc_id: str) -> bool:
        try:
            await self.gateway.execute("GET", document_path(collection, doc_id))
        except NotFoundError:
            return False
        return True

    # Writes -----------------------------------------------------------------

    async def _insert(self, entity: T) -> T:
        """POST a new document; a duplicate ID surfaces as ConflictError."""
        entity_id = self._id_of(entity)
        try:
            response = await self.gateway.execute(
                "POST", self.collection, body=self._to_document(entity)
            )
        except ConflictError as e:
            raise ConflictError(
                f"{self.KIND} {entity_id} already exists, please update it or "
                f"change IDs",
                details={**e.details, "kind": self.KIND, "id": entity_id},
            ) from e
        except StoreError as e:
            raise self._with_context(e, "create", entity_id) from e
        return replace(entity, rev=self._rev_of(response))

    async def _replace(self, entity_id: str, entity: T) -> T:
        """PUT over the current document, guarded by a revision token.

        The token is ``entity.rev`` when set; otherwise the document's current
        revision is fetched first.
        """
        rev = getattr(entity, "rev", None)
        if not rev:
            rev = (await self._fetch(entity_id))["_rev"]
        try:
            response = await self.gateway.execute(
                "PUT",
                document_path(self.collection, entity_id),
                body=self._to_document(entity),
                params={"rev": rev},
            )
        except ConflictError as e:
            raise ConflictError(
                f"{self.KIND} {entity_id} was modified since revision {rev}; "
                f"fetch it again and retry",
                details={**e.details, "kind": self.KIND, "id": entity_id, "rev": rev},
            ) from e
        except StoreError as e:
            raise self._with_context(e, "update", entity_id) from e
        return replace(entity, rev=self._rev_of(response))

    async def _remove(self, entity_id: str, rev: Optional[str] = None) -> None:
        if not rev:
            rev = (await self._fetch(entity_id))["_rev"]
        try:
            await self.gateway.execute(
                "DELETE",
                document_path(self.collection, entity_id),
                params={"rev": rev},
            )
        except StoreError as e:
            raise self._with_context(e, "delete", entity_id) from e

    async def _move(self, old_id: str, entity: T) -> T:
        """Reassign a document's ID: create the new one, then delete the old.

        A stale ``entity.rev`` is rejected before anything is written. If the
        create fails nothing is deleted. If the delete fails the new document
        is kept and the error is raised, so no data is lost.
        """
        current = await self._fetch(old_id)
        rev = getattr(entity, "rev", None) or current["_rev"]
        if rev != current["_rev"]:
            raise ConflictError(
                f"{self.KIND} {old_id} was modified since revision {rev}; "
                f"fetch it again and retry",
                details={"kind": self.KIND, "id": old_id, "rev": rev},
            )
        new_id = self._id_of(entity)

        created = await self._insert(entity)
        try:
            await self._remove(old_id, rev=rev)
        except StoreError:
            logger.error(
                "repository.move.old_document_kept",
                kind=self.KIND,
                old_id=old_id,
                new_id=new_id,
            )
            raise

        logger.info("repository.moved", kind=self.KIND, old_id=old_id, new_id=new_id)
        return created

    async def _save(self, entity_id: str, entity: T) -> T:
        if entity_id == self._id_of(entity):
            return await self._replace(entity_id, entity)
        return await self._move(entity_id, entity)

    # Notifications ------------------------------------------------------------

    async def _announce(self, action: str, entity_id: str, **payload: Any) -> None:
        if self.event_publisher is None:
            return
        event_type = f"{self.KIND.replace(' ', '_')}.{action}"
        try:
            await self.event_publisher.publish(event_type, {"id": entity_id, **payload})
        except Exception as e:
            logger.warning(
                "repository.announce_failed",
                event_type=event_type,
                id=entity_id,
                error=str(e),
            )

    # Helpers ----------------------------------------------------------------

    def _with_context(
        self, error: StoreError, operation: str, entity_id: str
    ) -> StoreError:
        return type(error)(
            f"failed to {operation} {self.KIND} {entity_id}: {error.message}",
            details={
                **error.details,
                "kind": self.KIND,
                "operation": operation,
                "id": entity_id,
            },
        )

    @staticmethod
    def _id_of(entity: Any) -> str:
        return entity.id

    @staticmethod
    def _rev_of(response: Any) -> Optional[str]:
        if isinstance(response, dict):
            return response.get("rev") or response.get("_rev")
        return None
