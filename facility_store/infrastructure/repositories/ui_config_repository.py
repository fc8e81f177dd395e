"""
UI Config Repository - Infrastructure Layer

A UI configuration is stored under the ID of the room it lays out. Fields the
package does not model are kept in ``extras`` and written back untouched.
"""

from dataclasses import replace
from typing import Any, Dict

from facility_store.domain.entities.errors import ConflictError, StoreError
from facility_store.domain.entities.facility import UIConfig
from facility_store.domain.repositories.ui_config_repository import (
    IUIConfigRepository,
)
from facility_store.domain.services.entity_validator import validate_ui_config
from facility_store.infrastructure.gateways.document_store_gateway import (
    document_path,
)
from facility_store.infrastructure.repositories.base import DocumentRepository
from facility_store.infrastructure.repositories.documents import (
    ui_config_from_document,
    ui_config_to_document,
)
from facility_store.shared import Collection


class UIConfigRepository(DocumentRepository[UIConfig], IUIConfigRepository):
    """Document store implementation of the UIConfigRepository."""

    COLLECTION = Collection.UI_CONFIGURATIONS
    KIND = "ui config"

    def _to_document(self, entity: UIConfig) -> Dict[str, Any]:
        return ui_config_to_document(entity)

    def _to_entity(self, document: Dict[str, Any]) -> UIConfig:
        return ui_config_from_document(document)

    async def create(self, entity: UIConfig) -> UIConfig:
        return await self.create_for_room(entity.id, entity)

    async def create_for_room(self, room_id: str, ui_config: UIConfig) -> UIConfig:
        """
        Store ``ui_config`` under ``room_id``.

        Raises:
            ValidationFailedError: ``room_id`` is not a room ID
            ConflictError: The room already has a UI configuration
        """
        entity = replace(ui_config, id=room_id, rev=None)
        validate_ui_config(entity, self.scheme)
        try:
            response = await self.gateway.execute(
                "PUT",
                document_path(self.collection, room_id),
                body=self._to_document(entity),
            )
        except ConflictError as e:
            raise ConflictError(
                f"{self.KIND} for room {room_id} already exists, please update it",
                details={**e.details, "kind": self.KIND, "id": room_id},
            ) from e
        except StoreError as e:
            raise self._with_context(e, "create", room_id) from e

        await self._announce("created", room_id)
        return replace(entity, rev=self._rev_of(response))

    async def update(self, entity_id: str, entity: UIConfig) -> UIConfig:
        validate_ui_config(entity, self.scheme)
        updated = await self._save(entity_id, entity)
        await self._announce("updated", updated.id, previous_id=entity_id)
        return updated

    async def delete(self, entity_id: str) -> None:
        await self._remove(entity_id)
        await self._announce("deleted", entity_id)
