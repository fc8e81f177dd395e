"""
Device Repository - Infrastructure Layer

Devices are the leaves of the hierarchy. Before a device is written its room
(taken from the ID), its DeviceType and every device named by its ports must
exist. A missing DeviceType that is fully described inline is provisioned on
the fly. Only the type ID is persisted on the device document.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

from facility_store.domain.entities.device import Device, DeviceType, Port
from facility_store.domain.entities.errors import (
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from facility_store.domain.gateways.document_store_gateway import (
    IDocumentStoreGateway,
)
from facility_store.domain.gateways.event_publisher import IEventPublisher
from facility_store.domain.repositories.device_repository import IDeviceRepository
from facility_store.domain.repositories.device_type_repository import (
    IDeviceTypeRepository,
)
from facility_store.domain.services.device_type_assembly import (
    MissingTypePolicy,
    assemble_device_types,
)
from facility_store.domain.services.entity_validator import (
    is_fully_specified,
    validate_device,
)
from facility_store.domain.services.identifier_scheme import (
    DEFAULT_ID_SCHEME,
    HierarchicalIdScheme,
)
from facility_store.infrastructure.database.prefix_query import PrefixQueryEngine
from facility_store.infrastructure.repositories.base import DocumentRepository
from facility_store.infrastructure.repositories.documents import (
    device_from_document,
    device_to_document,
)
from facility_store.shared import Collection, get_logger

logger = get_logger(__name__)


class DeviceRepository(DocumentRepository[Device], IDeviceRepository):
    """Document store implementation of the DeviceRepository."""

    COLLECTION = Collection.DEVICES
    KIND = "device"
    SCAN_LIMIT = 5000

    def __init__(
        self,
        gateway: IDocumentStoreGateway,
        query_engine: PrefixQueryEngine,
        device_type_repository: IDeviceTypeRepository,
        event_publisher: Optional[IEventPublisher] = None,
        scheme: HierarchicalIdScheme = DEFAULT_ID_SCHEME,
        missing_type_policy: MissingTypePolicy = MissingTypePolicy.OMIT,
    ):
        super().__init__(gateway, query_engine, event_publisher, scheme)
        self.device_type_repository = device_type_repository
        self.missing_type_policy = MissingTypePolicy(missing_type_policy)

    def _to_document(self, entity: Device) -> Dict[str, Any]:
        return device_to_document(entity)

    def _to_entity(self, document: Dict[str, Any]) -> Device:
        return device_from_document(document)

    async def get(self, entity_id: str) -> Device:
        """Fetch a device with its live DeviceType."""
        device = self._to_entity(await self._fetch(entity_id))
        try:
            device_type = await self.device_type_repository.get(device.type.id)
        except NotFoundError as e:
            raise NotFoundError(
                f"failed to get device type {device.type.id!r} for device "
                f"{entity_id}: {e.message}",
                details={**e.details, "device_id": entity_id},
            ) from e
        return replace(device, type=device_type)

    async def create(self, entity: Device) -> Device:
        """
        Create a device.

        Raises:
            ValidationFailedError: Bad structure, or a port names a missing device
            NotFoundError: The room, or a non-provisionable type, does not exist
            ConflictError: A device with the same ID already exists
        """
        validate_device(entity, self.scheme)
        device_type = await self._verify_references(entity)

        created = await self._insert(replace(entity, type=device_type.as_reference()))
        logger.info("device.created", device_id=created.id, type_id=device_type.id)
        await self._announce("created", created.id, type=device_type.id)
        return replace(created, type=device_type)

    async def update(
        self, entity_id: str, entity: Device, verify_references: bool = True
    ) -> Device:
        validate_device(entity, self.scheme)
        if verify_references:
            device_type = await self._verify_references(entity)
        else:
            device_type = entity.type

        stored = replace(entity, type=device_type.as_reference())
        updated = await self._save(entity_id, stored)
        await self._announce("updated", updated.id, previous_id=entity_id)
        return replace(updated, type=device_type)

    async def delete(self, entity_id: str) -> None:
        await self._remove(entity_id)
        await self._announce("deleted", entity_id)

    async def find_all(self) -> List[Device]:
        """All devices, carrying type references only."""
        return await super().find_all()

    async def find_by_room(
        self, room_id: str, resolve_types: bool = True
    ) -> List[Device]:
        documents = await self.query_engine.find_children(self.collection, room_id)
        devices = [self._to_entity(document) for document in documents]
        if not resolve_types:
            return devices

        device_types = await self.device_type_repository.find_all()
        return assemble_device_types(devices, device_types, self.missing_type_policy)

    async def find_by_room_and_role(self, room_id: str, role_id: str) -> List[Device]:
        devices = await self.find_by_room(room_id)
        return [device for device in devices if device.has_role(role_id)]

    async def find_by_role_and_type(self, role_id: str, type_id: str) -> List[Device]:
        devices = await self.find_all()
        return [
            device
            for device in devices
            if device.has_role(role_id) and device.is_of_type(type_id)
        ]

    async def _verify_references(self, device: Device) -> DeviceType:
        room_id = self.scheme.room_id_of(device.id)
        if not await self._document_exists(Collection.ROOMS.value, room_id):
            logger.info(
                "device.create.room_missing", device_id=device.id, room_id=room_id
            )
            raise NotFoundError(
                f"unable to write device {device.id}: room {room_id} doesn't exist",
                details={"device_id": device.id, "room_id": room_id},
            )

        device_type = await self._resolve_type(device)

        for port in device.ports:
            await self._check_port(device.id, port)

        return device_type

    async def _resolve_type(self, device: Device) -> DeviceType:
        try:
            return await self.device_type_repository.get(device.type.id)
        except NotFoundError:
            if not is_fully_specified(device.type):
                raise NotFoundError(
                    f"device {device.id} references device type "
                    f"{device.type.id!r}, which doesn't exist, and not enough "
                    f"information is included to create it",
                    details={"device_id": device.id, "type_id": device.type.id},
                ) from None

        logger.info(
            "device.create.provisioning_type",
            device_id=device.id,
            type_id=device.type.id,
        )
        try:
            return await self.device_type_repository.create(
                replace(device.type, rev=None), deep=True
            )
        except ConflictError:
            # provisioned concurrently by someone else
            return await self.device_type_repository.get(device.type.id)

    async def _check_port(self, device_id: str, port: Port) -> None:
        for role, referenced in (
            ("source", port.source_device),
            ("destination", port.destination_device),
        ):
            if not referenced:
                continue
            if not await self._document_exists(self.collection, referenced):
                raise ValidationFailedError(
                    f"invalid port {port.id}. {role} device {referenced} doesn't "
                    f"exist. Create it before adding it to a port",
                    details={
                        "device_id": device_id,
                        "port": port.id,
                        role: referenced,
                    },
                )
