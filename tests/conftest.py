from __future__ import annotations

import copy
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import unquote
from uuid import uuid4

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from facility_store.domain.entities.device import (  # noqa: E402
    Command,
    Device,
    DeviceType,
    Endpoint,
    Microservice,
    Port,
    PowerState,
    Role,
)
from facility_store.domain.entities.errors import (  # noqa: E402
    BadRequestError,
    ConflictError,
    NotFoundError,
    StoreError,
)
from facility_store.domain.entities.facility import Building, Room  # noqa: E402
from facility_store.domain.gateways.document_store_gateway import (  # noqa: E402
    IDocumentStoreGateway,
)
from facility_store.domain.gateways.event_publisher import (  # noqa: E402
    IEventPublisher,
)
from facility_store.domain.services.cascade_engine import CascadeEngine  # noqa: E402
from facility_store.infrastructure.database import PrefixQueryEngine  # noqa: E402
from facility_store.infrastructure.repositories import (  # noqa: E402
    BuildingRepository,
    DeviceRepository,
    DeviceTypeRepository,
    RoomConfigurationRepository,
    RoomRepository,
    UIConfigRepository,
)


def _store_error(cls: type, code: str, reason: str) -> StoreError:
    return cls(f"{code}: {reason}", details={"error": code, "reason": reason})


class FakeDocumentStore(IDocumentStoreGateway):
    """In-memory stand-in for a CouchDB server.

    Keeps revisions per document, answers conflicts on duplicate IDs and stale
    revisions, and evaluates ``_find`` selectors on ``_id`` ranges.
    """

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str, Optional[Dict[str, str]]]] = []
        self.failures: Dict[Tuple[str, str], StoreError] = {}

    def fail_on(self, method: str, path: str, error: StoreError) -> None:
        self.failures[(method, path)] = error

    def seed(self, collection: str, document: Dict[str, Any]) -> str:
        rev = self._next_rev(None)
        self.collections.setdefault(collection, {})[document["_id"]] = {
            **copy.deepcopy(document),
            "_rev": rev,
        }
        return rev

    def ids(self, collection: str) -> List[str]:
        return sorted(self.collections.get(collection, {}))

    def document(self, collection: str, doc_id: str) -> Dict[str, Any]:
        return self.collections[collection][doc_id]

    async def execute(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        self.calls.append((method, path, params))
        if (method, path) in self.failures:
            raise self.failures[(method, path)]

        collection, _, raw_id = path.partition("/")
        documents = self.collections.setdefault(collection, {})
        doc_id = unquote(raw_id)
        rev = (params or {}).get("rev")

        if method == "POST" and doc_id == "_find":
            return {"docs": self._find(documents, body)}

        if method == "POST":
            doc_id = body["_id"]
            if doc_id in documents:
                raise _store_error(ConflictError, "conflict", "Document update conflict.")
            return self._write(documents, doc_id, body, None)

        if method == "GET":
            if doc_id not in documents:
                raise _store_error(NotFoundError, "not_found", "missing")
            return copy.deepcopy(documents[doc_id])

        if method == "PUT":
            current = documents.get(doc_id)
            if current is None and rev:
                raise _store_error(NotFoundError, "not_found", "missing")
            if current is not None and current["_rev"] != rev:
                raise _store_error(ConflictError, "conflict", "Document update conflict.")
            return self._write(documents, doc_id, body, current)

        if method == "DELETE":
            current = documents.get(doc_id)
            if current is None:
                raise _store_error(NotFoundError, "not_found", "deleted")
            if current["_rev"] != rev:
                raise _store_error(ConflictError, "conflict", "Document update conflict.")
            del documents[doc_id]
            return {"ok": True, "id": doc_id, "rev": self._next_rev(current["_rev"])}

        raise _store_error(BadRequestError, "bad_request", f"unsupported {method}")

    def _write(
        self,
        documents: Dict[str, Dict[str, Any]],
        doc_id: str,
        body: Dict[str, Any],
        current: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        rev = self._next_rev(current["_rev"] if current else None)
        documents[doc_id] = {**copy.deepcopy(body), "_id": doc_id, "_rev": rev}
        return {"ok": True, "id": doc_id, "rev": rev}

    @staticmethod
    def _find(
        documents: Dict[str, Dict[str, Any]], query: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        bounds = query["selector"]["_id"]
        lower = bounds.get("$gt")
        upper = bounds.get("$lt")
        selected = [
            copy.deepcopy(documents[doc_id])
            for doc_id in sorted(documents)
            if (lower is None or doc_id > lower) and (upper is None or doc_id < upper)
        ]
        return selected[: query.get("limit", 25)]

    @staticmethod
    def _next_rev(previous: Optional[str]) -> str:
        generation = int(previous.split("-", 1)[0]) + 1 if previous else 1
        return f"{generation}-{uuid4().hex}"


class RecordingEventPublisher(IEventPublisher):
    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []
        self.closed = False

    async def publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.events.append((event_type, payload))

    async def close(self) -> None:
        self.closed = True

    def types(self) -> List[str]:
        return [event_type for event_type, _ in self.events]


@pytest.fixture()
def fake_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture()
def event_publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()


@pytest.fixture()
def query_engine(fake_store: FakeDocumentStore) -> PrefixQueryEngine:
    return PrefixQueryEngine(fake_store)


@pytest.fixture()
def repositories(
    fake_store: FakeDocumentStore,
    query_engine: PrefixQueryEngine,
    event_publisher: RecordingEventPublisher,
) -> SimpleNamespace:
    cascade_engine = CascadeEngine(max_workers=2)
    device_types = DeviceTypeRepository(fake_store, query_engine, event_publisher)
    devices = DeviceRepository(
        fake_store,
        query_engine,
        device_type_repository=device_types,
        event_publisher=event_publisher,
    )
    rooms = RoomRepository(
        fake_store,
        query_engine,
        device_repository=devices,
        cascade_engine=cascade_engine,
        event_publisher=event_publisher,
    )
    buildings = BuildingRepository(
        fake_store,
        query_engine,
        room_repository=rooms,
        cascade_engine=cascade_engine,
        event_publisher=event_publisher,
    )
    return SimpleNamespace(
        buildings=buildings,
        rooms=rooms,
        devices=devices,
        device_types=device_types,
        room_configurations=RoomConfigurationRepository(
            fake_store, query_engine, event_publisher
        ),
        ui_configs=UIConfigRepository(fake_store, query_engine, event_publisher),
    )


@pytest.fixture()
def sample_building() -> Building:
    return Building(id="BLDG", name="Main building", description="Campus HQ")


@pytest.fixture()
def sample_room() -> Room:
    return Room(id="BLDG-101", name="Lecture hall", designation="classroom")


@pytest.fixture()
def sample_device_type() -> DeviceType:
    return DeviceType(
        id="Projector",
        description="Ceiling mounted projector",
        display_name="Projector",
        input=True,
        roles=[Role(id="VideoOut")],
        ports=[Port(id="HDMI1", port_type="video")],
        power_states=[PowerState(id="active"), PowerState(id="standby")],
        commands=[
            Command(
                id="PowerOn",
                microservice=Microservice(
                    id="projector-ms", address="http://projector-ms:8080"
                ),
                endpoint=Endpoint(id="power", path="/power/on"),
            )
        ],
    )


def make_device(
    device_id: str, type_id: str = "Projector", roles: Optional[List[str]] = None, **kwargs: Any
) -> Device:
    return Device(
        id=device_id,
        name=kwargs.pop("name", f"Device {device_id}"),
        type=kwargs.pop("type", DeviceType(id=type_id)),
        roles=[Role(id=role) for role in (roles or ["VideoOut"])],
        **kwargs,
    )


@pytest.fixture()
def seeded_room(
    fake_store: FakeDocumentStore, sample_building: Building, sample_room: Room
) -> Room:
    fake_store.seed("buildings", {"_id": sample_building.id, "name": sample_building.name})
    fake_store.seed("rooms", {"_id": sample_room.id, "name": sample_room.name})
    return sample_room


@pytest.fixture()
def device_factory():
    return make_device
