"""
Dependency container injection module - Main Layer

This module implements the dependency injection container that wires the
gateway, the query engine and the repositories together. Containers are
built explicitly from an AppSettings instance; there is no global one.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dependency_injector import containers, providers

from facility_store.domain.services.cascade_engine import CascadeEngine
from facility_store.domain.services.identifier_scheme import HierarchicalIdScheme
from facility_store.infrastructure.database import PrefixQueryEngine
from facility_store.infrastructure.events import build_event_publisher
from facility_store.infrastructure.gateways import HttpDocumentStoreGateway
from facility_store.infrastructure.repositories import (
    BuildingRepository,
    DeviceRepository,
    DeviceTypeRepository,
    RoomConfigurationRepository,
    RoomRepository,
    UIConfigRepository,
)
from facility_store.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    # Settings
    config = providers.Configuration()

    # Infrastructure
    document_store_gateway = providers.Singleton(
        HttpDocumentStoreGateway,
        address=config.database.address,
        username=config.database.username,
        password=config.database.password,
        timeout=config.database.timeout,
    )

    id_scheme = providers.Singleton(HierarchicalIdScheme)

    query_engine = providers.Singleton(
        PrefixQueryEngine,
        gateway=document_store_gateway,
        scheme=id_scheme,
        page_size=config.database.query_page_size,
        scan_limit=config.database.scan_limit,
    )

    event_publisher = providers.Singleton(
        build_event_publisher,
        redis_url=config.events.redis_url,
        channel_prefix=config.events.channel_prefix,
    )

    # Domain services
    cascade_engine = providers.Singleton(
        CascadeEngine,
        max_workers=config.cascade.max_workers,
    )

    # Repositories
    device_type_repository = providers.Singleton(
        DeviceTypeRepository,
        gateway=document_store_gateway,
        query_engine=query_engine,
        event_publisher=event_publisher,
        scheme=id_scheme,
    )

    device_repository = providers.Singleton(
        DeviceRepository,
        gateway=document_store_gateway,
        query_engine=query_engine,
        device_type_repository=device_type_repository,
        event_publisher=event_publisher,
        scheme=id_scheme,
        missing_type_policy=config.database.missing_type_policy,
    )

    room_repository = providers.Singleton(
        RoomRepository,
        gateway=document_store_gateway,
        query_engine=query_engine,
        device_repository=device_repository,
        cascade_engine=cascade_engine,
        event_publisher=event_publisher,
        scheme=id_scheme,
    )

    building_repository = providers.Singleton(
        BuildingRepository,
        gateway=document_store_gateway,
        query_engine=query_engine,
        room_repository=room_repository,
        cascade_engine=cascade_engine,
        event_publisher=event_publisher,
        scheme=id_scheme,
    )

    room_configuration_repository = providers.Singleton(
        RoomConfigurationRepository,
        gateway=document_store_gateway,
        query_engine=query_engine,
        event_publisher=event_publisher,
        scheme=id_scheme,
    )

    ui_config_repository = providers.Singleton(
        UIConfigRepository,
        gateway=document_store_gateway,
        query_engine=query_engine,
        event_publisher=event_publisher,
        scheme=id_scheme,
    )


def create_container(settings: AppSettings) -> AppContainer:
    """Build a container configured from ``settings``."""

    container = AppContainer()
    container.config.from_pydantic(settings)
    return container


@asynccontextmanager
async def store_lifespan(container: AppContainer) -> AsyncIterator[AppContainer]:
    """
    Lifecycle of the container's external resources.

    The HTTP gateway opens a client per request and needs no cleanup; the
    event publisher may hold a Redis connection and is closed on exit.
    """
    event_publisher = container.event_publisher()
    logger.info("container.resources.initialized")
    try:
        yield container
    finally:
        logger.info("container.event_publisher.close")
        await event_publisher.close()
        logger.info("container.resources.shutdown")
