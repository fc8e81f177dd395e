"""
Main module - Composition Root Layer

Settings loading and the dependency injection container that assembles the
gateway, the query engine, the cascade engine and the repositories.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, create_container, store_lifespan

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "create_container",
    "store_lifespan",
]
