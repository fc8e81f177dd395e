"""
Infrastructure Layer Package

Implementations of the domain interfaces against external systems: the
HTTP document store, the prefix query engine, event publishers and the
entity repositories.
"""

from facility_store.infrastructure import database, events, gateways, repositories

__all__ = ["database", "events", "gateways", "repositories"]
