"""
Domain Layer Package

Entities, pure services and the interfaces of the facility hierarchy,
without dependencies on HTTP or any other infrastructure concern.
"""

from facility_store.domain import entities, gateways, repositories, services

__all__ = ["entities", "gateways", "repositories", "services"]
