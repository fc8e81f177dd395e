"""Room Configuration Repository Interface"""

from facility_store.domain.entities.facility import RoomConfiguration
from facility_store.domain.repositories.entity_repository import IEntityRepository


class IRoomConfigurationRepository(IEntityRepository[RoomConfiguration]):
    """Room configurations; plain CRUD with no cascade obligations."""
