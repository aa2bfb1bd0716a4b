"""
Application service: Orchestration layer for farm operations.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from app.config import settings
from app.domain.errors import InvalidInputError
from app.domain.models import Farm, Zone
from app.infrastructure.document_store import DocumentStore
from app.utils.spatial_helpers import total_area

logger = logging.getLogger(__name__)

FARM_UPDATABLE_FIELDS = {"name", "location", "length", "width"}


@dataclass
class FarmLayout:
    """A farm's surface budget and the zones drawn on it."""
    farm: Farm
    used_area: float
    remaining_area: float
    zones: List[Zone]


class FarmService:
    """
    Application service for farm-related operations.

    Coordinates the stores; zone admission lives in ZoneService.
    """

    def __init__(
        self,
        store: DocumentStore,
        cascade_deletes: Optional[bool] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            store: Document store holding farms and their children
            cascade_deletes: Delete zones, trees and tasks with the farm;
                defaults to the configured policy
        """
        self.store = store
        self.cascade_deletes = (
            settings.cascade_deletes if cascade_deletes is None else cascade_deletes
        )

    async def create_farm(self, farm: Farm) -> Farm:
        created = await self.store.farms.create(farm)
        logger.info(f"Created farm {created.id} ({created.length}m x {created.width}m)")
        return created

    async def list_farms(self, owner_id: Optional[str] = None) -> List[Farm]:
        if owner_id is None:
            return await self.store.farms.list_all()
        return await self.store.farms.list_by_owner(owner_id)

    async def get_farm(self, farm_id: str) -> Farm:
        return await self.store.farms.get(farm_id)

    async def update_farm(self, farm_id: str, changes: dict) -> Farm:
        """
        Apply a partial update to a farm.

        Shrinking a farm below its allocated zone area is allowed; the
        layout then reports a negative remaining area.

        Raises:
            NotFoundError: If the farm does not exist
            InvalidInputError: If an unknown field or a bad dimension is given
        """
        unknown = set(changes) - FARM_UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        for dimension in ("length", "width"):
            if dimension in changes and (changes[dimension] is None or changes[dimension] <= 0):
                raise InvalidInputError(f"{dimension} must be positive")

        return await self.store.farms.update(farm_id, changes)

    async def delete_farm(self, farm_id: str) -> None:
        """
        Delete a farm.

        Without cascading, the farm's zones, trees and tasks are left in the
        store.

        Raises:
            NotFoundError: If the farm does not exist
        """
        await self.store.farms.get(farm_id)

        if self.cascade_deletes:
            zones = await self.store.zones.list_by_farm(farm_id)
            for zone in zones:
                await self.store.trees.delete_by_zone(zone.id)
            await self.store.zones.delete_by_farm(farm_id)
            await self.store.tasks.delete_by_farm(farm_id)
            logger.info(f"Cascade-deleted {len(zones)} zones of farm {farm_id}")

        await self.store.farms.delete(farm_id)
        logger.info(f"Deleted farm {farm_id}")

    async def get_layout(self, farm_id: str) -> FarmLayout:
        """
        Surface budget of a farm together with its zones.

        Raises:
            NotFoundError: If the farm does not exist
        """
        farm = await self.store.farms.get(farm_id)
        zones = await self.store.zones.list_by_farm(farm_id)
        used_area = total_area(zones)
        return FarmLayout(
            farm=farm,
            used_area=used_area,
            remaining_area=farm.area - used_area,
            zones=zones,
        )
