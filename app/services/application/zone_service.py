"""
Application service: zone creation behind the admission check.
"""
import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from app.config import settings
from app.domain.errors import CapacityExceededError, InvalidInputError, NotFoundError
from app.domain.models import Zone
from app.infrastructure.document_store import DocumentStore
from app.services.domain.tree_grid_placer import GridSummary, TreeGridPlacer
from app.services.domain.zone_admission import (
    ZoneAdmissionChecker,
    check_zone_geometry,
)

logger = logging.getLogger(__name__)


class FarmLockRegistry:
    """
    One asyncio lock per farm, held only while some request uses it.

    Only serializes admissions inside this process; several workers
    sharing a store still need a store-level guard.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def __len__(self) -> int:
        return len(self._locks)

    def lock_for(self, farm_id: str) -> asyncio.Lock:
        lock = self._locks.get(farm_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[farm_id] = lock
        return lock


_farm_locks = FarmLockRegistry()


class ZoneService:
    """
    Application service for zone operations.

    Admission and insert form one step per farm when serialization is on,
    so two concurrent requests cannot both pass on the same used area.
    """

    def __init__(
        self,
        store: DocumentStore,
        admission_checker: ZoneAdmissionChecker,
        grid_placer: TreeGridPlacer,
        serialize_admission: Optional[bool] = None,
        enforce_geometry: Optional[bool] = None,
        cascade_deletes: Optional[bool] = None,
        locks: Optional[FarmLockRegistry] = None,
    ):
        self.store = store
        self.admission_checker = admission_checker
        self.grid_placer = grid_placer
        self.serialize_admission = (
            settings.serialize_zone_admission
            if serialize_admission is None else serialize_admission
        )
        self.enforce_geometry = (
            settings.enforce_zone_geometry if enforce_geometry is None else enforce_geometry
        )
        self.cascade_deletes = (
            settings.cascade_deletes if cascade_deletes is None else cascade_deletes
        )
        self.locks = locks or _farm_locks

    @asynccontextmanager
    async def _admission_guard(self, farm_id: str) -> AsyncIterator[None]:
        if not self.serialize_admission:
            yield
            return
        async with self.locks.lock_for(farm_id):
            yield

    async def create_zone(self, farm_id: str, zone: Zone) -> Zone:
        """
        Admit and persist a new zone.

        Args:
            farm_id: Farm receiving the zone; overrides zone.farm_id
            zone: Proposed zone

        Returns:
            The stored zone

        Raises:
            NotFoundError: If the farm does not exist
            CapacityExceededError: If the zone does not fit the farm's area
            InvalidInputError: If geometry enforcement rejects the placement
        """
        candidate = zone.model_copy(update={"farm_id": farm_id})
        # Unknown farms fail before a lock is registered for them
        farm = await self.store.farms.get(farm_id)

        async with self._admission_guard(farm_id):
            if not await self.admission_checker.can_admit_zone(farm_id, candidate.area):
                raise CapacityExceededError()

            if self.enforce_geometry:
                existing = await self.store.zones.list_by_farm(farm_id)
                problems = check_zone_geometry(farm, candidate, existing)
                if problems:
                    raise InvalidInputError("; ".join(problems))

            created = await self.store.zones.create(candidate)

        logger.info(f"Created zone {created.id} ({created.area:.2f}m²) in farm {farm_id}")
        return created

    async def list_zones(self, farm_id: str) -> List[Zone]:
        return await self.store.zones.list_by_farm(farm_id)

    async def get_zone(self, farm_id: str, zone_id: str) -> Zone:
        """
        Load a zone and check it belongs to the farm.

        Raises:
            NotFoundError: If the zone does not exist in this farm
        """
        zone = await self.store.zones.get(zone_id)
        if zone.farm_id != farm_id:
            raise NotFoundError("Zone", zone_id)
        return zone

    async def delete_zone(self, farm_id: str, zone_id: str) -> None:
        await self.get_zone(farm_id, zone_id)
        if self.cascade_deletes:
            removed = await self.store.trees.delete_by_zone(zone_id)
            logger.info(f"Cascade-deleted {removed} trees of zone {zone_id}")
        await self.store.zones.delete(zone_id)

    async def get_grid(self, farm_id: str, zone_id: str) -> GridSummary:
        await self.get_zone(farm_id, zone_id)
        return await self.grid_placer.summarize_grid(zone_id)
