"""
Domain service: zone admission against a farm's surface budget.

A zone is admitted when the areas of the farm's existing zones plus the
candidate's area do not exceed the farm's own area. The check is an area
sum only; geometric placement is validated separately by
``check_zone_geometry`` when the deployment asks for it.
"""
import logging
from typing import List

from app.domain.errors import InvalidInputError
from app.domain.models import Farm, Zone
from app.infrastructure.document_store import FarmStore, ZoneStore
from app.utils.spatial_helpers import (
    find_overlapping_zones,
    is_inside_farm,
    total_area,
)

logger = logging.getLogger(__name__)


def fits_within_farm_area(
    farm_area: float,
    used_area: float,
    candidate_area: float,
) -> bool:
    """
    Decide whether a candidate area fits in the remaining farm surface.

    The boundary is inclusive and compared directly: inputs are meter-scale
    values typed by a person, so no epsilon is applied.

    Args:
        farm_area: Total farm surface in m²
        used_area: Surface already allocated to zones in m²
        candidate_area: Surface requested by the new zone in m²

    Returns:
        True if the whole candidate area fits
    """
    return used_area + candidate_area <= farm_area


class ZoneAdmissionChecker:
    """
    Decides whether a new zone can be added to a farm.

    Reads the farm and its zones from the stores and never writes.
    """

    def __init__(self, farm_store: FarmStore, zone_store: ZoneStore):
        self.farm_store = farm_store
        self.zone_store = zone_store

    async def can_admit_zone(self, farm_id: str, candidate_area: float) -> bool:
        """
        Check whether a zone of ``candidate_area`` m² fits in the farm.

        Args:
            farm_id: Farm receiving the zone
            candidate_area: Width x length of the proposed zone

        Returns:
            True if the zone can be admitted in full

        Raises:
            NotFoundError: If the farm does not exist
            InvalidInputError: If the candidate area is negative
        """
        if candidate_area < 0:
            raise InvalidInputError("Zone area cannot be negative")

        farm = await self.farm_store.get(farm_id)
        zones = await self.zone_store.list_by_farm(farm_id)
        used_area = total_area(zones)

        admitted = fits_within_farm_area(farm.area, used_area, candidate_area)
        logger.info(
            f"Admission for farm {farm_id}: used={used_area:.2f}m², "
            f"candidate={candidate_area:.2f}m², farm={farm.area:.2f}m² -> "
            f"{'admitted' if admitted else 'rejected'}"
        )
        return admitted


def check_zone_geometry(farm: Farm, candidate: Zone, zones: List[Zone]) -> List[str]:
    """
    Validate a candidate zone's rectangle against the farm layout.

    Args:
        farm: Farm receiving the zone
        candidate: Proposed zone, with its x/y offset
        zones: Zones already on the farm

    Returns:
        List of human readable problems, empty when the placement is valid
    """
    problems = []
    if not is_inside_farm(farm, candidate):
        problems.append(
            f"Zone '{candidate.name}' extends beyond the farm boundary "
            f"({farm.width}m x {farm.length}m)"
        )
    for zone in find_overlapping_zones(candidate, zones):
        problems.append(f"Zone '{candidate.name}' overlaps zone '{zone.name}'")
    return problems
