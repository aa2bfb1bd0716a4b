"""
Spatial helper functions for farm layouts.

Provides utilities for:
- Rectangle construction for farms and zones
- Containment and overlap tests between zone rectangles
- Grid slot arithmetic for fixed-spacing tree rows
"""
import logging
import math
from typing import Iterable, List, Tuple

import numpy as np
from shapely.geometry import Polygon, box

from app.domain.models import Farm, Tree, Zone

logger = logging.getLogger(__name__)


def farm_rectangle(farm: Farm) -> Polygon:
    """
    Build the farm's rectangle, anchored at the origin.

    Width runs along x and length along y, the same axes zones use.

    Args:
        farm: Farm to outline

    Returns:
        Shapely polygon covering the farm
    """
    return box(0, 0, farm.width, farm.length)


def zone_rectangle(zone: Zone) -> Polygon:
    """
    Build a zone's rectangle (x, y, x + width, y + length).

    Args:
        zone: Zone to outline

    Returns:
        Shapely polygon covering the zone
    """
    return box(zone.x, zone.y, zone.x + zone.width, zone.y + zone.length)


def total_area(zones: Iterable[Zone]) -> float:
    """Sum of width x length over the given zones."""
    return float(sum(zone.width * zone.length for zone in zones))


def is_inside_farm(farm: Farm, zone: Zone) -> bool:
    """Check the zone rectangle lies entirely within the farm (edges included)."""
    return farm_rectangle(farm).covers(zone_rectangle(zone))


def find_overlapping_zones(candidate: Zone, zones: Iterable[Zone]) -> List[Zone]:
    """
    Find existing zones whose rectangles share area with the candidate.

    Rectangles that only touch along an edge are not overlapping.

    Args:
        candidate: Zone being placed
        zones: Zones already on the farm

    Returns:
        List of zones with a positive intersection area
    """
    candidate_rect = zone_rectangle(candidate)
    overlapping = []
    for zone in zones:
        intersection = candidate_rect.intersection(zone_rectangle(zone))
        if intersection.area > 0:
            logger.debug(
                f"Zone '{candidate.name}' overlaps zone '{zone.name}' "
                f"by {intersection.area:.2f}m²"
            )
            overlapping.append(zone)
    return overlapping


def slots_along(extent: float, spacing: float) -> int:
    """Number of grid slots of the given spacing that fit along an extent."""
    return int(math.floor(extent / spacing))


def row_major_slots(
    count: int,
    per_row: int,
    row_start: int = 0,
) -> List[Tuple[int, int]]:
    """
    Lay out ``count`` slots row by row, left to right.

    Args:
        count: Number of slots to generate
        per_row: Slots per row (must be positive)
        row_start: Row of the first slot

    Returns:
        List of (row, index) pairs in generation order
    """
    rows, indices = np.divmod(np.arange(count), per_row)
    return [(row_start + int(row), int(index)) for row, index in zip(rows, indices)]


def duplicate_slots(trees: List[Tree]) -> List[Tuple[int, int]]:
    """
    Find (row, index) slots held by more than one tree.

    Args:
        trees: Trees of a single zone

    Returns:
        Sorted list of over-occupied (row, index) slots
    """
    if not trees:
        return []
    slots = np.array([(tree.row_number, tree.index_in_row) for tree in trees])
    unique, counts = np.unique(slots, axis=0, return_counts=True)
    return [(int(row), int(index)) for row, index in unique[counts > 1]]
