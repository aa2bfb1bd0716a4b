"""
Domain service: tree placement on a zone's fixed-spacing grid.

Trees sit on a square grid with one slot every ``TREE_SPACING_M`` meters.
A slot is addressed by its zero-based row and its index within the row;
rows run along the zone's length and indices along its width.

Placement is permissive: two trees may share a slot and rows may run past
the zone's length. ``find_slot_collisions`` reports shared slots without
preventing them.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.domain.errors import InvalidInputError, InvalidZoneDimensionsError
from app.domain.models import HealthStatus, Tree, Zone
from app.infrastructure.document_store import TreeStore, ZoneStore
from app.utils.spatial_helpers import duplicate_slots, row_major_slots, slots_along

logger = logging.getLogger(__name__)

TREE_SPACING_M = 5
MAX_BULK_TREES = 1000
TREE_CODE_DIGITS = 3


def slot_to_position(row: int, index: int) -> Tuple[float, float]:
    """
    Physical position of a slot, in meters from the zone's top-left corner.

    Args:
        row: Zero-based row number
        index: Zero-based index within the row

    Returns:
        (x, y) position in meters
    """
    return (index * TREE_SPACING_M, row * TREE_SPACING_M)


def trees_per_row(zone: Zone) -> int:
    return slots_along(zone.width, TREE_SPACING_M)


def row_capacity(zone: Zone) -> int:
    return slots_along(zone.length, TREE_SPACING_M)


def bulk_tree_code(prefix: str, number: int) -> str:
    """Code for the ``number``-th tree of a bulk placement, e.g. T007."""
    return f"{prefix}{str(number).zfill(TREE_CODE_DIGITS)}"


def compute_bulk_slots(
    per_row: int,
    count: int,
    row_start: int = 0,
) -> List[Tuple[int, int]]:
    """
    Row-major slot assignment for ``count`` trees.

    Args:
        per_row: Trees that fit in one row
        count: Number of trees to place
        row_start: Row receiving the first tree

    Returns:
        List of (row, index) pairs in generation order

    Raises:
        InvalidZoneDimensionsError: If no tree fits in a row
    """
    if per_row <= 0:
        raise InvalidZoneDimensionsError(
            f"Zone is narrower than the {TREE_SPACING_M}m tree spacing"
        )
    return row_major_slots(count, per_row, row_start)


@dataclass
class GridSummary:
    """Grid dimensions and occupancy of a zone."""
    zone_id: str
    spacing_m: int
    trees_per_row: int
    row_capacity: int
    tree_count: int
    collisions: List[Tuple[int, int]]

    @property
    def slot_capacity(self) -> int:
        return self.trees_per_row * self.row_capacity


class TreeGridPlacer:
    """
    Places trees on zone grids and persists them.

    Validation happens before any write, so a rejected request leaves the
    store untouched.
    """

    def __init__(self, zone_store: ZoneStore, tree_store: TreeStore):
        self.zone_store = zone_store
        self.tree_store = tree_store

    @staticmethod
    def _validate_slot(tree_code: str, row: int, index: int) -> None:
        if not tree_code or not tree_code.strip():
            raise InvalidInputError("tree_code is required")
        if row < 0:
            raise InvalidInputError("row_number must be >= 0")
        if index < 0:
            raise InvalidInputError("index_in_row must be >= 0")

    async def place_single_tree(
        self,
        zone_id: str,
        tree_code: str,
        row: int,
        index: int,
        health: Optional[HealthStatus] = None,
    ) -> Tree:
        """
        Persist one tree at the given slot.

        Args:
            zone_id: Zone holding the tree
            tree_code: Free-text label, must not be empty
            row: Zero-based row number
            index: Zero-based index within the row
            health: Health status, OK when omitted

        Returns:
            The stored tree

        Raises:
            NotFoundError: If the zone does not exist
            InvalidInputError: If the code is empty or the slot is negative
        """
        self._validate_slot(tree_code, row, index)
        await self.zone_store.get(zone_id)

        tree = Tree(
            zone_id=zone_id,
            tree_code=tree_code,
            row_number=row,
            index_in_row=index,
            health_status=health or HealthStatus.OK,
        )
        return await self.tree_store.create(tree)

    async def place_trees_batch(self, zone_id: str, trees: List[Tree]) -> List[Tree]:
        """
        Persist caller-positioned trees as one batch.

        Args:
            zone_id: Zone holding the trees; overrides each tree's zone_id
            trees: Trees with their codes and slots already chosen

        Returns:
            The stored trees, in input order

        Raises:
            NotFoundError: If the zone does not exist
            InvalidInputError: If the batch is empty or any tree is invalid
        """
        if not trees:
            raise InvalidInputError("At least one tree is required")
        if len(trees) > MAX_BULK_TREES:
            raise InvalidInputError(f"At most {MAX_BULK_TREES} trees per batch")
        for tree in trees:
            self._validate_slot(tree.tree_code, tree.row_number, tree.index_in_row)
        await self.zone_store.get(zone_id)

        return await self.tree_store.create_batch(
            [tree.model_copy(update={"zone_id": zone_id}) for tree in trees]
        )

    async def place_trees_bulk(
        self,
        zone_id: str,
        count: int,
        row_start: int = 0,
        code_prefix: str = "T",
        health: Optional[HealthStatus] = None,
    ) -> List[Tree]:
        """
        Generate and persist ``count`` trees filling rows from ``row_start``.

        Tree ``i`` (zero-based) lands in row ``row_start + i // per_row`` at
        index ``i % per_row`` and is coded ``code_prefix`` + ``i + 1`` padded
        to three digits. Rows past the zone's length are allowed.

        Args:
            zone_id: Zone receiving the trees
            count: Number of trees, between 1 and MAX_BULK_TREES
            row_start: Row of the first tree
            code_prefix: Prefix of every generated tree code
            health: Health status for every tree, OK when omitted

        Returns:
            The stored trees in row-major order

        Raises:
            NotFoundError: If the zone does not exist
            InvalidInputError: If count or row_start is out of range
            InvalidZoneDimensionsError: If the zone is narrower than the spacing
        """
        if count < 1 or count > MAX_BULK_TREES:
            raise InvalidInputError(f"count must be between 1 and {MAX_BULK_TREES}")
        if row_start < 0:
            raise InvalidInputError("row_start must be >= 0")

        zone = await self.zone_store.get(zone_id)
        slots = compute_bulk_slots(trees_per_row(zone), count, row_start)
        status = health or HealthStatus.OK

        trees = [
            Tree(
                zone_id=zone_id,
                tree_code=bulk_tree_code(code_prefix, i + 1),
                row_number=row,
                index_in_row=index,
                health_status=status,
            )
            for i, (row, index) in enumerate(slots)
        ]

        last_row = slots[-1][0]
        if last_row >= row_capacity(zone):
            logger.warning(
                f"Bulk placement in zone {zone_id} reaches row {last_row}, "
                f"beyond the zone's {row_capacity(zone)} rows"
            )

        created = await self.tree_store.create_batch(trees)
        logger.info(f"Placed {len(created)} trees in zone {zone_id} from row {row_start}")
        return created

    async def find_slot_collisions(self, zone_id: str) -> List[Tuple[int, int]]:
        """Slots of the zone held by more than one tree."""
        trees = await self.tree_store.list_by_zone(zone_id)
        return duplicate_slots(trees)

    async def summarize_grid(self, zone_id: str) -> GridSummary:
        """
        Grid dimensions and current occupancy of a zone.

        Raises:
            NotFoundError: If the zone does not exist
        """
        zone = await self.zone_store.get(zone_id)
        trees = await self.tree_store.list_by_zone(zone_id)
        return GridSummary(
            zone_id=zone_id,
            spacing_m=TREE_SPACING_M,
            trees_per_row=trees_per_row(zone),
            row_capacity=row_capacity(zone),
            tree_count=len(trees),
            collisions=duplicate_slots(trees),
        )
