"""
Unit tests for tree grid placement.

Tests cover:
- Slot to position mapping
- Row-major bulk slot assignment
- Single, batch and bulk placement against the store
- Zone dimension and count validation
- Slot collision reporting
"""
import pytest

from app.domain.errors import (
    InvalidInputError,
    InvalidZoneDimensionsError,
    NotFoundError,
)
from app.domain.models import HealthStatus, Tree, Zone
from app.services.domain.tree_grid_placer import (
    MAX_BULK_TREES,
    TREE_SPACING_M,
    bulk_tree_code,
    compute_bulk_slots,
    row_capacity,
    slot_to_position,
    trees_per_row,
)


# ============================================================
# Pure Grid Arithmetic Tests
# ============================================================

class TestGridArithmetic:
    """Tests for grid helpers that do not touch the store."""

    @pytest.mark.parametrize("row,index,expected", [
        (0, 0, (0, 0)),
        (0, 3, (15, 0)),
        (2, 1, (5, 10)),
        (7, 7, (35, 35)),
    ])
    def test_slot_to_position(self, row, index, expected):
        assert slot_to_position(row, index) == expected

    def test_spacing_is_five_meters(self):
        assert TREE_SPACING_M == 5

    def test_trees_per_row_floors_width(self):
        zone = Zone(farm_id="f", name="z", width=22, length=14.9)

        assert trees_per_row(zone) == 4
        assert row_capacity(zone) == 2

    def test_bulk_codes_are_zero_padded(self):
        assert bulk_tree_code("T", 1) == "T001"
        assert bulk_tree_code("R2-", 42) == "R2-042"
        assert bulk_tree_code("T", 1000) == "T1000"

    def test_bulk_slots_are_row_major(self):
        slots = compute_bulk_slots(per_row=4, count=10, row_start=0)

        assert slots == [
            (0, 0), (0, 1), (0, 2), (0, 3),
            (1, 0), (1, 1), (1, 2), (1, 3),
            (2, 0), (2, 1),
        ]

    @pytest.mark.parametrize("per_row,count,row_start", [
        (1, 5, 0), (3, 7, 2), (4, 12, 5), (12, 30, 1),
    ])
    def test_bulk_slot_formula(self, per_row, count, row_start):
        slots = compute_bulk_slots(per_row, count, row_start)

        assert len(slots) == count
        for i, (row, index) in enumerate(slots):
            assert row == row_start + i // per_row
            assert index == i % per_row

    def test_bulk_slots_without_room_in_row(self):
        with pytest.raises(InvalidZoneDimensionsError):
            compute_bulk_slots(per_row=0, count=3)


# ============================================================
# Single Placement Tests
# ============================================================

class TestPlaceSingleTree:
    """Tests for placing one tree at an explicit slot."""

    @pytest.mark.asyncio
    async def test_places_tree_with_default_health(self, grid_placer, zone, store):
        tree = await grid_placer.place_single_tree(zone.id, "R1-T2", 1, 2)

        assert tree.id is not None
        assert tree.zone_id == zone.id
        assert tree.row_number == 1
        assert tree.index_in_row == 2
        assert tree.health_status == HealthStatus.OK
        assert len(store.trees.collection) == 1

    @pytest.mark.asyncio
    async def test_same_slot_twice_is_allowed(self, grid_placer, zone, store):
        await grid_placer.place_single_tree(zone.id, "A", 0, 0)
        await grid_placer.place_single_tree(zone.id, "B", 0, 0, HealthStatus.STRESS)

        assert len(await store.trees.list_by_zone(zone.id)) == 2
        assert await grid_placer.find_slot_collisions(zone.id) == [(0, 0)]

    @pytest.mark.asyncio
    async def test_unknown_zone_raises_not_found(self, grid_placer):
        with pytest.raises(NotFoundError):
            await grid_placer.place_single_tree("missing", "T1", 0, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code,row,index", [
        ("", 0, 0), ("   ", 0, 0), ("T1", -1, 0), ("T1", 0, -1),
    ])
    async def test_invalid_input(self, grid_placer, zone, store, code, row, index):
        with pytest.raises(InvalidInputError):
            await grid_placer.place_single_tree(zone.id, code, row, index)

        assert len(store.trees.collection) == 0


# ============================================================
# Batch Placement Tests
# ============================================================

class TestPlaceTreesBatch:
    """Tests for storing caller-positioned trees in one batch."""

    @pytest.mark.asyncio
    async def test_stores_trees_in_input_order(self, grid_placer, zone):
        trees = [
            Tree(zone_id="ignored", tree_code="X1", row_number=3, index_in_row=1),
            Tree(zone_id="ignored", tree_code="X2", row_number=0, index_in_row=0,
                 health_status=HealthStatus.DISEASE),
        ]

        created = await grid_placer.place_trees_batch(zone.id, trees)

        assert [tree.tree_code for tree in created] == ["X1", "X2"]
        assert all(tree.zone_id == zone.id for tree in created)
        assert created[1].health_status == HealthStatus.DISEASE

    @pytest.mark.asyncio
    async def test_one_invalid_tree_rejects_whole_batch(self, grid_placer, zone, store):
        trees = [
            Tree(zone_id=zone.id, tree_code="ok"),
            Tree(zone_id=zone.id, tree_code=""),
        ]

        with pytest.raises(InvalidInputError):
            await grid_placer.place_trees_batch(zone.id, trees)

        assert len(store.trees.collection) == 0

    @pytest.mark.asyncio
    async def test_empty_batch_is_invalid(self, grid_placer, zone):
        with pytest.raises(InvalidInputError):
            await grid_placer.place_trees_batch(zone.id, [])


# ============================================================
# Bulk Placement Tests
# ============================================================

class TestPlaceTreesBulk:
    """Tests for generated row-filling placement."""

    @pytest.mark.asyncio
    async def test_fills_rows_of_four_in_22m_zone(self, grid_placer, zone):
        created = await grid_placer.place_trees_bulk(zone.id, 10, 0, "T", HealthStatus.OK)

        layout = [(t.tree_code, t.row_number, t.index_in_row) for t in created]
        assert layout == [
            ("T001", 0, 0), ("T002", 0, 1), ("T003", 0, 2), ("T004", 0, 3),
            ("T005", 1, 0), ("T006", 1, 1), ("T007", 1, 2), ("T008", 1, 3),
            ("T009", 2, 0), ("T010", 2, 1),
        ]
        assert all(t.health_status == HealthStatus.OK for t in created)

    @pytest.mark.asyncio
    async def test_starts_at_requested_row(self, grid_placer, zone):
        created = await grid_placer.place_trees_bulk(zone.id, 5, row_start=3, code_prefix="R")

        assert [t.row_number for t in created] == [3, 3, 3, 3, 4]
        assert created[0].tree_code == "R001"

    @pytest.mark.asyncio
    async def test_rows_may_run_past_zone_length(self, grid_placer, zone):
        """The 30m zone has 6 rows; 40 trees need 10."""
        created = await grid_placer.place_trees_bulk(zone.id, 40)

        assert created[-1].row_number == 9

    @pytest.mark.asyncio
    async def test_repeated_bulk_duplicates_trees(self, grid_placer, zone, store):
        await grid_placer.place_trees_bulk(zone.id, 6, 0, "T")
        await grid_placer.place_trees_bulk(zone.id, 6, 0, "T")

        trees = await store.trees.list_by_zone(zone.id)
        assert len(trees) == 12
        assert len(await grid_placer.find_slot_collisions(zone.id)) == 6

    @pytest.mark.asyncio
    async def test_narrow_zone_is_rejected(self, grid_placer, narrow_zone, store):
        with pytest.raises(InvalidZoneDimensionsError):
            await grid_placer.place_trees_bulk(narrow_zone.id, 10, 0, "T")

        assert len(store.trees.collection) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, -3, MAX_BULK_TREES + 1])
    async def test_count_out_of_range(self, grid_placer, zone, count):
        with pytest.raises(InvalidInputError):
            await grid_placer.place_trees_bulk(zone.id, count)

    @pytest.mark.asyncio
    async def test_accepts_maximum_count(self, grid_placer, zone):
        created = await grid_placer.place_trees_bulk(zone.id, MAX_BULK_TREES)

        assert len(created) == MAX_BULK_TREES
        assert created[-1].tree_code == "T1000"

    @pytest.mark.asyncio
    async def test_negative_row_start(self, grid_placer, zone):
        with pytest.raises(InvalidInputError):
            await grid_placer.place_trees_bulk(zone.id, 3, row_start=-1)

    @pytest.mark.asyncio
    async def test_unknown_zone_raises_not_found(self, grid_placer):
        with pytest.raises(NotFoundError):
            await grid_placer.place_trees_bulk("missing", 3)


# ============================================================
# Grid Summary Tests
# ============================================================

class TestGridSummary:

    @pytest.mark.asyncio
    async def test_summary_of_planted_zone(self, grid_placer, zone):
        await grid_placer.place_trees_bulk(zone.id, 5)
        await grid_placer.place_single_tree(zone.id, "extra", 0, 0)

        summary = await grid_placer.summarize_grid(zone.id)

        assert summary.spacing_m == 5
        assert summary.trees_per_row == 4
        assert summary.row_capacity == 6
        assert summary.slot_capacity == 24
        assert summary.tree_count == 6
        assert summary.collisions == [(0, 0)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
