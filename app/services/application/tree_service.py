"""
Application service: tree listing and placement within a farm's zone.
"""
import logging
from typing import List, Optional

from app.domain.errors import NotFoundError
from app.domain.models import HealthStatus, Tree
from app.infrastructure.document_store import DocumentStore
from app.services.application.zone_service import ZoneService
from app.services.domain.tree_grid_placer import TreeGridPlacer

logger = logging.getLogger(__name__)


class TreeService:
    """
    Application service for tree operations.

    Resolves the farm/zone path, then hands placement to the grid placer.
    """

    def __init__(
        self,
        store: DocumentStore,
        zone_service: ZoneService,
        grid_placer: TreeGridPlacer,
    ):
        self.store = store
        self.zone_service = zone_service
        self.grid_placer = grid_placer

    async def list_trees(self, farm_id: str, zone_id: str) -> List[Tree]:
        await self.zone_service.get_zone(farm_id, zone_id)
        return await self.store.trees.list_by_zone(zone_id)

    async def create_tree(self, farm_id: str, zone_id: str, tree: Tree) -> Tree:
        await self.zone_service.get_zone(farm_id, zone_id)
        return await self.grid_placer.place_single_tree(
            zone_id,
            tree.tree_code,
            tree.row_number,
            tree.index_in_row,
            tree.health_status,
        )

    async def create_trees(self, farm_id: str, zone_id: str, trees: List[Tree]) -> List[Tree]:
        await self.zone_service.get_zone(farm_id, zone_id)
        created = await self.grid_placer.place_trees_batch(zone_id, trees)
        logger.info(f"Stored batch of {len(created)} trees in zone {zone_id}")
        return created

    async def create_trees_bulk(
        self,
        farm_id: str,
        zone_id: str,
        count: int,
        row_start: int = 0,
        code_prefix: str = "T",
        health: Optional[HealthStatus] = None,
    ) -> List[Tree]:
        await self.zone_service.get_zone(farm_id, zone_id)
        return await self.grid_placer.place_trees_bulk(
            zone_id, count, row_start, code_prefix, health
        )

    async def delete_tree(self, farm_id: str, zone_id: str, tree_id: str) -> None:
        """
        Delete a tree of the zone.

        Raises:
            NotFoundError: If the zone or the tree does not exist
        """
        await self.zone_service.get_zone(farm_id, zone_id)
        tree = await self.store.trees.get(tree_id)
        if tree.zone_id != zone_id:
            raise NotFoundError("Tree", tree_id)
        await self.store.trees.delete(tree_id)
