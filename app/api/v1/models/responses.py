"""
API response models using Pydantic.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.domain.models import (
    Farm,
    HealthStatus,
    IrrigationMode,
    Task,
    TaskPriority,
    TaskStatus,
    Tree,
    Zone,
)
from app.services.application.farm_service import FarmLayout
from app.services.domain.tree_grid_placer import GridSummary, slot_to_position


class FarmResponse(BaseModel):
    """Farm with its computed surface."""
    id: str
    owner_id: str
    name: str
    location: Optional[str] = None
    length: float
    width: float
    area: float = Field(description="Farm surface in m²")
    created_at: datetime

    @classmethod
    def from_domain(cls, farm: Farm) -> "FarmResponse":
        return cls(**farm.model_dump(), area=farm.area)


class ZoneResponse(BaseModel):
    """Zone with its computed surface."""
    id: str
    farm_id: str
    name: str
    crop_type: Optional[str] = None
    width: float
    length: float
    x: float
    y: float
    mode: IrrigationMode
    moisture_threshold: Optional[float] = None
    area: float = Field(description="Zone surface in m²")
    created_at: datetime

    @classmethod
    def from_domain(cls, zone: Zone) -> "ZoneResponse":
        return cls(**zone.model_dump(), area=zone.area)


class TreeResponse(BaseModel):
    """Tree with the physical position of its slot."""
    id: str
    zone_id: str
    tree_code: str
    row_number: int
    index_in_row: int
    health_status: HealthStatus
    last_seen_at: Optional[datetime] = None
    x: float = Field(description="Meters from the zone's left edge")
    y: float = Field(description="Meters from the zone's top edge")

    @classmethod
    def from_domain(cls, tree: Tree) -> "TreeResponse":
        x, y = slot_to_position(tree.row_number, tree.index_in_row)
        return cls(**tree.model_dump(), x=x, y=y)


class TaskResponse(BaseModel):
    id: str
    farm_id: str
    worker_id: str
    title: str
    description: Optional[str] = None
    priority: TaskPriority
    status: TaskStatus
    due_date: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls(**task.model_dump())


class FarmLayoutResponse(BaseModel):
    """Surface budget of a farm and the zones placed on it."""
    farm: FarmResponse
    used_area: float = Field(description="Sum of zone surfaces in m²")
    remaining_area: float = Field(description="Surface still available in m²")
    zones: List[ZoneResponse]

    @classmethod
    def from_domain(cls, layout: FarmLayout) -> "FarmLayoutResponse":
        return cls(
            farm=FarmResponse.from_domain(layout.farm),
            used_area=layout.used_area,
            remaining_area=layout.remaining_area,
            zones=[ZoneResponse.from_domain(zone) for zone in layout.zones],
        )


class SlotLocation(BaseModel):
    row_number: int
    index_in_row: int


class ZoneGridResponse(BaseModel):
    """Grid dimensions and occupancy of a zone."""
    zone_id: str
    spacing_m: int
    trees_per_row: int
    row_capacity: int
    slot_capacity: int
    tree_count: int
    collisions: List[SlotLocation] = Field(
        description="Slots held by more than one tree"
    )

    @classmethod
    def from_domain(cls, grid: GridSummary) -> "ZoneGridResponse":
        return cls(
            zone_id=grid.zone_id,
            spacing_m=grid.spacing_m,
            trees_per_row=grid.trees_per_row,
            row_capacity=grid.row_capacity,
            slot_capacity=grid.slot_capacity,
            tree_count=grid.tree_count,
            collisions=[
                SlotLocation(row_number=row, index_in_row=index)
                for row, index in grid.collisions
            ],
        )


class DeleteResponse(BaseModel):
    success: bool = True
