"""
API request models using Pydantic.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.domain.models import (
    HealthStatus,
    IrrigationMode,
    TaskPriority,
    TaskStatus,
)
from app.services.domain.tree_grid_placer import MAX_BULK_TREES


class FarmCreate(BaseModel):
    """Payload for registering a farm."""
    name: str = Field(min_length=1, description="Farm name")
    location: Optional[str] = Field(default=None, description="Location label")
    length: float = Field(gt=0, description="Length in meters")
    width: float = Field(gt=0, description="Width in meters")
    owner_id: Optional[str] = Field(
        default=None,
        description="Owner reference, used when no X-Owner-Id header is sent"
    )

    class Config:
        json_schema_extra = {
            "example": {"name": "Oliveraie Nord", "location": "Sfax", "length": 100, "width": 60}
        }


class FarmUpdate(BaseModel):
    """Partial farm update; omitted fields are left untouched."""
    name: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = None
    length: Optional[float] = Field(default=None, gt=0)
    width: Optional[float] = Field(default=None, gt=0)


class ZoneCreate(BaseModel):
    """Payload for adding a zone to a farm."""
    name: str = Field(min_length=1, description="Zone name")
    crop_type: Optional[str] = None
    width: float = Field(gt=0, description="Width in meters")
    length: float = Field(gt=0, description="Length in meters")
    x: float = Field(default=0, ge=0, description="Top-left x offset in meters")
    y: float = Field(default=0, ge=0, description="Top-left y offset in meters")
    mode: IrrigationMode = IrrigationMode.AUTO
    moisture_threshold: Optional[float] = Field(default=None, ge=0, le=100)

    class Config:
        json_schema_extra = {
            "example": {"name": "Zone A", "crop_type": "olive", "width": 50, "length": 40}
        }


class TreeCreate(BaseModel):
    """A single tree at an explicit slot."""
    tree_code: str = Field(description="Free-text tree label")
    row_number: int = Field(default=0, ge=0)
    index_in_row: int = Field(default=0, ge=0)
    health_status: HealthStatus = HealthStatus.OK


class BulkTreeCreate(BaseModel):
    """Generate ``count`` trees filling rows from ``row_start``."""
    count: int = Field(ge=1, le=MAX_BULK_TREES, description="Number of trees to place")
    row_start: int = Field(default=0, ge=0, description="Row of the first tree")
    code_prefix: str = Field(default="T", description="Prefix of generated tree codes")
    health_status: HealthStatus = HealthStatus.OK

    class Config:
        json_schema_extra = {
            "example": {"count": 10, "row_start": 0, "code_prefix": "T", "health_status": "OK"}
        }


class TaskCreate(BaseModel):
    """Payload for assigning a task to a worker."""
    worker_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None


class TaskUpdate(BaseModel):
    worker_id: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
