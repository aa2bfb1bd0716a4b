"""
Domain models for farm, zone, tree and task data.

These models represent the core domain entities and should be independent
of any infrastructure concerns (HTTP handlers, document stores, etc.).
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IrrigationMode(str, Enum):
    AUTO = "AUTO"
    MANUAL = "MANUAL"


class HealthStatus(str, Enum):
    OK = "OK"
    STRESS = "STRESS"
    DISEASE = "DISEASE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class Farm(BaseModel):
    """A farm, laid out as a length x width rectangle in meters."""
    id: Optional[str] = None
    owner_id: str
    name: str = Field(min_length=1)
    location: Optional[str] = None
    length: float = Field(gt=0, description="Length in meters")
    width: float = Field(gt=0, description="Width in meters")
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def area(self) -> float:
        return self.length * self.width


class Zone(BaseModel):
    """Irrigation zone placed inside a farm's coordinate frame."""
    id: Optional[str] = None
    farm_id: str
    name: str = Field(min_length=1)
    crop_type: Optional[str] = None
    width: float = Field(gt=0, description="Width in meters (x axis)")
    length: float = Field(gt=0, description="Length in meters (y axis)")
    x: float = Field(default=0, ge=0, description="Top-left x offset in meters")
    y: float = Field(default=0, ge=0, description="Top-left y offset in meters")
    mode: IrrigationMode = IrrigationMode.AUTO
    moisture_threshold: Optional[float] = Field(default=None, ge=0, le=100)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def area(self) -> float:
        return self.width * self.length


class Tree(BaseModel):
    """A tree occupying a (row, index) slot of its zone's grid."""
    id: Optional[str] = None
    zone_id: str
    tree_code: str
    row_number: int = Field(default=0, ge=0)
    index_in_row: int = Field(default=0, ge=0)
    health_status: HealthStatus = HealthStatus.OK
    last_seen_at: Optional[datetime] = None


class Task(BaseModel):
    """Work item assigned to a farm worker."""
    id: Optional[str] = None
    farm_id: str
    worker_id: str
    title: str = Field(min_length=1)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
