"""
API router for zone endpoints.
"""
from typing import Annotated, List
from fastapi import APIRouter, Path, status

from app.api.dependencies import ZoneServiceDep
from app.api.v1.models.requests import ZoneCreate
from app.api.v1.models.responses import (
    DeleteResponse,
    ZoneGridResponse,
    ZoneResponse,
)
from app.domain.errors import CAPACITY_EXCEEDED_MESSAGE
from app.domain.models import Zone


router = APIRouter(
    prefix="/farms/{farm_id}/zones",
    tags=["zones"],
    responses={
        404: {"description": "Farm or zone not found"},
        429: {"description": "Rate limit exceeded"},
    },
)

FarmId = Annotated[str, Path(description="Unique identifier for the farm")]
ZoneId = Annotated[str, Path(description="Unique identifier for the zone")]


@router.get("", response_model=List[ZoneResponse], summary="List a farm's zones")
async def list_zones(farm_id: FarmId, zone_service: ZoneServiceDep) -> List[ZoneResponse]:
    zones = await zone_service.list_zones(farm_id)
    return [ZoneResponse.from_domain(zone) for zone in zones]


@router.post(
    "",
    response_model=ZoneResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a zone to a farm",
    description="""
    Add an irrigation zone to a farm.

    The zone is admitted only when the surfaces of the farm's existing zones
    plus the new zone's width x length do not exceed the farm's surface.
    """,
    responses={
        400: {
            "description": "Zone does not fit in the farm's remaining surface",
            "content": {
                "application/json": {
                    "example": {
                        "error": CAPACITY_EXCEEDED_MESSAGE,
                        "type": "Capacity exceeded",
                    }
                }
            },
        },
    },
)
async def create_zone(
    farm_id: FarmId,
    payload: ZoneCreate,
    zone_service: ZoneServiceDep,
) -> ZoneResponse:
    zone = await zone_service.create_zone(
        farm_id, Zone(farm_id=farm_id, **payload.model_dump())
    )
    return ZoneResponse.from_domain(zone)


@router.get("/{zone_id}", response_model=ZoneResponse, summary="Get a zone")
async def get_zone(farm_id: FarmId, zone_id: ZoneId, zone_service: ZoneServiceDep) -> ZoneResponse:
    zone = await zone_service.get_zone(farm_id, zone_id)
    return ZoneResponse.from_domain(zone)


@router.delete("/{zone_id}", response_model=DeleteResponse, summary="Delete a zone")
async def delete_zone(farm_id: FarmId, zone_id: ZoneId, zone_service: ZoneServiceDep) -> DeleteResponse:
    await zone_service.delete_zone(farm_id, zone_id)
    return DeleteResponse()


@router.get(
    "/{zone_id}/grid",
    response_model=ZoneGridResponse,
    summary="Get the zone's tree grid",
)
async def get_zone_grid(farm_id: FarmId, zone_id: ZoneId, zone_service: ZoneServiceDep) -> ZoneGridResponse:
    """
    Trees per row and row count at the fixed tree spacing, with the number
    of planted trees and any slot held by more than one tree.
    """
    grid = await zone_service.get_grid(farm_id, zone_id)
    return ZoneGridResponse.from_domain(grid)
