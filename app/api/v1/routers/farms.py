"""
API router for farm endpoints.
"""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Header, Path, status

from app.api.dependencies import FarmServiceDep
from app.api.v1.models.requests import FarmCreate, FarmUpdate
from app.api.v1.models.responses import (
    DeleteResponse,
    FarmLayoutResponse,
    FarmResponse,
)
from app.domain.errors import InvalidInputError
from app.domain.models import Farm


router = APIRouter(
    prefix="/farms",
    tags=["farms"],
    responses={
        404: {"description": "Farm not found"},
        429: {"description": "Rate limit exceeded"},
    },
)

FarmId = Annotated[str, Path(description="Unique identifier for the farm")]
OwnerHeader = Annotated[
    Optional[str],
    Header(alias="X-Owner-Id", description="Identifier of the farm owner"),
]


@router.get("", response_model=List[FarmResponse], summary="List farms")
async def list_farms(
    farm_service: FarmServiceDep,
    owner_id: OwnerHeader = None,
) -> List[FarmResponse]:
    """
    List farms, restricted to one owner when the X-Owner-Id header is set.
    """
    farms = await farm_service.list_farms(owner_id)
    return [FarmResponse.from_domain(farm) for farm in farms]


@router.post(
    "",
    response_model=FarmResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a farm",
)
async def create_farm(
    payload: FarmCreate,
    farm_service: FarmServiceDep,
    owner_id: OwnerHeader = None,
) -> FarmResponse:
    """
    Register a farm for its owner.

    The owner comes from the X-Owner-Id header, or from the body when the
    header is absent.
    """
    owner = owner_id or payload.owner_id
    if not owner:
        raise InvalidInputError("owner_id is required")

    farm = await farm_service.create_farm(
        Farm(owner_id=owner, **payload.model_dump(exclude={"owner_id"}))
    )
    return FarmResponse.from_domain(farm)


@router.get("/{farm_id}", response_model=FarmResponse, summary="Get a farm")
async def get_farm(farm_id: FarmId, farm_service: FarmServiceDep) -> FarmResponse:
    farm = await farm_service.get_farm(farm_id)
    return FarmResponse.from_domain(farm)


@router.patch("/{farm_id}", response_model=FarmResponse, summary="Update a farm")
async def update_farm(
    farm_id: FarmId,
    payload: FarmUpdate,
    farm_service: FarmServiceDep,
) -> FarmResponse:
    farm = await farm_service.update_farm(farm_id, payload.model_dump(exclude_unset=True))
    return FarmResponse.from_domain(farm)


@router.delete("/{farm_id}", response_model=DeleteResponse, summary="Delete a farm")
async def delete_farm(farm_id: FarmId, farm_service: FarmServiceDep) -> DeleteResponse:
    """
    Delete a farm.

    Zones, trees and tasks are only removed with it when cascading deletes
    are enabled.
    """
    await farm_service.delete_farm(farm_id)
    return DeleteResponse()


@router.get(
    "/{farm_id}/layout",
    response_model=FarmLayoutResponse,
    summary="Get the farm's surface budget and zone rectangles",
)
async def get_farm_layout(farm_id: FarmId, farm_service: FarmServiceDep) -> FarmLayoutResponse:
    layout = await farm_service.get_layout(farm_id)
    return FarmLayoutResponse.from_domain(layout)
