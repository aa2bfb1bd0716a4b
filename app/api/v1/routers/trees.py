"""
API router for tree endpoints.
"""
from typing import Annotated, List, Union
from fastapi import APIRouter, Body, Path, status

from app.api.dependencies import TreeServiceDep
from app.api.v1.models.requests import BulkTreeCreate, TreeCreate
from app.api.v1.models.responses import DeleteResponse, TreeResponse
from app.domain.models import Tree


router = APIRouter(
    prefix="/farms/{farm_id}/zones/{zone_id}/trees",
    tags=["trees"],
    responses={
        404: {"description": "Farm, zone or tree not found"},
        429: {"description": "Rate limit exceeded"},
    },
)

FarmId = Annotated[str, Path(description="Unique identifier for the farm")]
ZoneId = Annotated[str, Path(description="Unique identifier for the zone")]
TreeId = Annotated[str, Path(description="Unique identifier for the tree")]


@router.get("", response_model=List[TreeResponse], summary="List a zone's trees")
async def list_trees(farm_id: FarmId, zone_id: ZoneId, tree_service: TreeServiceDep) -> List[TreeResponse]:
    trees = await tree_service.list_trees(farm_id, zone_id)
    return [TreeResponse.from_domain(tree) for tree in trees]


@router.post(
    "",
    response_model=Union[TreeResponse, List[TreeResponse]],
    status_code=status.HTTP_201_CREATED,
    summary="Add one tree or a batch of trees",
    description="""
    Add trees at explicit slots.

    Send a single object to add one tree, or an array to add several in one
    batch. Slots are not checked for occupancy.
    """,
)
async def create_trees(
    farm_id: FarmId,
    zone_id: ZoneId,
    tree_service: TreeServiceDep,
    payload: Union[TreeCreate, List[TreeCreate]] = Body(...),
) -> Union[TreeResponse, List[TreeResponse]]:
    if isinstance(payload, list):
        trees = await tree_service.create_trees(
            farm_id,
            zone_id,
            [Tree(zone_id=zone_id, **item.model_dump()) for item in payload],
        )
        return [TreeResponse.from_domain(tree) for tree in trees]

    tree = await tree_service.create_tree(
        farm_id, zone_id, Tree(zone_id=zone_id, **payload.model_dump())
    )
    return TreeResponse.from_domain(tree)


@router.post(
    "/bulk",
    response_model=List[TreeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Fill rows with generated trees",
    description="""
    Generate `count` trees starting at `row_start`.

    Trees fill each row left to right at 5m spacing, as many per row as the
    zone's width allows, and are coded `code_prefix` + a 3-digit number.
    """,
    responses={400: {"description": "Zone too narrow for a single tree"}},
)
async def create_trees_bulk(
    farm_id: FarmId,
    zone_id: ZoneId,
    payload: BulkTreeCreate,
    tree_service: TreeServiceDep,
) -> List[TreeResponse]:
    trees = await tree_service.create_trees_bulk(
        farm_id,
        zone_id,
        count=payload.count,
        row_start=payload.row_start,
        code_prefix=payload.code_prefix,
        health=payload.health_status,
    )
    return [TreeResponse.from_domain(tree) for tree in trees]


@router.delete("/{tree_id}", response_model=DeleteResponse, summary="Delete a tree")
async def delete_tree(
    farm_id: FarmId,
    zone_id: ZoneId,
    tree_id: TreeId,
    tree_service: TreeServiceDep,
) -> DeleteResponse:
    await tree_service.delete_tree(farm_id, zone_id, tree_id)
    return DeleteResponse()
