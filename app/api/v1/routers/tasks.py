"""
API router for farm task endpoints.
"""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Path, Query, status

from app.api.dependencies import TaskServiceDep
from app.api.v1.models.requests import TaskCreate, TaskUpdate
from app.api.v1.models.responses import DeleteResponse, TaskResponse
from app.domain.models import Task, TaskStatus


router = APIRouter(
    prefix="/farms/{farm_id}/tasks",
    tags=["tasks"],
    responses={
        404: {"description": "Farm or task not found"},
        429: {"description": "Rate limit exceeded"},
    },
)

FarmId = Annotated[str, Path(description="Unique identifier for the farm")]
TaskId = Annotated[str, Path(description="Unique identifier for the task")]


@router.get("", response_model=List[TaskResponse], summary="List a farm's tasks")
async def list_tasks(
    farm_id: FarmId,
    task_service: TaskServiceDep,
    task_status: Annotated[Optional[TaskStatus], Query(alias="status")] = None,
) -> List[TaskResponse]:
    tasks = await task_service.list_tasks(farm_id, task_status)
    return [TaskResponse.from_domain(task) for task in tasks]


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign a task to a worker",
)
async def create_task(farm_id: FarmId, payload: TaskCreate, task_service: TaskServiceDep) -> TaskResponse:
    task = await task_service.create_task(farm_id, Task(farm_id=farm_id, **payload.model_dump()))
    return TaskResponse.from_domain(task)


@router.get("/{task_id}", response_model=TaskResponse, summary="Get a task")
async def get_task(farm_id: FarmId, task_id: TaskId, task_service: TaskServiceDep) -> TaskResponse:
    task = await task_service.get_task(farm_id, task_id)
    return TaskResponse.from_domain(task)


@router.patch("/{task_id}", response_model=TaskResponse, summary="Update a task")
async def update_task(
    farm_id: FarmId,
    task_id: TaskId,
    payload: TaskUpdate,
    task_service: TaskServiceDep,
) -> TaskResponse:
    task = await task_service.update_task(farm_id, task_id, payload.model_dump(exclude_unset=True))
    return TaskResponse.from_domain(task)


@router.delete("/{task_id}", response_model=DeleteResponse, summary="Delete a task")
async def delete_task(farm_id: FarmId, task_id: TaskId, task_service: TaskServiceDep) -> DeleteResponse:
    await task_service.delete_task(farm_id, task_id)
    return DeleteResponse()
