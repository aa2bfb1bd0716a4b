"""
Application service: tasks assigned to farm workers.
"""
import logging
from typing import List, Optional

from app.domain.errors import InvalidInputError, NotFoundError
from app.domain.models import Task, TaskStatus
from app.infrastructure.document_store import DocumentStore

logger = logging.getLogger(__name__)

TASK_UPDATABLE_FIELDS = {"title", "description", "priority", "status", "due_date", "worker_id"}


class TaskService:

    def __init__(self, store: DocumentStore):
        self.store = store

    async def create_task(self, farm_id: str, task: Task) -> Task:
        await self.store.farms.get(farm_id)
        created = await self.store.tasks.create(task.model_copy(update={"farm_id": farm_id}))
        logger.info(f"Created task {created.id} for worker {created.worker_id}")
        return created

    async def list_tasks(
        self,
        farm_id: str,
        status: Optional[TaskStatus] = None,
    ) -> List[Task]:
        await self.store.farms.get(farm_id)
        tasks = await self.store.tasks.list_by_farm(farm_id)
        if status is not None:
            tasks = [task for task in tasks if task.status == status]
        return tasks

    async def get_task(self, farm_id: str, task_id: str) -> Task:
        task = await self.store.tasks.get(task_id)
        if task.farm_id != farm_id:
            raise NotFoundError("Task", task_id)
        return task

    async def update_task(self, farm_id: str, task_id: str, changes: dict) -> Task:
        unknown = set(changes) - TASK_UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        await self.get_task(farm_id, task_id)
        return await self.store.tasks.update(task_id, changes)

    async def delete_task(self, farm_id: str, task_id: str) -> None:
        await self.get_task(farm_id, task_id)
        await self.store.tasks.delete(task_id)
