"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from app.infrastructure.document_store import DocumentStore, get_document_store
from app.services.domain.tree_grid_placer import TreeGridPlacer
from app.services.domain.zone_admission import ZoneAdmissionChecker
from app.services.application.farm_service import FarmService
from app.services.application.task_service import TaskService
from app.services.application.tree_service import TreeService
from app.services.application.zone_service import ZoneService


DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]


def get_admission_checker(store: DocumentStoreDep) -> ZoneAdmissionChecker:
    """
    Dependency factory for ZoneAdmissionChecker.

    Args:
        store: Document store (injected)

    Returns:
        ZoneAdmissionChecker instance
    """
    return ZoneAdmissionChecker(farm_store=store.farms, zone_store=store.zones)


def get_grid_placer(store: DocumentStoreDep) -> TreeGridPlacer:
    """
    Dependency factory for TreeGridPlacer.

    Args:
        store: Document store (injected)

    Returns:
        TreeGridPlacer instance
    """
    return TreeGridPlacer(zone_store=store.zones, tree_store=store.trees)


def get_farm_service(store: DocumentStoreDep) -> FarmService:
    return FarmService(store=store)


def get_zone_service(
    store: DocumentStoreDep,
    checker: Annotated[ZoneAdmissionChecker, Depends(get_admission_checker)],
    placer: Annotated[TreeGridPlacer, Depends(get_grid_placer)],
) -> ZoneService:
    return ZoneService(store=store, admission_checker=checker, grid_placer=placer)


def get_tree_service(
    store: DocumentStoreDep,
    zone_service: Annotated[ZoneService, Depends(get_zone_service)],
    placer: Annotated[TreeGridPlacer, Depends(get_grid_placer)],
) -> TreeService:
    return TreeService(store=store, zone_service=zone_service, grid_placer=placer)


def get_task_service(store: DocumentStoreDep) -> TaskService:
    return TaskService(store=store)


# Type aliases for cleaner route signatures
FarmServiceDep = Annotated[FarmService, Depends(get_farm_service)]
ZoneServiceDep = Annotated[ZoneService, Depends(get_zone_service)]
TreeServiceDep = Annotated[TreeService, Depends(get_tree_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
