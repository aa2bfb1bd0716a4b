"""
Infrastructure layer: document store boundary.

The services only talk to the abstract stores below. The in-memory
implementation backs the running service and the test-suite; a real
document database adapter only has to implement the same methods.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from app.domain.errors import NotFoundError
from app.domain.models import Farm, Task, Tree, Zone

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def new_document_id() -> str:
    """Generate a document identifier (24 hex chars, like an object id)."""
    return uuid.uuid4().hex[:24]


# ============================================================
# Abstract stores
# ============================================================

class FarmStore(ABC):

    @abstractmethod
    async def get(self, farm_id: str) -> Farm:
        """Return the farm or raise NotFoundError."""

    @abstractmethod
    async def list_all(self) -> List[Farm]: ...

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Farm]: ...

    @abstractmethod
    async def create(self, farm: Farm) -> Farm: ...

    @abstractmethod
    async def update(self, farm_id: str, changes: dict) -> Farm: ...

    @abstractmethod
    async def delete(self, farm_id: str) -> None: ...


class ZoneStore(ABC):

    @abstractmethod
    async def get(self, zone_id: str) -> Zone:
        """Return the zone or raise NotFoundError."""

    @abstractmethod
    async def list_by_farm(self, farm_id: str) -> List[Zone]: ...

    @abstractmethod
    async def create(self, zone: Zone) -> Zone: ...

    @abstractmethod
    async def delete(self, zone_id: str) -> None: ...

    @abstractmethod
    async def delete_by_farm(self, farm_id: str) -> int: ...


class TreeStore(ABC):

    @abstractmethod
    async def get(self, tree_id: str) -> Tree: ...

    @abstractmethod
    async def list_by_zone(self, zone_id: str) -> List[Tree]: ...

    @abstractmethod
    async def create(self, tree: Tree) -> Tree: ...

    @abstractmethod
    async def create_batch(self, trees: List[Tree]) -> List[Tree]:
        """Insert every tree or none of them."""

    @abstractmethod
    async def delete(self, tree_id: str) -> None: ...

    @abstractmethod
    async def delete_by_zone(self, zone_id: str) -> int: ...


class TaskStore(ABC):

    @abstractmethod
    async def get(self, task_id: str) -> Task: ...

    @abstractmethod
    async def list_by_farm(self, farm_id: str) -> List[Task]: ...

    @abstractmethod
    async def create(self, task: Task) -> Task: ...

    @abstractmethod
    async def update(self, task_id: str, changes: dict) -> Task: ...

    @abstractmethod
    async def delete(self, task_id: str) -> None: ...

    @abstractmethod
    async def delete_by_farm(self, farm_id: str) -> int: ...


# ============================================================
# In-memory implementation
# ============================================================

class InMemoryCollection(Generic[ModelT]):
    """
    A single collection of documents keyed by id.

    Documents are copied on the way in and out so callers never hold a
    reference to stored state.
    """

    def __init__(self, entity: str):
        self.entity = entity
        self._documents: Dict[str, ModelT] = {}

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, document_id: str) -> ModelT:
        document = self._documents.get(document_id)
        if document is None:
            raise NotFoundError(self.entity, document_id)
        return document.model_copy(deep=True)

    def find(self, **criteria) -> List[ModelT]:
        return [
            document.model_copy(deep=True)
            for document in self._documents.values()
            if all(getattr(document, key) == value for key, value in criteria.items())
        ]

    def insert(self, document: ModelT) -> ModelT:
        stored = document.model_copy(update={"id": new_document_id()}, deep=True)
        self._documents[stored.id] = stored
        return stored.model_copy(deep=True)

    def insert_many(self, documents: List[ModelT]) -> List[ModelT]:
        stored = [
            document.model_copy(update={"id": new_document_id()}, deep=True)
            for document in documents
        ]
        for document in stored:
            self._documents[document.id] = document
        return [document.model_copy(deep=True) for document in stored]

    def update(self, document_id: str, changes: dict) -> ModelT:
        current = self.get(document_id)
        # Re-validate so updates honour the model's field constraints
        updated = type(current).model_validate({**current.model_dump(), **changes})
        self._documents[document_id] = updated
        return updated.model_copy(deep=True)

    def delete(self, document_id: str) -> None:
        if self._documents.pop(document_id, None) is None:
            raise NotFoundError(self.entity, document_id)

    def delete_where(self, **criteria) -> int:
        doomed = [document.id for document in self.find(**criteria)]
        for document_id in doomed:
            del self._documents[document_id]
        return len(doomed)


class InMemoryFarmStore(FarmStore):

    def __init__(self):
        self.collection: InMemoryCollection[Farm] = InMemoryCollection("Farm")

    async def get(self, farm_id: str) -> Farm:
        return self.collection.get(farm_id)

    async def list_all(self) -> List[Farm]:
        return self.collection.find()

    async def list_by_owner(self, owner_id: str) -> List[Farm]:
        return self.collection.find(owner_id=owner_id)

    async def create(self, farm: Farm) -> Farm:
        return self.collection.insert(farm)

    async def update(self, farm_id: str, changes: dict) -> Farm:
        return self.collection.update(farm_id, changes)

    async def delete(self, farm_id: str) -> None:
        self.collection.delete(farm_id)


class InMemoryZoneStore(ZoneStore):

    def __init__(self):
        self.collection: InMemoryCollection[Zone] = InMemoryCollection("Zone")

    async def get(self, zone_id: str) -> Zone:
        return self.collection.get(zone_id)

    async def list_by_farm(self, farm_id: str) -> List[Zone]:
        return self.collection.find(farm_id=farm_id)

    async def create(self, zone: Zone) -> Zone:
        return self.collection.insert(zone)

    async def delete(self, zone_id: str) -> None:
        self.collection.delete(zone_id)

    async def delete_by_farm(self, farm_id: str) -> int:
        return self.collection.delete_where(farm_id=farm_id)


class InMemoryTreeStore(TreeStore):

    def __init__(self):
        self.collection: InMemoryCollection[Tree] = InMemoryCollection("Tree")

    async def get(self, tree_id: str) -> Tree:
        return self.collection.get(tree_id)

    async def list_by_zone(self, zone_id: str) -> List[Tree]:
        return self.collection.find(zone_id=zone_id)

    async def create(self, tree: Tree) -> Tree:
        return self.collection.insert(tree)

    async def create_batch(self, trees: List[Tree]) -> List[Tree]:
        created = self.collection.insert_many(trees)
        logger.debug(f"Inserted batch of {len(created)} trees")
        return created

    async def delete(self, tree_id: str) -> None:
        self.collection.delete(tree_id)

    async def delete_by_zone(self, zone_id: str) -> int:
        return self.collection.delete_where(zone_id=zone_id)


class InMemoryTaskStore(TaskStore):

    def __init__(self):
        self.collection: InMemoryCollection[Task] = InMemoryCollection("Task")

    async def get(self, task_id: str) -> Task:
        return self.collection.get(task_id)

    async def list_by_farm(self, farm_id: str) -> List[Task]:
        return self.collection.find(farm_id=farm_id)

    async def create(self, task: Task) -> Task:
        return self.collection.insert(task)

    async def update(self, task_id: str, changes: dict) -> Task:
        return self.collection.update(task_id, changes)

    async def delete(self, task_id: str) -> None:
        self.collection.delete(task_id)

    async def delete_by_farm(self, farm_id: str) -> int:
        return self.collection.delete_where(farm_id=farm_id)


class DocumentStore:
    """Bundle of the four collections the service works with."""

    def __init__(
        self,
        farms: Optional[FarmStore] = None,
        zones: Optional[ZoneStore] = None,
        trees: Optional[TreeStore] = None,
        tasks: Optional[TaskStore] = None,
    ):
        self.farms = farms or InMemoryFarmStore()
        self.zones = zones or InMemoryZoneStore()
        self.trees = trees or InMemoryTreeStore()
        self.tasks = tasks or InMemoryTaskStore()


# Singleton instance
_document_store: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    """
    Get or create the singleton document store.

    Returns:
        DocumentStore instance
    """
    global _document_store
    if _document_store is None:
        _document_store = DocumentStore()
        logger.info("Initialized in-memory document store")
    return _document_store


def reset_document_store() -> DocumentStore:
    """Replace the singleton with an empty store and return it."""
    global _document_store
    _document_store = DocumentStore()
    return _document_store
