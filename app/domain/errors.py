"""
Domain error taxonomy.

Every error carries the HTTP status it maps to so the error handling
middleware can translate it without knowing each type.
"""
from typing import Optional


CAPACITY_EXCEEDED_MESSAGE = (
    "La somme des surfaces des zones dépasse la surface de la ferme."
)


class FarmDomainError(Exception):
    """Base class for user-input driven failures."""

    status_code: int = 400
    title: str = "Invalid request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FarmDomainError):
    """A farm, zone, tree or task reference does not resolve."""

    status_code = 404
    title = "Not found"

    def __init__(self, entity: str, entity_id: str, message: Optional[str] = None):
        super().__init__(message or f"{entity} '{entity_id}' not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidInputError(FarmDomainError):
    """Missing required field, non-positive dimension or out-of-range count."""

    title = "Invalid input"


class CapacityExceededError(FarmDomainError):
    """The candidate zone does not fit in the farm's remaining area."""

    title = "Capacity exceeded"

    def __init__(self, message: str = CAPACITY_EXCEEDED_MESSAGE):
        super().__init__(message)


class InvalidZoneDimensionsError(FarmDomainError):
    """The zone is too narrow to hold a single tree per row."""

    title = "Invalid zone dimensions"
