"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- A fresh in-memory document store per test
- Seeded farms and zones
- Domain services wired to the store
- FastAPI test client
"""
import os

# Keep the rate limiter out of the way of the test-suite
os.environ.setdefault("RATE_LIMIT_REQUESTS", "100000")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.domain.models import Farm, Zone
from app.infrastructure.document_store import DocumentStore, reset_document_store
from app.services.domain.tree_grid_placer import TreeGridPlacer
from app.services.domain.zone_admission import ZoneAdmissionChecker


# ============================================================
# Store Fixtures
# ============================================================

@pytest.fixture(autouse=True)
def store() -> DocumentStore:
    """Replace the application's store with an empty one for every test."""
    return reset_document_store()


@pytest.fixture
def farm(store) -> Farm:
    """A 100m x 60m farm (6000 m²)."""
    return store.farms.collection.insert(
        Farm(owner_id="owner-1", name="Oliveraie Nord", location="Sfax", length=100, width=60)
    )


@pytest.fixture
def farm_with_zone(store, farm) -> Farm:
    """The 6000 m² farm with one 50m x 40m zone (2000 m²) at the origin."""
    store.zones.collection.insert(
        Zone(farm_id=farm.id, name="Zone A", width=50, length=40)
    )
    return farm


@pytest.fixture
def zone(store, farm) -> Zone:
    """A 22m wide, 30m long zone: 4 trees per row, 6 rows."""
    return store.zones.collection.insert(
        Zone(farm_id=farm.id, name="Zone B", width=22, length=30)
    )


@pytest.fixture
def narrow_zone(store, farm) -> Zone:
    """A zone narrower than the tree spacing."""
    return store.zones.collection.insert(
        Zone(farm_id=farm.id, name="Strip", width=3, length=30)
    )


# ============================================================
# Service Fixtures
# ============================================================

@pytest.fixture
def admission_checker(store) -> ZoneAdmissionChecker:
    return ZoneAdmissionChecker(farm_store=store.farms, zone_store=store.zones)


@pytest.fixture
def grid_placer(store) -> TreeGridPlacer:
    return TreeGridPlacer(zone_store=store.zones, tree_store=store.trees)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
