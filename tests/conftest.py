"""
Pytest configuration and fixtures for Facade Energy tests.

Provides reusable test fixtures for:
- Building design payloads and models
- Reference city data
- In-memory document store and repositories
- A fake Redis client for cache tests
- API test client with service overrides
"""

import fnmatch

import pytest
import redis

from facade_energy.analysis.service import AnalysisService
from facade_energy.cache.result_cache import AnalysisCache
from facade_energy.core.cities import get_reference_city
from facade_energy.db.memory import MemoryClient
from facade_energy.db.repository import BuildingDesignRepository, CityDataRepository
from facade_energy.db.seed import initialize_database
from facade_energy.utils.validation import validate_building_design


# =============================================================================
# FAKE REDIS
# =============================================================================

class FakeRedis:
    """Dict-backed stand-in for the redis-py calls the cache makes."""

    def __init__(self):
        self.store = {}
        self.expiry = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("Redis unavailable")

    def get(self, key):
        self._check()
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self._check()
        self.store[key] = value
        self.expiry[key] = ex
        return True

    def keys(self, pattern):
        self._check()
        return [key for key in self.store if fnmatch.fnmatchcase(key, pattern)]

    def delete(self, *keys):
        self._check()
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                self.expiry.pop(key, None)
                removed += 1
        return removed

    def ping(self):
        self._check()
        return True


# =============================================================================
# DESIGN FIXTURES
# =============================================================================

def make_facade(height=10, width=20, wwr=0.3, shgc=0.4):
    return {"height": height, "width": width, "wwr": wwr, "shgc": shgc}


def make_design_payload(name="Reference block", wwr=0.3, skylight=None, **extra):
    """Four identical facades; pass skylight={"width": .., "length": ..} to add one."""
    payload = {
        "name": name,
        "facades": {
            orientation: make_facade(wwr=wwr)
            for orientation in ("north", "south", "east", "west")
        },
        **extra,
    }
    if skylight is not None:
        payload["skylight"] = skylight
    return payload


@pytest.fixture
def design_payload():
    """10 x 20 m facades, WWR 0.3, SHGC 0.4, with a 2 x 3 m skylight."""
    return make_design_payload(skylight={"width": 2, "length": 3})


@pytest.fixture
def design(design_payload):
    return validate_building_design({**design_payload, "id": "design-1"})


@pytest.fixture
def efficient_design():
    return validate_building_design(make_design_payload(name="Low glazing", wwr=0.1, id="design-2"))


@pytest.fixture
def mumbai():
    return get_reference_city("Mumbai")


@pytest.fixture
def bangalore():
    return get_reference_city("Bangalore")


# =============================================================================
# STORE FIXTURES
# =============================================================================

@pytest.fixture
def memory_client():
    """Fresh in-memory store seeded with the reference cities."""
    client = MemoryClient()
    initialize_database(client)
    return client


@pytest.fixture
def design_repo(memory_client):
    return BuildingDesignRepository(memory_client)


@pytest.fixture
def city_repo(memory_client):
    return CityDataRepository(memory_client)


# =============================================================================
# CACHE / SERVICE FIXTURES
# =============================================================================

@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis):
    return AnalysisCache(fake_redis)


@pytest.fixture
def service(design_repo, city_repo, cache):
    return AnalysisService(designs=design_repo, cities=city_repo, cache=cache)


@pytest.fixture
def api_client(service):
    """TestClient whose endpoints use the fixture service."""
    from fastapi.testclient import TestClient

    from facade_energy.api.main import app, get_service

    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
