"""
Tests for repositories over the in-memory document store.

The same repositories run against Supabase in test_database.py.
"""

import pytest

from facade_energy.core.cities import REFERENCE_CITIES
from facade_energy.core.exceptions import StoreError
from facade_energy.db.memory import MemoryClient
from facade_energy.db.models import BuildingDesignRecord, CityDataRecord
from facade_energy.db.repository import BuildingDesignRepository, CityDataRepository
from facade_energy.db.seed import initialize_database
from facade_energy.utils.validation import ValidationError

from conftest import make_design_payload


class TestBuildingDesignRepository:

    def test_create_assigns_id_and_timestamps(self, design_repo, design_payload):
        saved = design_repo.create(design_payload)

        assert saved.id
        assert saved.building_id == saved.id
        assert saved.created_at is not None
        assert saved.created_at == saved.updated_at
        assert saved.skylight.width == 2

    def test_create_with_existing_id_joins_group(self, design_repo, design_payload):
        first = design_repo.create(design_payload)
        revision = design_repo.create({**design_payload, "id": first.id, "name": "Revision"})

        assert revision.id != first.id
        assert revision.building_id == first.id
        assert [d.name for d in design_repo.list(building_id=first.id)] == ["Reference block", "Revision"]

    def test_create_invalid(self, design_repo):
        with pytest.raises(ValidationError, match="missing facades"):
            design_repo.create({"name": "Empty"})

    def test_get(self, design_repo, design_payload):
        saved = design_repo.create(design_payload)

        assert design_repo.get(saved.id) == saved
        assert design_repo.get("missing") is None

    def test_list_by_ids(self, design_repo):
        a = design_repo.create(make_design_payload(name="A"))
        design_repo.create(make_design_payload(name="B"))
        c = design_repo.create(make_design_payload(name="C"))

        assert {d.name for d in design_repo.list_by_ids([a.id, c.id])} == {"A", "C"}
        assert design_repo.list_by_ids(["missing"]) == []
        assert len(design_repo.list()) == 3

    def test_update_merges_changes(self, design_repo, design_payload):
        saved = design_repo.create(design_payload)
        facades = saved.facades.model_dump()
        facades["south"]["wwr"] = 0.5

        updated = design_repo.update(saved.id, {"name": "Shaded", "facades": facades})

        assert updated.name == "Shaded"
        assert updated.facades.south.wwr == 0.5
        assert updated.skylight == saved.skylight
        assert updated.created_at == saved.created_at
        assert updated.updated_at >= saved.updated_at

    def test_update_removes_skylight(self, design_repo, design_payload):
        saved = design_repo.create(design_payload)
        assert design_repo.update(saved.id, {"skylight": None}).skylight is None

    def test_update_validates_merged_design(self, design_repo, design_payload):
        saved = design_repo.create(design_payload)
        facades = saved.facades.model_dump()
        facades["east"]["shgc"] = 1.5

        with pytest.raises(ValidationError) as exc_info:
            design_repo.update(saved.id, {"facades": facades})
        assert exc_info.value.field == "facades.east.shgc"
        assert design_repo.get(saved.id).facades.east.shgc == 0.4

    def test_update_unknown_field(self, design_repo, design_payload):
        saved = design_repo.create(design_payload)
        with pytest.raises(ValidationError, match="unknown fields: colour"):
            design_repo.update(saved.id, {"colour": "red"})

    def test_update_missing(self, design_repo):
        assert design_repo.update("missing", {"name": "x"}) is None

    def test_delete_and_clear(self, design_repo, design_payload):
        a = design_repo.create(design_payload)
        design_repo.create(design_payload)

        assert design_repo.delete(a.id)
        assert not design_repo.delete(a.id)
        assert design_repo.clear() == 1
        assert design_repo.list() == []


class TestCityDataRepository:

    def test_seeded_cities(self, city_repo):
        assert [c.name for c in city_repo.list()] == ["Bangalore", "Mumbai", "Kolkata", "Delhi"]
        assert city_repo.count() == 4

    def test_get_case_insensitive(self, city_repo):
        city = city_repo.get("mumbai")
        assert city.name == "Mumbai"
        assert city.solar_radiation.south == 350
        assert city.electricity_rate == 9.0

    def test_get_missing(self, city_repo):
        assert city_repo.get("Chennai") is None

    def test_malformed_city_row(self):
        client = MemoryClient()
        client.replace_cities([{"name": "Broken", "solar_radiation": {"north": 1}, "electricity_rate": 5}])

        with pytest.raises(StoreError, match="Invalid city data structure"):
            CityDataRepository(client).list()


class TestSeed:

    def test_seeds_empty_store(self):
        client = MemoryClient()
        assert initialize_database(client) == len(REFERENCE_CITIES)

    def test_keeps_existing_data(self, memory_client):
        assert initialize_database(memory_client) == 0

    def test_force_replaces(self, memory_client):
        assert initialize_database(memory_client, force=True) == 4
        assert CityDataRepository(memory_client).count() == 4


class TestRecords:

    def test_design_record_serializes_datetimes(self, design_repo, design_payload):
        saved = design_repo.create(design_payload)
        row = BuildingDesignRecord.from_model(saved).to_dict()

        assert isinstance(row["created_at"], str)
        assert row["facades"]["north"]["height"] == 10

    def test_design_record_keeps_empty_skylight(self, design):
        design.skylight = None
        assert BuildingDesignRecord.from_model(design).to_dict()["skylight"] is None

    def test_malformed_design_row(self):
        record = BuildingDesignRecord.from_dict({"id": "x", "name": "Bad", "facades": {"north": {}}})
        with pytest.raises(StoreError):
            record.to_model()

    def test_city_record_round_trip(self, mumbai):
        record = CityDataRecord.from_model(mumbai)
        assert "id" not in record.to_dict()
        assert CityDataRecord.from_dict({**record.to_dict(), "id": 7, "extra": 1}).id == 7
