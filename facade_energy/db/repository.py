"""
Repository pattern for database access.

Provides high-level methods for storing and retrieving building designs and
city reference data as core models.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from ..core.exceptions import StoreError, ValidationError
from ..core.models import BuildingDesign, CityData
from ..utils.validation import validate_building_design, validate_city_data
from .client import StoreClient, get_client
from .models import BuildingDesignRecord, CityDataRecord

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "building_id", "facades", "skylight")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BuildingDesignRepository:
    """Repository for building designs."""

    def __init__(self, client: Optional[StoreClient] = None):
        self._client = client or get_client()

    def create(self, data: Mapping[str, Any]) -> BuildingDesign:
        """
        Validate and store a new design.

        A design created without a building_id starts its own building group.

        Raises:
            ValidationError: If the design is invalid
            StoreError: If the store fails
        """
        design = validate_building_design(data)
        now = _now()
        new_id = uuid4().hex
        # A client-supplied id names the building the new revision belongs to
        design.building_id = design.building_id or design.id or new_id
        design.id = new_id
        design.created_at = now
        design.updated_at = now

        saved = self._client.insert_design(BuildingDesignRecord.from_model(design).to_dict())
        if saved is None:
            raise StoreError("Store did not return the created building design")

        logger.info(f"Created building design '{design.name}'", extra={"building_id": design.id})
        return BuildingDesignRecord.from_dict(saved).to_model()

    def get(self, design_id: str) -> Optional[BuildingDesign]:
        """Get design by ID."""
        row = self._client.get_design(design_id)
        return BuildingDesignRecord.from_dict(row).to_model() if row else None

    def list(self, building_id: Optional[str] = None) -> List[BuildingDesign]:
        """List designs, optionally only those of one building group."""
        rows = self._client.list_designs(building_id=building_id)
        return [BuildingDesignRecord.from_dict(r).to_model() for r in rows]

    def list_by_ids(self, ids: List[str]) -> List[BuildingDesign]:
        rows = self._client.list_designs(ids=list(ids))
        return [BuildingDesignRecord.from_dict(r).to_model() for r in rows]

    def update(self, design_id: str, changes: Mapping[str, Any]) -> Optional[BuildingDesign]:
        """
        Apply changes to a stored design.

        The merged design is validated as a whole before it is written.

        Returns:
            Updated design, or None if it does not exist

        Raises:
            ValidationError: If the merged design is invalid
        """
        existing = self.get(design_id)
        if existing is None:
            return None

        unknown = [key for key in changes if key not in UPDATABLE_FIELDS + ("id", "created_at", "updated_at")]
        if unknown:
            raise ValidationError(
                f"Cannot update unknown fields: {', '.join(sorted(unknown))}",
                field=unknown[0],
                suggestions=[f"Updatable fields: {', '.join(UPDATABLE_FIELDS)}"],
            )

        merged = existing.model_dump()
        merged.update({k: v for k, v in changes.items() if k in UPDATABLE_FIELDS})
        design = validate_building_design(merged)
        design.building_id = design.building_id or existing.building_id or design_id

        record = BuildingDesignRecord.from_model(design).to_dict()
        update = {k: v for k, v in record.items() if k in UPDATABLE_FIELDS}
        update["updated_at"] = _now().isoformat()

        saved = self._client.update_design(design_id, update)
        if saved is None:
            return None
        logger.info(f"Updated building design '{design.name}'", extra={"building_id": design_id})
        return BuildingDesignRecord.from_dict(saved).to_model()

    def delete(self, design_id: str) -> bool:
        return self._client.delete_design(design_id)

    def clear(self) -> int:
        """Delete all designs; returns the number removed."""
        count = self._client.clear_designs()
        logger.info(f"Cleared {count} building designs")
        return count


class CityDataRepository:
    """Repository for city reference data."""

    def __init__(self, client: Optional[StoreClient] = None):
        self._client = client or get_client()

    def list(self) -> List[CityData]:
        """
        All cities.

        Raises:
            StoreError: If any stored city record is malformed
        """
        return [self._to_model(row) for row in self._client.list_cities()]

    def get(self, name: str) -> Optional[CityData]:
        row = self._client.get_city(name)
        return self._to_model(row) if row else None

    def count(self) -> int:
        return len(self._client.list_cities())

    def replace_all(self, cities: List[CityData]) -> List[CityData]:
        rows = [CityDataRecord.from_model(city).to_dict() for city in cities]
        saved = self._client.replace_cities(rows)
        return [self._to_model(row) for row in saved]

    @staticmethod
    def _to_model(row: Dict[str, Any]) -> CityData:
        try:
            record = CityDataRecord.from_dict(row)
            return validate_city_data(record.to_payload())
        except (TypeError, ValidationError) as e:
            logger.error(f"Invalid city data structure: {row}")
            raise StoreError(f"Invalid city data structure: {e}") from e
