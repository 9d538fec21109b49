"""
Document store records for building designs and city data.

Records are the row shape stored in the document store: nested facade,
skylight and radiation data live in JSON columns, timestamps as ISO strings.
They convert to and from the core Pydantic models.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional, Dict, Any

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import StoreError
from ..core.models import BuildingDesign, CityData

DESIGNS_TABLE = "building_designs"
CITIES_TABLE = "city_data"


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass
class BuildingDesignRecord:
    """Building design row."""

    name: str
    facades: Dict[str, Dict[str, float]]

    id: Optional[str] = None
    building_id: Optional[str] = None
    skylight: Optional[Dict[str, float]] = None

    # Metadata
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database insertion."""
        data = {k: _serialize(v) for k, v in asdict(self).items()}
        # skylight stays even when None so updates can clear it
        return {k: v for k, v in data.items() if v is not None or k == "skylight"}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildingDesignRecord":
        """Create from database record."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_model(cls, design: BuildingDesign) -> "BuildingDesignRecord":
        data = design.model_dump()
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_model(self) -> BuildingDesign:
        try:
            return BuildingDesign.model_validate(asdict(self))
        except PydanticValidationError as e:
            raise StoreError(f"Stored building design {self.id} is malformed: {e}") from e


@dataclass
class CityDataRecord:
    """City reference data row."""

    name: str
    solar_radiation: Dict[str, float]
    electricity_rate: float

    temperature: Optional[Dict[str, float]] = None
    humidity: Optional[Dict[str, float]] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for database insertion."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CityDataRecord":
        """Create from database record."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_model(cls, city: CityData) -> "CityDataRecord":
        return cls(**city.model_dump())

    def to_payload(self) -> Dict[str, Any]:
        """Raw dict for validation (keeps malformed values visible to validators)."""
        return {k: v for k, v in asdict(self).items() if k != "id"}
