"""
Pydantic models for building designs, city reference data and analysis results.

Building designs are the user-editable input (four facades plus an optional
skylight). City data is static reference input. Analysis results are derived
and can always be recomputed from the other two.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class Orientation(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class Season(str, Enum):
    SUMMER = "summer"
    WINTER = "winter"
    MONSOON = "monsoon"


ORIENTATIONS: tuple[str, ...] = tuple(o.value for o in Orientation)
RADIATION_KEYS: tuple[str, ...] = ORIENTATIONS + ("roof",)


# =============================================================================
# BUILDING DESIGN
# =============================================================================


class Facade(BaseModel):
    """One cardinal facade of a building."""

    height: float = Field(description="Facade height (m)")
    width: float = Field(description="Facade width (m)")
    wwr: float = Field(description="Window-to-wall ratio (0-1)")
    shgc: float = Field(description="Solar heat gain coefficient of the glazing (0-1)")

    @property
    def wall_area(self) -> float:
        return self.height * self.width

    @property
    def window_area(self) -> float:
        return self.height * self.width * self.wwr


class Facades(BaseModel):
    north: Facade
    south: Facade
    east: Facade
    west: Facade

    def items(self) -> Iterator[tuple[str, Facade]]:
        """Iterate (orientation, facade) in north, south, east, west order."""
        for orientation in ORIENTATIONS:
            yield orientation, getattr(self, orientation)

    @property
    def total_wall_area(self) -> float:
        return sum(facade.wall_area for _, facade in self.items())


class Skylight(BaseModel):
    width: float = Field(description="Skylight width (m)")
    length: float = Field(description="Skylight length (m)")

    @property
    def area(self) -> float:
        return self.width * self.length


class BuildingDesign(BaseModel):
    """
    A persisted building design.

    `building_id` groups revisions of the same building; a design created
    without one becomes the head of its own group.
    """

    id: str | None = None
    building_id: str | None = None
    name: str
    facades: Facades
    skylight: Skylight | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# CITY REFERENCE DATA
# =============================================================================


class SolarRadiation(BaseModel):
    """Solar radiation per orientation (W/m², used with BTU-based conversion)."""

    north: float
    south: float
    east: float
    west: float
    roof: float

    def for_orientation(self, orientation: str) -> float:
        return getattr(self, orientation)


class SeasonalValues(BaseModel):
    summer: float
    winter: float
    monsoon: float

    def for_season(self, season: Season | str) -> float:
        return getattr(self, Season(season).value)


class CityData(BaseModel):
    name: str
    solar_radiation: SolarRadiation
    electricity_rate: float = Field(description="Electricity tariff (Rs/kWh)")
    temperature: SeasonalValues | None = Field(default=None, description="Mean temperature (°C)")
    humidity: SeasonalValues | None = Field(default=None, description="Relative humidity (%)")


# =============================================================================
# ANALYSIS RESULTS
# =============================================================================


class HeatGain(BaseModel):
    north: float = 0.0
    south: float = 0.0
    east: float = 0.0
    west: float = 0.0
    skylight: float = 0.0
    total: float = 0.0


class AnalysisResult(BaseModel):
    """Heat gain and cooling figures for one design in one city."""

    building_design_id: str | None = None
    name: str = ""
    city: str
    heat_gain: HeatGain
    cooling_load_kwh: float
    energy_consumption: float = Field(description="Electricity used for cooling (kWh)")
    cooling_cost: float = Field(description="Cooling cost (Rs)")
    season: Season | None = None
    hour: int | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HourlyEnergy(BaseModel):
    hour: int
    sunlight_factor: float
    heat_gain: float
    energy_consumption: float
    cost: float


class DailyEnergyProfile(BaseModel):
    building_design_id: str | None = None
    name: str = ""
    city: str
    season: Season
    hours: list[HourlyEnergy]
    total_heat_gain: float
    total_energy_consumption: float
    total_cost: float
    peak_hour: int
