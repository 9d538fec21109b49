"""Core models, reference data and configuration."""

from .models import (
    AnalysisResult,
    BuildingDesign,
    CityData,
    DailyEnergyProfile,
    Facade,
    Facades,
    HeatGain,
    HourlyEnergy,
    Orientation,
    Season,
    SeasonalValues,
    Skylight,
    SolarRadiation,
)
from .cities import REFERENCE_CITIES, city_names, get_reference_city
from .config import Settings, settings
from .exceptions import NotFoundError, StoreError, ValidationError
from .history import DesignHistory, HistoryEntry

__all__ = [
    "AnalysisResult",
    "BuildingDesign",
    "CityData",
    "DailyEnergyProfile",
    "Facade",
    "Facades",
    "HeatGain",
    "HourlyEnergy",
    "Orientation",
    "Season",
    "SeasonalValues",
    "Skylight",
    "SolarRadiation",
    "REFERENCE_CITIES",
    "city_names",
    "get_reference_city",
    "Settings",
    "settings",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "DesignHistory",
    "HistoryEntry",
]
