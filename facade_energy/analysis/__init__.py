"""Heat gain, cooling energy and comparison analysis."""

from .energy_calculator import (
    EnergyCalculator,
    analyze_building,
    facade_heat_gain,
    skylight_heat_gain,
    cooling_load_kwh,
    energy_consumption,
    cooling_cost,
    COP,
    BTU_TO_KWH,
    SKYLIGHT_SHGC,
)
from .sunlight import (
    SEASON_PARAMETERS,
    SunlightParameters,
    sunlight_factor,
    sunlight_profile,
    solar_noon,
    daylight_hours,
    orientation_factors,
)
from .comparison import (
    BuildingRanking,
    ComparativeAnalysis,
    PerformanceMetrics,
    rank_designs,
    comparative_analysis,
    carbon_emissions,
    peak_demand,
    weighted_heat_gain,
)
from .service import AnalysisService

__all__ = [
    "EnergyCalculator",
    "analyze_building",
    "facade_heat_gain",
    "skylight_heat_gain",
    "cooling_load_kwh",
    "energy_consumption",
    "cooling_cost",
    "COP",
    "BTU_TO_KWH",
    "SKYLIGHT_SHGC",
    "SEASON_PARAMETERS",
    "SunlightParameters",
    "sunlight_factor",
    "sunlight_profile",
    "solar_noon",
    "daylight_hours",
    "orientation_factors",
    "BuildingRanking",
    "ComparativeAnalysis",
    "PerformanceMetrics",
    "rank_designs",
    "comparative_analysis",
    "carbon_emissions",
    "peak_demand",
    "weighted_heat_gain",
    "AnalysisService",
]
