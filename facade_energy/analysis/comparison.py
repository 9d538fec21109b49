"""
Design comparison within a city.

Ranks designs by cooling cost at a representative hour and summarizes how
each performs against the group average. Also carries the derived indicators
shown next to analysis results (carbon emissions, peak demand, weighted
facade metric).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.models import BuildingDesign, CityData, HeatGain, Season
from ..utils.validation import validate_building_design, validate_season
from .energy_calculator import EnergyCalculator

GRID_EMISSION_FACTOR = 0.82  # kg CO2 per kWh, Indian grid average
PEAK_DEMAND_SHARE = 0.2
RANKING_HOUR = 12

FACADE_WEIGHT = 0.25
SKYLIGHT_WEIGHT = 0.1


@dataclass
class BuildingRanking:
    """Cost position of one design."""
    building_design_id: Optional[str]
    name: str
    total_heat_gain: float
    energy_consumption: float
    cost: float
    wall_area: float = 0.0
    rank: int = 0


@dataclass
class PerformanceMetrics:
    cost_efficiency: float  # % below (positive) or above (negative) the average cost
    heat_gain_intensity: float  # heat gain per m² of facade


@dataclass
class ComparativeAnalysis:
    city: str
    season: Season
    rankings: List[BuildingRanking] = field(default_factory=list)
    best_performer: Optional[BuildingRanking] = None
    worst_performer: Optional[BuildingRanking] = None
    average_cost: float = 0.0
    cost_savings: float = 0.0
    performance_metrics: Dict[str, PerformanceMetrics] = field(default_factory=dict)


def rank_designs(
    designs: Sequence[BuildingDesign],
    city: CityData,
    season: Optional[str] = None,
    hour: int = RANKING_HOUR,
    calculator: Optional[EnergyCalculator] = None,
) -> List[BuildingRanking]:
    """
    Rank designs by cooling cost at one hour of the day, cheapest first.

    Raises:
        ValidationError: If any design or the city is invalid
    """
    calculator = calculator or EnergyCalculator()
    season = validate_season(season)

    rankings = []
    for design in designs:
        design = validate_building_design(design)
        result = calculator.analyze(design, city, season=season, hour=hour)
        rankings.append(BuildingRanking(
            building_design_id=result.building_design_id,
            name=result.name,
            total_heat_gain=result.heat_gain.total,
            energy_consumption=result.energy_consumption,
            cost=result.cooling_cost,
            wall_area=design.facades.total_wall_area,
        ))

    rankings.sort(key=lambda r: r.cost)
    for position, ranking in enumerate(rankings, start=1):
        ranking.rank = position
    return rankings


def comparative_analysis(
    designs: Sequence[BuildingDesign],
    city: CityData,
    season: Optional[str] = None,
    calculator: Optional[EnergyCalculator] = None,
) -> ComparativeAnalysis:
    """Best/worst performer, average cost and per-design efficiency for a city."""
    season = validate_season(season)
    rankings = rank_designs(designs, city, season=season, calculator=calculator)
    analysis = ComparativeAnalysis(city=city.name, season=season, rankings=rankings)

    if not rankings:
        return analysis

    analysis.best_performer = rankings[0]
    analysis.worst_performer = rankings[-1]
    analysis.average_cost = sum(r.cost for r in rankings) / len(rankings)
    analysis.cost_savings = analysis.worst_performer.cost - analysis.best_performer.cost

    for ranking in rankings:
        # unsaved designs may share a name
        key = ranking.building_design_id or f"{ranking.rank}:{ranking.name}"
        if analysis.average_cost:
            efficiency = (analysis.average_cost - ranking.cost) / analysis.average_cost * 100
        else:
            efficiency = 0.0
        analysis.performance_metrics[key] = PerformanceMetrics(
            cost_efficiency=efficiency,
            heat_gain_intensity=ranking.total_heat_gain / ranking.wall_area if ranking.wall_area else 0.0,
        )

    return analysis


def carbon_emissions(energy_kwh: float) -> float:
    """CO2 emitted by the grid to supply the energy (tonnes)."""
    return energy_kwh / 1000 * GRID_EMISSION_FACTOR


def peak_demand(energy_kwh: float) -> float:
    return energy_kwh * PEAK_DEMAND_SHARE


def weighted_heat_gain(heat_gain: HeatGain) -> float:
    """Single comparison metric: equal facade weights plus a smaller skylight weight."""
    facades = heat_gain.north + heat_gain.south + heat_gain.east + heat_gain.west
    return FACADE_WEIGHT * facades + SKYLIGHT_WEIGHT * heat_gain.skylight
