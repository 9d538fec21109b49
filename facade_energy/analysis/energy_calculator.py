"""
Facade heat gain and cooling energy calculator.

For each cardinal facade:

    window_area = height x width x wwr
    heat_gain   = window_area x shgc x solar_radiation[orientation] x hours

An optional skylight adds width x length x SKYLIGHT_SHGC x radiation.roof x hours.
The total heat gain (BTU) converts to cooling energy and cost as:

    cooling_load_kwh   = heat_gain / BTU_TO_KWH
    energy_consumption = cooling_load_kwh / COP
    cooling_cost       = energy_consumption x electricity_rate

Three granularities are supported:
- instantaneous: full radiation for one hour (no season, no hour)
- hourly: radiation scaled by the season's sunlight factor at that hour
- daily: the sum of the 24 hourly values for a season

All functions are pure; invalid input raises ValidationError and no partial
result is returned.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from ..core.models import (
    AnalysisResult,
    BuildingDesign,
    CityData,
    DailyEnergyProfile,
    Facade,
    HeatGain,
    HourlyEnergy,
    ORIENTATIONS,
    Season,
    Skylight,
)
from ..utils.validation import (
    validate_building_design,
    validate_city_data,
    validate_hour,
    validate_season,
)
from .sunlight import HOURS_PER_DAY, orientation_factors, sunlight_factor, sunlight_profile

logger = logging.getLogger(__name__)

COP = 4.0  # Coefficient of performance of the cooling system
BTU_TO_KWH = 3412.0  # BTU per kWh
SKYLIGHT_SHGC = 0.4  # Assumed glazing SHGC for skylights
DEFAULT_DURATION_HOURS = 1.0


# =============================================================================
# FORMULAS
# =============================================================================


def facade_heat_gain(facade: Facade, solar_radiation: float, hours: float = DEFAULT_DURATION_HOURS) -> float:
    """Heat gain through the glazed part of one facade."""
    return facade.window_area * facade.shgc * solar_radiation * hours


def skylight_heat_gain(
    skylight: Skylight | None,
    roof_radiation: float,
    hours: float = DEFAULT_DURATION_HOURS,
) -> float:
    """Heat gain through a skylight; zero when there is none."""
    if skylight is None:
        return 0.0
    return skylight.area * SKYLIGHT_SHGC * roof_radiation * hours


def cooling_load_kwh(heat_gain_btu: float) -> float:
    return heat_gain_btu / BTU_TO_KWH


def energy_consumption(cooling_load: float) -> float:
    """Electricity needed to remove a cooling load (kWh)."""
    return cooling_load / COP


def cooling_cost(energy_kwh: float, electricity_rate: float) -> float:
    return energy_kwh * electricity_rate


def energy_from_heat_gain(heat_gain_btu: float) -> float:
    """Heat gain (BTU) straight to electricity consumed (kWh)."""
    return energy_consumption(cooling_load_kwh(heat_gain_btu))


# =============================================================================
# CALCULATOR
# =============================================================================


class EnergyCalculator:
    """
    Heat gain, cooling energy and cost for building designs.

    Usage:
        calculator = EnergyCalculator()
        result = calculator.analyze(design, city)
        noon = calculator.analyze(design, city, season="summer", hour=12)
        profile = calculator.daily_profile(design, city, season="winter")
    """

    def heat_gain(
        self,
        design: BuildingDesign,
        city: CityData,
        sunlight: float = 1.0,
        facade_weights: Mapping[str, float] | None = None,
        hours: float = DEFAULT_DURATION_HOURS,
    ) -> HeatGain:
        """
        Per-facade and total heat gain.

        Args:
            design: Validated building design
            city: Validated city data
            sunlight: Multiplier applied to all radiation values
            facade_weights: Optional per-orientation multipliers
            hours: Exposure duration
        """
        radiation = city.solar_radiation
        values: dict[str, float] = {}
        for orientation, facade in design.facades.items():
            weight = facade_weights.get(orientation, 1.0) if facade_weights else 1.0
            values[orientation] = facade_heat_gain(
                facade,
                radiation.for_orientation(orientation) * sunlight * weight,
                hours,
            )

        values["skylight"] = skylight_heat_gain(design.skylight, radiation.roof * sunlight, hours)
        total = sum(values[o] for o in ORIENTATIONS) + values["skylight"]
        return HeatGain(total=total, **values)

    def analyze(
        self,
        design: BuildingDesign | Mapping[str, Any],
        city: CityData | Mapping[str, Any],
        season: Season | str | None = None,
        hour: int | None = None,
    ) -> AnalysisResult:
        """
        Analyze one design in one city.

        Args:
            design: Building design (model or raw dict)
            city: City data (model or raw dict)
            season: Season label; with no hour the result covers the whole day
            hour: Hour of day (0-23); season defaults to summer

        Returns:
            AnalysisResult

        Raises:
            ValidationError: On missing/zero facade fields, malformed city data,
                unknown season or invalid hour
        """
        design = validate_building_design(design)
        city = validate_city_data(city)

        if hour is not None:
            hour = validate_hour(hour)
            season = validate_season(season)
            heat_gain = self.heat_gain(design, city, sunlight=sunlight_factor(hour, season))
        elif season is not None:
            season = validate_season(season)
            heat_gain = self._daily_heat_gain(design, city, season)
        else:
            heat_gain = self.heat_gain(design, city)

        load = cooling_load_kwh(heat_gain.total)
        energy = energy_consumption(load)

        logger.debug(
            f"Analyzed {design.name}: {heat_gain.total:.1f} BTU, {energy:.4f} kWh",
            extra={"building_id": design.id, "city": city.name},
        )

        return AnalysisResult(
            building_design_id=design.id,
            name=design.name,
            city=city.name,
            heat_gain=heat_gain,
            cooling_load_kwh=load,
            energy_consumption=energy,
            cooling_cost=cooling_cost(energy, city.electricity_rate),
            season=season,
            hour=hour,
        )

    def daily_profile(
        self,
        design: BuildingDesign | Mapping[str, Any],
        city: CityData | Mapping[str, Any],
        season: Season | str | None = None,
        orientation_weighting: bool = False,
    ) -> DailyEnergyProfile:
        """
        Hourly heat gain, energy and cost over one day.

        Args:
            design: Building design
            city: City data
            season: Season (default summer)
            orientation_weighting: Also weight facades by time-of-day exposure
                (east in the morning, west in the afternoon)
        """
        design = validate_building_design(design)
        city = validate_city_data(city)
        season = validate_season(season)

        profile = sunlight_profile(season)
        hourly: list[HourlyEnergy] = []
        for hour in range(HOURS_PER_DAY):
            factor = float(profile[hour])
            weights = orientation_factors(hour) if orientation_weighting else None
            gain = self.heat_gain(design, city, sunlight=factor, facade_weights=weights).total
            energy = energy_from_heat_gain(gain)
            hourly.append(HourlyEnergy(
                hour=hour,
                sunlight_factor=factor,
                heat_gain=gain,
                energy_consumption=energy,
                cost=cooling_cost(energy, city.electricity_rate),
            ))

        gains = np.array([h.heat_gain for h in hourly])
        return DailyEnergyProfile(
            building_design_id=design.id,
            name=design.name,
            city=city.name,
            season=season,
            hours=hourly,
            total_heat_gain=float(gains.sum()),
            total_energy_consumption=sum(h.energy_consumption for h in hourly),
            total_cost=sum(h.cost for h in hourly),
            peak_hour=int(gains.argmax()),
        )

    def _daily_heat_gain(self, design: BuildingDesign, city: CityData, season: Season) -> HeatGain:
        """Heat gain summed over the hours of one day."""
        # Every term is linear in radiation, so the daily sum is the
        # instantaneous value scaled by the sum of the hourly factors.
        daily_factor = float(sunlight_profile(season).sum())
        return self.heat_gain(design, city, sunlight=daily_factor)


_default_calculator = EnergyCalculator()


def analyze_building(
    design: BuildingDesign | Mapping[str, Any],
    city: CityData | Mapping[str, Any],
    season: Season | str | None = None,
    hour: int | None = None,
) -> AnalysisResult:
    """Module-level shortcut for EnergyCalculator().analyze()."""
    return _default_calculator.analyze(design, city, season=season, hour=hour)
