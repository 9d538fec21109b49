"""
Hourly sunlight model.

Sunlight intensity follows a half-sine between season-specific sunrise and
sunset, peaking at solar noon with a season-specific peak factor:

    factor(h) = sin((h - sunrise) / (sunset - sunrise) * pi) * peak

and zero outside [sunrise, sunset]. Daily radiation is distributed over the
24 hours of a day by multiplying it with the factor of each hour.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..core.models import Season
from ..utils.validation import validate_season

HOURS_PER_DAY = 24


@dataclass(frozen=True)
class SunlightParameters:
    """Sunrise/sunset in decimal 24h hours and the peak intensity factor."""

    sunrise: float
    sunset: float
    peak: float

    @property
    def day_length(self) -> float:
        return self.sunset - self.sunrise

    @property
    def solar_noon(self) -> float:
        return (self.sunrise + self.sunset) / 2


SEASON_PARAMETERS: dict[Season, SunlightParameters] = {
    Season.SUMMER: SunlightParameters(sunrise=5.5, sunset=19.0, peak=1.0),
    Season.WINTER: SunlightParameters(sunrise=6.5, sunset=17.5, peak=0.7),
    Season.MONSOON: SunlightParameters(sunrise=6.0, sunset=18.5, peak=0.85),
}


def get_parameters(season: Season | str | None) -> SunlightParameters:
    """Sunlight parameters for a season (default summer)."""
    return SEASON_PARAMETERS[validate_season(season)]


def sunlight_factor(hour: float, season: Season | str | None = Season.SUMMER) -> float:
    """Sunlight intensity (0 to peak) at a time of day given in decimal hours."""
    params = get_parameters(season)
    if hour < params.sunrise or hour > params.sunset:
        return 0.0
    x = (hour - params.sunrise) / params.day_length * math.pi
    return max(0.0, math.sin(x) * params.peak)


def sunlight_profile(season: Season | str | None = Season.SUMMER) -> np.ndarray:
    """Sunlight factor for each whole hour 0-23."""
    params = get_parameters(season)
    hours = np.arange(HOURS_PER_DAY, dtype=float)
    daylight = (hours >= params.sunrise) & (hours <= params.sunset)
    x = (hours - params.sunrise) / params.day_length * np.pi
    profile = np.where(daylight, np.sin(x) * params.peak, 0.0)
    return np.clip(profile, 0.0, None)


def solar_noon(season: Season | str | None = Season.SUMMER) -> float:
    return get_parameters(season).solar_noon


def daylight_hours(season: Season | str | None = Season.SUMMER) -> list[int]:
    """Whole hours with non-zero sunlight."""
    return [int(h) for h in np.nonzero(sunlight_profile(season) > 1e-9)[0]]


# Time-of-day weighting per facade. East facades see the morning sun and
# west facades the afternoon sun.
BASE_ORIENTATION_FACTORS: dict[str, float] = {
    "north": 0.3,
    "south": 0.7,
    "east": 0.5,
    "west": 0.5,
}


def orientation_factors(hour: int) -> dict[str, float]:
    """Relative facade exposure for an hour of the day."""
    factors = dict(BASE_ORIENTATION_FACTORS)
    if 6 <= hour <= 10:
        factors["east"] = 0.8
        factors["west"] = 0.2
    elif 14 <= hour <= 18:
        factors["east"] = 0.2
        factors["west"] = 0.8
    return factors
