"""
Reference climate and tariff data for the supported Indian cities.

Solar radiation values are per orientation (north/south/east/west facades and
the roof); electricity rates are residential tariffs in Rs/kWh. The same
table seeds the document store on first start.
"""

import logging
from typing import Dict, List

from .exceptions import ValidationError
from .models import CityData, SeasonalValues, SolarRadiation

logger = logging.getLogger(__name__)


REFERENCE_CITIES: List[CityData] = [
    CityData(
        name="Bangalore",
        solar_radiation=SolarRadiation(north=150, south=250, east=200, west=200, roof=300),
        electricity_rate=6.5,
        temperature=SeasonalValues(summer=35, winter=20, monsoon=28),
        humidity=SeasonalValues(summer=60, winter=40, monsoon=80),
    ),
    CityData(
        name="Mumbai",
        solar_radiation=SolarRadiation(north=180, south=350, east=280, west=270, roof=400),
        electricity_rate=9.0,
        temperature=SeasonalValues(summer=32, winter=22, monsoon=30),
        humidity=SeasonalValues(summer=75, winter=50, monsoon=85),
    ),
    CityData(
        name="Kolkata",
        solar_radiation=SolarRadiation(north=200, south=400, east=300, west=290, roof=450),
        electricity_rate=7.5,
        temperature=SeasonalValues(summer=34, winter=18, monsoon=32),
        humidity=SeasonalValues(summer=70, winter=45, monsoon=82),
    ),
    CityData(
        name="Delhi",
        solar_radiation=SolarRadiation(north=160, south=270, east=220, west=220, roof=320),
        electricity_rate=8.5,
        temperature=SeasonalValues(summer=40, winter=15, monsoon=35),
        humidity=SeasonalValues(summer=50, winter=30, monsoon=70),
    ),
]

_CITY_INDEX: Dict[str, CityData] = {city.name.lower(): city for city in REFERENCE_CITIES}


def city_names() -> List[str]:
    """Names of the reference cities, in table order."""
    return [city.name for city in REFERENCE_CITIES]


def get_reference_city(name: str) -> CityData:
    """
    Look up a reference city by name (case-insensitive).

    Raises:
        ValidationError: If the city is not in the reference table
    """
    city = _CITY_INDEX.get((name or "").strip().lower())
    if city is None:
        raise ValidationError(
            f"No data available for city: {name}",
            field="city",
            suggestions=[f"Supported cities: {', '.join(city_names())}"],
        )
    return city.model_copy(deep=True)
