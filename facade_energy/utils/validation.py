"""
Input validation for building designs and city reference data.

Every check raises ValidationError with the offending field and, where it
helps, suggestions for a fix. Validators accept either raw dicts (request
bodies, store rows) or the corresponding models and return validated models.

Usage:
    from facade_energy.utils.validation import (
        validate_building_design,
        validate_city_data,
        ValidationError,
    )

    design = validate_building_design(payload)
    city = validate_city_data(row)
"""

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError
from ..core.models import (
    BuildingDesign,
    CityData,
    Facade,
    ORIENTATIONS,
    RADIATION_KEYS,
    Season,
    Skylight,
)

logger = logging.getLogger(__name__)

FACADE_PROPERTIES = ("height", "width", "wwr", "shgc")
RATIO_PROPERTIES = ("wwr", "shgc")


def _as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    """Return a plain mapping for dicts and pydantic models, None otherwise."""
    if value is None:
        return None
    if hasattr(value, "model_dump"):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    return None


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_facade(orientation: str, data: Any) -> Facade:
    """
    Validate one facade.

    Height and width must be positive numbers; window-to-wall ratio and
    solar heat gain coefficient must lie in (0, 1].

    Raises:
        ValidationError: If the facade is missing, incomplete or out of range
    """
    facade = _as_mapping(data)
    if not facade:
        raise ValidationError(
            f"Building design is missing {orientation} facade data",
            field=f"facades.{orientation}",
        )

    missing = [
        prop for prop in FACADE_PROPERTIES
        if not _is_number(facade.get(prop)) or facade.get(prop) == 0
    ]
    if missing:
        raise ValidationError(
            f"{orientation} facade is missing required properties "
            f"(height, width, wwr, or shgc): {', '.join(missing)}",
            field=f"facades.{orientation}.{missing[0]}",
            suggestions=["All facade properties must be non-zero numbers"],
        )

    for prop in ("height", "width"):
        if facade[prop] < 0:
            raise ValidationError(
                f"{orientation} facade {prop} must be positive: got {facade[prop]}",
                field=f"facades.{orientation}.{prop}",
            )

    for prop in RATIO_PROPERTIES:
        if not 0 < facade[prop] <= 1:
            raise ValidationError(
                f"{orientation} facade {prop} must be between 0 and 1: got {facade[prop]}",
                field=f"facades.{orientation}.{prop}",
                suggestions=[f"Express {prop} as a fraction, e.g. 0.3 rather than 30"],
            )

    return Facade(**{prop: float(facade[prop]) for prop in FACADE_PROPERTIES})


def validate_skylight(data: Any) -> Optional[Skylight]:
    """
    Validate an optional skylight.

    A missing skylight, or one with both dimensions zero, means "no skylight".

    Raises:
        ValidationError: If the dimensions are invalid
    """
    skylight = _as_mapping(data)
    if not skylight:
        return None

    width, length = skylight.get("width"), skylight.get("length")
    if not width and not length:
        return None

    for prop, value in (("width", width), ("length", length)):
        if not _is_number(value) or value <= 0:
            raise ValidationError(
                f"Skylight {prop} must be a positive number: got {value!r}",
                field=f"skylight.{prop}",
            )

    return Skylight(width=float(width), length=float(length))


def validate_building_design(data: Union[Mapping[str, Any], BuildingDesign]) -> BuildingDesign:
    """
    Validate a building design.

    Args:
        data: Request body, store row or BuildingDesign

    Returns:
        Validated BuildingDesign

    Raises:
        ValidationError: If any facade is missing or malformed
    """
    design = _as_mapping(data)
    if design is None:
        raise ValidationError("Building design must be an object", field="design")

    facades = _as_mapping(design.get("facades"))
    if not facades:
        raise ValidationError(
            "Building design is missing facades data",
            field="facades",
            suggestions=["Provide north, south, east and west facades"],
        )

    validated_facades = {
        orientation: validate_facade(orientation, facades.get(orientation))
        for orientation in ORIENTATIONS
    }

    name = design.get("name")
    if name is not None and not isinstance(name, str):
        raise ValidationError(f"Design name must be a string: got {name!r}", field="name")

    fields = {
        key: design.get(key)
        for key in ("id", "building_id", "created_at", "updated_at")
        if design.get(key) is not None
    }
    try:
        return BuildingDesign(
            name=(name or "").strip() or "Untitled design",
            facades=validated_facades,
            skylight=validate_skylight(design.get("skylight")),
            **fields,
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid building design: {e}", field="design")


def validate_city_data(data: Union[Mapping[str, Any], CityData]) -> CityData:
    """
    Validate a city reference record.

    Raises:
        ValidationError: If the name, radiation table or electricity rate is malformed
    """
    city = _as_mapping(data)
    if not city:
        raise ValidationError("City data must be an object", field="city")

    name = city.get("name")
    if not name or not isinstance(name, str):
        raise ValidationError("City data is missing a name", field="city.name")

    radiation = _as_mapping(city.get("solar_radiation"))
    if not radiation:
        raise ValidationError(
            f"City data for {name} is missing the solar radiation table",
            field="city.solar_radiation",
        )

    for direction in RADIATION_KEYS:
        value = radiation.get(direction)
        if not _is_number(value) or value < 0:
            raise ValidationError(
                f"City data for {name} has invalid {direction} solar radiation: {value!r}",
                field=f"city.solar_radiation.{direction}",
                suggestions=[f"Radiation table needs numeric {', '.join(RADIATION_KEYS)}"],
            )

    rate = city.get("electricity_rate")
    if not _is_number(rate) or rate < 0:
        raise ValidationError(
            f"City data for {name} has invalid electricity rate: {rate!r}",
            field="city.electricity_rate",
        )

    try:
        return CityData.model_validate(dict(city))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid city data for {name}: {e}", field="city")


def validate_season(season: Union[str, Season, None], default: Season = Season.SUMMER) -> Season:
    """
    Normalize a season label (case-insensitive).

    Raises:
        ValidationError: If the season is unknown
    """
    if season is None or season == "":
        return default
    if isinstance(season, Season):
        return season

    normalized = str(season).strip().lower()
    try:
        return Season(normalized)
    except ValueError:
        raise ValidationError(
            f"Unknown season '{season}'",
            field="season",
            suggestions=[f"Valid seasons are: {', '.join(s.value for s in Season)}"],
        )


def validate_hour(hour: Any) -> int:
    """
    Validate an hour-of-day index.

    Raises:
        ValidationError: If the hour is not an integer in 0-23
    """
    if isinstance(hour, bool):
        raise ValidationError(f"Hour must be an integer: got {hour!r}", field="hour")
    if not isinstance(hour, int):
        try:
            if float(hour) != int(float(hour)):
                raise ValueError(hour)
            hour = int(float(hour))
        except (ValueError, TypeError, OverflowError):
            raise ValidationError(f"Hour must be an integer: got {hour!r}", field="hour")

    if not 0 <= hour <= 23:
        raise ValidationError(
            f"Hour must be between 0 and 23: got {hour}",
            field="hour",
        )
    return hour


def parse_id_list(ids: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated id list, dropping blanks. None or empty means 'all'."""
    if not ids:
        return None
    parsed = [i.strip() for i in ids.split(",") if i.strip()]
    return parsed or None


def describe_error(error: ValidationError) -> Dict[str, Any]:
    """Serialize a ValidationError for API responses."""
    return {
        "detail": str(error),
        "field": error.field,
        "suggestions": error.suggestions,
    }
