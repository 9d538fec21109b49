"""Utility modules."""

from .logging_config import (
    get_logger,
    setup_logging,
    ensure_logging,
    FacadeFormatter,
    FileFormatter,
)
from .validation import (
    validate_building_design,
    validate_city_data,
    validate_facade,
    validate_skylight,
    validate_season,
    validate_hour,
    parse_id_list,
    describe_error,
    ValidationError,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "ensure_logging",
    "FacadeFormatter",
    "FileFormatter",
    # Validation
    "validate_building_design",
    "validate_city_data",
    "validate_facade",
    "validate_skylight",
    "validate_season",
    "validate_hour",
    "parse_id_list",
    "describe_error",
    "ValidationError",
]
