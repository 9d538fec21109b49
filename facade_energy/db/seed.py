"""
Seed the document store with the reference city data.
"""

import logging
from typing import Optional

from ..core.cities import REFERENCE_CITIES
from .client import StoreClient
from .repository import CityDataRepository

logger = logging.getLogger(__name__)


def initialize_database(client: Optional[StoreClient] = None, force: bool = False) -> int:
    """
    Insert the reference cities when the city table is empty.

    Args:
        client: Store client (default: configured backend)
        force: Replace existing city rows even if present

    Returns:
        Number of cities written (0 when existing data was kept)
    """
    repo = CityDataRepository(client)

    existing = repo.count()
    logger.info(f"Found {existing} existing cities in database")
    if existing and not force:
        return 0

    saved = repo.replace_all(REFERENCE_CITIES)
    logger.info(f"Successfully initialized {len(saved)} cities: {', '.join(c.name for c in saved)}")
    return len(saved)
