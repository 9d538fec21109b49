"""
Database module for Facade Energy.

Document store access for building designs and city reference data, backed
by Supabase or an in-process store.
"""

from .client import get_client, check_connection, SupabaseClient, StoreClient
from .memory import MemoryClient
from .models import BuildingDesignRecord, CityDataRecord
from .repository import BuildingDesignRepository, CityDataRepository
from .seed import initialize_database

__all__ = [
    "get_client",
    "check_connection",
    "SupabaseClient",
    "StoreClient",
    "MemoryClient",
    "BuildingDesignRecord",
    "CityDataRecord",
    "BuildingDesignRepository",
    "CityDataRepository",
    "initialize_database",
]
