"""
Supabase client for Facade Energy.

Building designs and city data are stored in two tables with JSON columns
for the nested facade/skylight/radiation data:

    building_designs(id text primary key, building_id text, name text,
                     facades jsonb, skylight jsonb,
                     created_at timestamptz, updated_at timestamptz)
    city_data(id bigserial primary key, name text unique,
              solar_radiation jsonb, electricity_rate float8,
              temperature jsonb, humidity jsonb)
"""

import logging
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from supabase import Client, create_client

from ..core.config import settings
from ..core.exceptions import StoreError
from .memory import MemoryClient
from .models import CITIES_TABLE, DESIGNS_TABLE

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Wrapper for Supabase client with lazy initialization."""

    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        self._url = url or settings.supabase_url
        self._key = key or settings.supabase_key
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        """Get or create Supabase client."""
        if self._client is None:
            if not self._url or not self._key:
                raise StoreError(
                    "SUPABASE_URL and SUPABASE_KEY must be set in environment"
                )
            self._client = create_client(self._url, self._key)
        return self._client

    def _execute(self, query: Any, action: str) -> List[Dict[str, Any]]:
        """Run a query, wrapping any backend failure in StoreError."""
        try:
            return query.execute().data or []
        except StoreError:
            raise
        except Exception as e:
            logger.error(f"Supabase error while trying to {action}: {e}")
            raise StoreError(f"Failed to {action}") from e

    # ============================================
    # Building designs
    # ============================================

    def insert_design(self, data: dict) -> Optional[dict]:
        """Insert a new building design."""
        rows = self._execute(self.client.table(DESIGNS_TABLE).insert(data), "create building design")
        return rows[0] if rows else None

    def get_design(self, design_id: str) -> Optional[dict]:
        """Get building design by ID."""
        rows = self._execute(
            self.client.table(DESIGNS_TABLE).select("*").eq("id", design_id),
            "fetch building design",
        )
        return rows[0] if rows else None

    def list_designs(
        self,
        building_id: Optional[str] = None,
        ids: Optional[List[str]] = None,
    ) -> List[dict]:
        """List designs, optionally by building group or explicit IDs."""
        query = self.client.table(DESIGNS_TABLE).select("*")
        if building_id:
            query = query.eq("building_id", building_id)
        if ids is not None:
            query = query.in_("id", ids)
        return self._execute(query.order("created_at"), "fetch building designs")

    def update_design(self, design_id: str, data: dict) -> Optional[dict]:
        """Update building design."""
        rows = self._execute(
            self.client.table(DESIGNS_TABLE).update(data).eq("id", design_id),
            "update building design",
        )
        return rows[0] if rows else None

    def delete_design(self, design_id: str) -> bool:
        """Delete building design; False if it did not exist."""
        rows = self._execute(
            self.client.table(DESIGNS_TABLE).delete().eq("id", design_id),
            "delete building design",
        )
        return bool(rows)

    def clear_designs(self) -> int:
        """Delete all building designs."""
        rows = self._execute(
            self.client.table(DESIGNS_TABLE).delete().neq("id", ""),
            "clear building designs",
        )
        return len(rows)

    # ============================================
    # City data
    # ============================================

    def list_cities(self) -> List[dict]:
        return self._execute(
            self.client.table(CITIES_TABLE).select("*").order("id"),
            "fetch city data",
        )

    def get_city(self, name: str) -> Optional[dict]:
        """Get city by exact name (case-insensitive)."""
        wanted = name.strip()
        # %, _ and * are pattern characters for ilike
        pattern = re.sub(r"([\\%_*])", r"\\\1", wanted)
        rows = self._execute(
            self.client.table(CITIES_TABLE).select("*").ilike("name", pattern),
            "fetch city data",
        )
        matches = [row for row in rows if str(row.get("name", "")).lower() == wanted.lower()]
        return matches[0] if matches else None

    def replace_cities(self, rows: List[dict]) -> List[dict]:
        """Replace all city rows."""
        self._execute(self.client.table(CITIES_TABLE).delete().neq("name", ""), "clear city data")
        return self._execute(self.client.table(CITIES_TABLE).insert(rows), "insert city data")

    def check_connection(self) -> bool:
        """Check if Supabase connection works."""
        try:
            self._execute(self.client.table(CITIES_TABLE).select("name").limit(1), "check connection")
            return True
        except StoreError as e:
            logger.warning(f"Supabase connection error: {e}")
            return False


StoreClient = Union[SupabaseClient, MemoryClient]


@lru_cache(maxsize=1)
def get_client() -> StoreClient:
    """Singleton store client for the configured backend."""
    if settings.storage_backend == "supabase":
        logger.info("Using Supabase document store")
        return SupabaseClient()
    logger.info("Using in-memory document store")
    return MemoryClient()


def check_connection() -> bool:
    """Check if the configured store responds."""
    return get_client().check_connection()
