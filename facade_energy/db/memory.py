"""
In-process document store.

Same interface as SupabaseClient, backed by dicts. Used for local runs
(`FACADE_STORAGE_BACKEND=memory`, the default) and in tests. Data lives only
as long as the process.
"""

import copy
import threading
from typing import Dict, List, Optional


class MemoryClient:
    """Dict-backed store for building designs and city data."""

    def __init__(self):
        self._designs: Dict[str, dict] = {}
        self._cities: List[dict] = []
        self._lock = threading.Lock()

    # Building designs

    def insert_design(self, data: dict) -> Optional[dict]:
        with self._lock:
            self._designs[data["id"]] = copy.deepcopy(data)
            return copy.deepcopy(data)

    def get_design(self, design_id: str) -> Optional[dict]:
        with self._lock:
            row = self._designs.get(design_id)
            return copy.deepcopy(row) if row else None

    def list_designs(
        self,
        building_id: Optional[str] = None,
        ids: Optional[List[str]] = None,
    ) -> List[dict]:
        with self._lock:
            rows = [
                row for row in self._designs.values()
                if (not building_id or row.get("building_id") == building_id)
                and (ids is None or row["id"] in ids)
            ]
            rows.sort(key=lambda r: r.get("created_at") or "")
            return copy.deepcopy(rows)

    def update_design(self, design_id: str, data: dict) -> Optional[dict]:
        with self._lock:
            row = self._designs.get(design_id)
            if row is None:
                return None
            row.update(copy.deepcopy(data))
            return copy.deepcopy(row)

    def delete_design(self, design_id: str) -> bool:
        with self._lock:
            return self._designs.pop(design_id, None) is not None

    def clear_designs(self) -> int:
        with self._lock:
            count = len(self._designs)
            self._designs.clear()
            return count

    # City data

    def list_cities(self) -> List[dict]:
        with self._lock:
            return copy.deepcopy(self._cities)

    def get_city(self, name: str) -> Optional[dict]:
        wanted = name.strip().lower()
        with self._lock:
            for row in self._cities:
                if str(row.get("name", "")).lower() == wanted:
                    return copy.deepcopy(row)
        return None

    def replace_cities(self, rows: List[dict]) -> List[dict]:
        with self._lock:
            self._cities = [
                {**copy.deepcopy(row), "id": row.get("id", index + 1)}
                for index, row in enumerate(rows)
            ]
            return copy.deepcopy(self._cities)

    def check_connection(self) -> bool:
        return True
