"""
Undo/redo history of building design edits.

A bounded list of design snapshots with a cursor. Saving a new state while
the cursor is behind the end discards the redo branch.

Usage:
    history = DesignHistory(initial_design)
    history.save_state(edited_design)
    previous = history.undo()
    diff = history.compare_states(0, 1)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import BuildingDesign, ORIENTATIONS

DEFAULT_MAX_STATES = 50


@dataclass
class HistoryEntry:
    """One saved design snapshot."""
    state: BuildingDesign
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class DesignHistory:
    """Linear undo stack over BuildingDesign snapshots."""

    def __init__(self, initial_state: Optional[BuildingDesign] = None, max_states: int = DEFAULT_MAX_STATES):
        if max_states < 1:
            raise ValueError(f"max_states must be at least 1: got {max_states}")
        self.max_states = max_states
        self._states: List[HistoryEntry] = []
        self._index = -1

        if initial_state is not None:
            self.save_state(initial_state)

    def __len__(self) -> int:
        return len(self._states)

    @property
    def index(self) -> int:
        return self._index

    def save_state(self, state: BuildingDesign) -> None:
        """Append a snapshot, dropping any redo branch and the oldest state past the limit."""
        if self._index < len(self._states) - 1:
            self._states = self._states[: self._index + 1]

        self._states.append(HistoryEntry(state=state.model_copy(deep=True)))

        if len(self._states) > self.max_states:
            self._states.pop(0)

        self._index = len(self._states) - 1

    def undo(self) -> Optional[BuildingDesign]:
        if not self.can_undo():
            return None
        self._index -= 1
        return self._states[self._index].state.model_copy(deep=True)

    def redo(self) -> Optional[BuildingDesign]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._states[self._index].state.model_copy(deep=True)

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._states) - 1

    def current_state(self) -> Optional[BuildingDesign]:
        if self._index < 0:
            return None
        return self._states[self._index].state.model_copy(deep=True)

    def history(self) -> List[HistoryEntry]:
        """Copies of all snapshots, oldest first."""
        return [
            HistoryEntry(state=entry.state.model_copy(deep=True), timestamp=entry.timestamp)
            for entry in self._states
        ]

    def compare_states(self, index1: int, index2: int) -> Dict[str, Any]:
        """
        Diff two snapshots.

        Returns:
            Nested dict of changed values, e.g.
            {"facades": {"north": {"wwr": {"from": 0.3, "to": 0.4}}},
             "skylight": {"width": {"from": 2.0, "to": 3.0}}}

        Raises:
            IndexError: If either index is out of range
        """
        size = len(self._states)
        if not (0 <= index1 < size and 0 <= index2 < size):
            raise IndexError("Invalid state indices")

        state1 = self._states[index1].state
        state2 = self._states[index2].state
        differences: Dict[str, Any] = {}

        for orientation in ORIENTATIONS:
            facade1 = getattr(state1.facades, orientation).model_dump()
            facade2 = getattr(state2.facades, orientation).model_dump()
            changed = {
                prop: {"from": value, "to": facade2[prop]}
                for prop, value in facade1.items()
                if value != facade2[prop]
            }
            if changed:
                differences.setdefault("facades", {})[orientation] = changed

        skylight1, skylight2 = state1.skylight, state2.skylight
        if skylight1 is None or skylight2 is None:
            if skylight1 != skylight2:
                differences["skylight"] = {
                    "from": skylight1.model_dump() if skylight1 else None,
                    "to": skylight2.model_dump() if skylight2 else None,
                }
        else:
            before, after = skylight1.model_dump(), skylight2.model_dump()
            changed = {
                prop: {"from": value, "to": after[prop]}
                for prop, value in before.items()
                if value != after[prop]
            }
            if changed:
                differences["skylight"] = changed

        if state1.name != state2.name:
            differences["name"] = {"from": state1.name, "to": state2.name}

        return differences
