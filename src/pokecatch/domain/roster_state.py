"""Session-level snapshot of the catalogue, captured subset and team."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.team import TeamRoster


@dataclass
class RosterState:
    """In-memory copy of what the store knows, refreshed on navigation."""

    entries: List[CatalogueEntry] = field(default_factory=list)
    captured: List[CatalogueEntry] = field(default_factory=list)
    team: TeamRoster = field(default_factory=TeamRoster)

    @classmethod
    def from_entries(cls, entries: Iterable[CatalogueEntry], team: TeamRoster | None = None) -> "RosterState":
        state = cls(team=team or TeamRoster())
        state.replace_entries(entries)
        return state

    def replace_entries(self, entries: Iterable[CatalogueEntry]) -> None:
        self.entries = list(entries)
        self.captured = [entry for entry in self.entries if entry.is_captured]

    def list_uncaptured(self) -> List[CatalogueEntry]:
        return [entry for entry in self.entries if not entry.is_captured]

    def team_size(self) -> int:
        return self.team.size()

    def find(self, entry_id: int) -> CatalogueEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def mark_captured(self, entry_id: int, capture_date: str | None = None) -> CatalogueEntry | None:
        """Flag an entry captured and add it to the captured subset once.

        Only call this after the store has confirmed the write.
        """
        entry = self.find(entry_id)
        if entry is None:
            return None
        entry.is_captured = True
        if capture_date is not None:
            entry.capture_date = capture_date
        if not any(existing.id == entry_id for existing in self.captured):
            self.captured.append(entry)
        return entry

    def team_entries(self) -> List[CatalogueEntry | None]:
        return [None if entry_id is None else self.find(entry_id) for entry_id in self.team.slots]

    @property
    def captured_count(self) -> int:
        return len(self.captured)

    @property
    def total_count(self) -> int:
        return len(self.entries)
