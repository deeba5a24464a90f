"""Fixed-size team roster."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

TEAM_SIZE = 6
TEAM_POSITIONS: tuple[int, ...] = tuple(range(1, TEAM_SIZE + 1))


def _empty_slots() -> List[int | None]:
    return [None] * TEAM_SIZE


@dataclass(slots=True)
class TeamRoster:
    """Six ordered slots holding local entry ids; an id appears at most once."""

    slots: List[int | None] = field(default_factory=_empty_slots)

    def __post_init__(self) -> None:
        if len(self.slots) != TEAM_SIZE:
            raise ValueError(f"A team has exactly {TEAM_SIZE} slots.")
        seen: set[int] = set()
        for entry_id in self.slots:
            if entry_id is None:
                continue
            if entry_id in seen:
                raise ValueError(f"Entry {entry_id} appears in more than one slot.")
            seen.add(entry_id)

    @classmethod
    def from_assignments(cls, assignments: Iterable[Tuple[int, int | None]]) -> "TeamRoster":
        """Build a roster from (position, entry_id) pairs, ignoring bad positions."""
        team = cls()
        for position, entry_id in assignments:
            if position not in TEAM_POSITIONS or entry_id is None:
                continue
            team.assign(position, entry_id)
        return team

    def get(self, position: int) -> int | None:
        return self.slots[self._index(position)]

    def assign(self, position: int, entry_id: int) -> None:
        """Put an entry in a slot, moving it out of any other slot it held."""
        index = self._index(position)
        for other, current in enumerate(self.slots):
            if current == entry_id and other != index:
                self.slots[other] = None
        self.slots[index] = entry_id

    def remove(self, position: int) -> int | None:
        index = self._index(position)
        previous = self.slots[index]
        self.slots[index] = None
        return previous

    def discard_entry(self, entry_id: int) -> None:
        self.slots = [None if current == entry_id else current for current in self.slots]

    def contains(self, entry_id: int) -> bool:
        return entry_id in self.slots

    def position_of(self, entry_id: int) -> int | None:
        for position, current in zip(TEAM_POSITIONS, self.slots):
            if current == entry_id:
                return position
        return None

    def size(self) -> int:
        """Count non-empty slots."""
        return sum(1 for entry_id in self.slots if entry_id is not None)

    def assignments(self) -> List[Tuple[int, int | None]]:
        return list(zip(TEAM_POSITIONS, self.slots))

    @staticmethod
    def _index(position: int) -> int:
        if position not in TEAM_POSITIONS:
            raise ValueError(f"Position must be between 1 and {TEAM_SIZE}.")
        return position - 1
