"""Encounter models and the damage/HP arithmetic of the capture minigame."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pokecatch.core.rng import RNG
from pokecatch.core.types import HpBand
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.tuning import CaptureTuning


class TimerHandle(Protocol):
    """Anything with a synchronous cancel(), e.g. asyncio.TimerHandle."""

    def cancel(self) -> None: ...


@dataclass(frozen=True, slots=True)
class Position:
    x: float
    y: float


@dataclass(slots=True)
class BonusSpawn:
    """Instant-capture item shown next to the active encounter."""

    position: Position
    consumed: bool = False


@dataclass(slots=True)
class Encounter:
    """The single creature currently on screen."""

    entry: CatalogueEntry
    current_hp: int
    max_hp: int
    capture_in_progress: bool = False
    expiry_handle: TimerHandle | None = None
    expires_at: float | None = None  # event-loop time
    bonus: BonusSpawn | None = None

    @classmethod
    def for_entry(cls, entry: CatalogueEntry) -> "Encounter":
        hp = max(0, int(entry.hp))
        return cls(entry=entry, current_hp=hp, max_hp=hp)

    @property
    def is_depleted(self) -> bool:
        return self.current_hp <= 0

    def cancel_expiry(self) -> None:
        if self.expiry_handle is not None:
            self.expiry_handle.cancel()
            self.expiry_handle = None

    def take_damage(self, damage: int) -> int:
        """Apply damage, returning the HP actually removed."""
        before = self.current_hp
        self.current_hp = apply_damage(self.current_hp, damage)
        return before - self.current_hp

    def deplete(self) -> None:
        self.current_hp = 0


def compute_damage(base_damage: int, team_size: int, *, critical: bool, crit_multiplier: int) -> int:
    """Return the damage of one click: (base + team size), times the multiplier on a crit."""
    damage = max(0, int(base_damage) + max(0, int(team_size)))
    if critical:
        damage *= int(crit_multiplier)
    return damage


def apply_damage(current_hp: int, damage: int) -> int:
    """Subtract damage from HP without going below zero."""
    return max(0, current_hp - max(0, int(damage)))


def hp_percent(current_hp: int, max_hp: int) -> float:
    if max_hp <= 0:
        return 0.0
    return current_hp / max_hp * 100


def hp_band(percent: float) -> HpBand:
    """Bucket an HP percentage for bar colouring."""
    if percent > 50:
        return "high"
    if percent > 25:
        return "medium"
    return "low"


def place_bonus(rng: RNG, tuning: CaptureTuning) -> Position:
    """Pick a bonus position whose full extent fits inside the arena."""
    max_x = max(0.0, tuning.arena_width - tuning.bonus_width)
    max_y = max(0.0, tuning.arena_height - tuning.bonus_height)
    x = min(max(rng.uniform(0.0, max_x), 0.0), max_x)
    y = min(max(rng.uniform(0.0, max_y), 0.0), max_y)
    return Position(x=x, y=y)
