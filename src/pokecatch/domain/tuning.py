"""Game-balance constants for the capture minigame."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class CaptureTuning:
    """Timing, probability and damage knobs for the capture engine.

    Durations are in seconds. The throw and flash animations together make up
    the delay between the final hit and the persistence call.
    """

    expiry_seconds: float = 5.0
    throw_seconds: float = 0.8
    flash_seconds: float = 0.8
    cooldown_seconds: float = 2.0
    base_damage: int = 1
    crit_chance: float = 0.03
    crit_multiplier: int = 10
    bonus_chance: float = 0.10
    arena_width: float = 600.0
    arena_height: float = 400.0
    bonus_width: float = 60.0
    bonus_height: float = 60.0

    @property
    def resolve_delay_seconds(self) -> float:
        return self.throw_seconds + self.flash_seconds

    def __post_init__(self) -> None:
        for name in ("expiry_seconds", "throw_seconds", "flash_seconds", "cooldown_seconds"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative.")
        for name in ("crit_chance", "bonus_chance"):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be between 0 and 1.")
        if self.base_damage < 0:
            raise ValueError("base_damage cannot be negative.")
        if self.crit_multiplier < 1:
            raise ValueError("crit_multiplier must be at least 1.")
        if self.arena_width <= 0 or self.arena_height <= 0:
            raise ValueError("Arena dimensions must be positive.")
        if self.bonus_width < 0 or self.bonus_height < 0:
            raise ValueError("Bonus dimensions cannot be negative.")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "CaptureTuning":
        """Build tuning from a config mapping, ignoring unknown keys."""
        base = cls()
        if not raw:
            return base
        known = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}
        for key, value in raw.items():
            if key not in known or isinstance(value, bool):
                continue
            if not isinstance(value, (int, float)):
                continue
            current = getattr(base, key)
            overrides[key] = int(value) if isinstance(current, int) else float(value)
        return replace(base, **overrides)
