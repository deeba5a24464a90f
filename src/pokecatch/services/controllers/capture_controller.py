"""UI-agnostic capture controller that separates hit-testing and views from rendering."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pokecatch.core.types import CapturePhase, HpBand
from pokecatch.domain.encounter import Position, hp_band, hp_percent
from pokecatch.services.capture_engine import CaptureEngine, HitLandedEvent

ClickTarget = Literal["creature", "bonus", "none"]

DEFAULT_CREATURE_SIZE = 150.0


@dataclass(slots=True)
class EncounterView:
    """Presentation view of the active encounter."""

    name: str
    pokedex_id: int
    image_url: str
    current_hp: int
    max_hp: int
    hp_percent: float
    hp_band: HpBand
    time_remaining: float | None
    bonus_position: Position | None
    capturing: bool


class CaptureController:
    """
    Wraps CaptureEngine for presentation layers.

    Responsibilities:
    - Translate raw click coordinates into creature or bonus clicks
    - Expose a structured view of the active encounter

    Non-responsibilities (handled by presentation layer):
    - Drawing, colours, animations
    - Reading input devices
    """

    def __init__(self, engine: CaptureEngine, *, creature_size: float = DEFAULT_CREATURE_SIZE) -> None:
        self._engine = engine
        self._creature_size = creature_size

    @property
    def phase(self) -> CapturePhase:
        return self._engine.phase

    def target_at(self, x: float, y: float) -> ClickTarget:
        """Return what sits under (x, y); the bonus is drawn above the creature."""
        encounter = self._engine.encounter
        if encounter is None:
            return "none"
        tuning = self._engine.tuning
        bonus = encounter.bonus
        if bonus is not None and not bonus.consumed:
            left, top = bonus.position.x, bonus.position.y
            if left <= x <= left + tuning.bonus_width and top <= y <= top + tuning.bonus_height:
                return "bonus"
        half = self._creature_size / 2
        centre_x = tuning.arena_width / 2
        centre_y = tuning.arena_height / 2
        if abs(x - centre_x) <= half and abs(y - centre_y) <= half:
            return "creature"
        return "none"

    def click_at(self, x: float, y: float) -> ClickTarget:
        """Forward a raw click to the engine; returns the target it hit."""
        target = self.target_at(x, y)
        if target == "bonus":
            self._engine.click_bonus()
        elif target == "creature":
            self._engine.click_creature()
        return target

    def click_creature(self) -> HitLandedEvent | None:
        return self._engine.click_creature()

    def click_bonus(self) -> bool:
        return self._engine.click_bonus()

    def get_encounter_view(self) -> EncounterView | None:
        """Return structured view of the active encounter for rendering."""
        encounter = self._engine.encounter
        if encounter is None:
            return None
        percent = hp_percent(encounter.current_hp, encounter.max_hp)
        bonus = encounter.bonus
        return EncounterView(
            name=encounter.entry.name,
            pokedex_id=encounter.entry.pokedex_id,
            image_url=encounter.entry.image_url,
            current_hp=encounter.current_hp,
            max_hp=encounter.max_hp,
            hp_percent=percent,
            hp_band=hp_band(percent),
            time_remaining=self._engine.time_remaining(),
            bonus_position=bonus.position if bonus is not None and not bonus.consumed else None,
            capturing=encounter.capture_in_progress,
        )
