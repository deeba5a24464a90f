"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Iterable, Sequence

from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.encounter import hp_band, hp_percent
from pokecatch.domain.roster_state import RosterState
from pokecatch.domain.team import TEAM_POSITIONS
from pokecatch.services.capture_engine import (
    AllCapturedEvent,
    BonusRemovedEvent,
    BonusSpawnedEvent,
    CaptureAnimationEvent,
    CaptureEvent,
    CaptureFailedEvent,
    CaptureStartedEvent,
    CaptureSucceededEvent,
    EncounterExpiredEvent,
    EncounterSpawnedEvent,
    EngineStoppedEvent,
    HitLandedEvent,
    HpChangedEvent,
)

HP_BAR_WIDTH = 20
_BAND_FILL = {"high": "#", "medium": "=", "low": "-"}


def debug_enabled() -> bool:
    """Return True only when POKECATCH_DEBUG is explicitly set to '1'."""
    return os.getenv("POKECATCH_DEBUG") == "1"


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")


def format_hp_bar(current_hp: int, max_hp: int, width: int = HP_BAR_WIDTH) -> str:
    """Return e.g. `[#######-------] 7/20`; the fill character follows the HP band."""
    percent = hp_percent(current_hp, max_hp)
    filled = round(width * percent / 100)
    fill = _BAND_FILL[hp_band(percent)]
    return f"[{fill * filled}{' ' * (width - filled)}] {current_hp}/{max_hp}"


def format_entry_line(entry: CatalogueEntry) -> str:
    status = "[Captured]" if entry.is_captured else "[Not captured]"
    types = "/".join(entry.types) or "?"
    return f"#{entry.pokedex_id:<4} {entry.name:<14} {types:<16} {status}"


def format_entry_details(entry: CatalogueEntry) -> list[str]:
    lines = [
        f"Name: {entry.name}",
        f"Number: #{entry.pokedex_id}",
        f"Types: {', '.join(entry.types) or 'N/A'}",
        f"Height: {entry.height} m" if entry.height else "Height: N/A",
        f"Weight: {entry.weight} kg" if entry.weight else "Weight: N/A",
        f"HP: {entry.hp}",
    ]
    if entry.is_captured:
        lines.append(f"Captured on {entry.capture_date}" if entry.capture_date else "Captured")
    else:
        lines.append("Not captured yet")
    if debug_enabled():
        lines.append(f"Image: {entry.image_url or 'none'}")
    return lines


def format_team_lines(roster: RosterState) -> list[str]:
    lines = []
    for position, entry in zip(TEAM_POSITIONS, roster.team_entries()):
        label = entry.name if entry is not None else "(empty)"
        lines.append(f"Slot {position}: {label}")
    return lines


def describe_event(event: CaptureEvent) -> str | None:
    """Return the line printed for a capture event, or None to stay quiet."""
    if isinstance(event, EncounterSpawnedEvent):
        return f"A wild {event.entry.name} appeared! ({event.max_hp} HP)"
    if isinstance(event, HitLandedEvent):
        if event.critical:
            return f"CRITICAL HIT! {event.damage} damage"
        return f"Slash! {event.damage} damage"
    if isinstance(event, HpChangedEvent):
        return format_hp_bar(event.current_hp, event.max_hp)
    if isinstance(event, BonusSpawnedEvent):
        return f"A bonus ball dropped at ({event.position.x:.0f}, {event.position.y:.0f})! Type 'b' to throw it."
    if isinstance(event, BonusRemovedEvent):
        return "The bonus ball is gone."
    if isinstance(event, EncounterExpiredEvent):
        return f"{event.entry.name} ran away..."
    if isinstance(event, CaptureStartedEvent):
        how = "the bonus ball" if event.via_bonus else "a ball"
        return f"You throw {how} at {event.entry.name}!"
    if isinstance(event, CaptureAnimationEvent):
        return "..." if event.stage == "throw" else "*flash*"
    if isinstance(event, CaptureSucceededEvent):
        return f"CAPTURED! {event.entry.name} joins your collection."
    if isinstance(event, CaptureFailedEvent):
        return f"ERROR: capture of {event.entry.name} could not be saved ({event.reason})."
    if isinstance(event, AllCapturedEvent):
        return "CONGRATULATIONS! You have captured every creature!"
    if isinstance(event, EngineStoppedEvent):
        return "Capture stopped."
    return None
