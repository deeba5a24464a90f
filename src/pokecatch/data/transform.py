"""Normalize raw catalogue API records into CatalogueEntry objects."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from pokecatch.data.errors import DataValidationError
from pokecatch.domain.catalogue import DEFAULT_ENTRY_HP, CatalogueEntry

HP_DIVISOR = 5
MEASUREMENT_DIVISOR = 10
STAT_NAMES: tuple[str, ...] = (
    "hp",
    "attack",
    "defense",
    "special-attack",
    "special-defense",
    "speed",
)


@dataclass(slots=True)
class EntryStats:
    """Raw base stats for one creature."""

    name: str
    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0


def transform_entry(raw: Mapping[str, Any]) -> CatalogueEntry:
    """Convert a `/pokemon/{id}` payload into a catalogue entry."""
    if not isinstance(raw, Mapping):
        raise DataValidationError("Catalogue record must be an object.")
    pokedex_id = raw.get("id")
    name = raw.get("name")
    if not isinstance(pokedex_id, int) or isinstance(pokedex_id, bool):
        raise DataValidationError("Catalogue record is missing an integer 'id'.")
    if not isinstance(name, str) or not name:
        raise DataValidationError(f"Catalogue record {pokedex_id} is missing a 'name'.")

    types = _type_names(raw.get("types"))
    return CatalogueEntry(
        pokedex_id=pokedex_id,
        name=name,
        image_url=_pick_image(raw.get("sprites")),
        type_primary=types[0] if types else None,
        type_secondary=types[1] if len(types) > 1 else None,
        height=_scaled(raw.get("height")),
        weight=_scaled(raw.get("weight")),
        hp=derive_hp(raw.get("stats")),
        is_captured=False,
    )


def derive_hp(stats: object) -> int:
    """Return ceil(base hp / 5), or the default when the stat is absent."""
    base = _base_stat(stats, "hp")
    if base is None:
        return DEFAULT_ENTRY_HP
    return math.ceil(base / HP_DIVISOR)


def extract_stats(raw: Mapping[str, Any]) -> EntryStats:
    """Collect the six base stats from a raw record; missing stats read as 0."""
    stats = raw.get("stats")
    values = {stat: _base_stat(stats, stat) or 0 for stat in STAT_NAMES}
    return EntryStats(
        name=str(raw.get("name", "")),
        hp=values["hp"],
        attack=values["attack"],
        defense=values["defense"],
        special_attack=values["special-attack"],
        special_defense=values["special-defense"],
        speed=values["speed"],
    )


def _base_stat(stats: object, stat_name: str) -> int | None:
    if not isinstance(stats, list):
        return None
    for item in stats:
        if not isinstance(item, Mapping):
            continue
        stat = item.get("stat")
        if isinstance(stat, Mapping) and stat.get("name") == stat_name:
            value = item.get("base_stat")
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return int(value)
            return None
    return None


def _type_names(types: object) -> list[str]:
    if not isinstance(types, list):
        return []
    names: list[str] = []
    for item in types:
        if not isinstance(item, Mapping):
            continue
        type_ref = item.get("type")
        if isinstance(type_ref, Mapping) and isinstance(type_ref.get("name"), str):
            names.append(type_ref["name"])
    return names


def _pick_image(sprites: object) -> str:
    # official artwork, then the default sprite, then nothing
    if not isinstance(sprites, Mapping):
        return ""
    other = sprites.get("other")
    if isinstance(other, Mapping):
        artwork = other.get("official-artwork")
        if isinstance(artwork, Mapping) and artwork.get("front_default"):
            return str(artwork["front_default"])
    if sprites.get("front_default"):
        return str(sprites["front_default"])
    return ""


def _scaled(value: object) -> float | None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    return value / MEASUREMENT_DIVISOR
