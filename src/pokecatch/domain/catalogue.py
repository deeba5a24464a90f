"""Catalogue entry model."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_ENTRY_HP = 20


@dataclass(slots=True)
class CatalogueEntry:
    """One creature as mirrored from the remote catalogue."""

    pokedex_id: int
    name: str
    image_url: str = ""
    type_primary: str | None = None
    type_secondary: str | None = None
    height: float | None = None
    weight: float | None = None
    hp: int = DEFAULT_ENTRY_HP
    is_captured: bool = False
    capture_date: str | None = None
    id: int | None = None  # local row id, assigned by the store

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(t for t in (self.type_primary, self.type_secondary) if t)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CatalogueEntry":
        """Build an entry from a store row (sqlite3.Row or dict)."""
        hp = row["hp"]
        return cls(
            id=row["id"],
            pokedex_id=row["pokedex_id"],
            name=row["name"],
            image_url=row["image_url"] or "",
            type_primary=row["type_primary"],
            type_secondary=row["type_secondary"],
            height=row["height"],
            weight=row["weight"],
            hp=DEFAULT_ENTRY_HP if hp is None else int(hp),
            is_captured=bool(row["is_captured"]),
            capture_date=row["capture_date"],
        )
