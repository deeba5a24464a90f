"""Helpers for resolving per-user file locations."""
from __future__ import annotations

import os
from pathlib import Path

DATABASE_FILENAME = "pokedex.db"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "PokeCatch"
        return Path.home() / "PokeCatch"
    return Path.home() / ".config" / "pokecatch"


def get_database_path(base_path: Path | str | None = None) -> Path:
    """Return the SQLite database file, inside base_path when given."""
    if base_path is not None:
        return Path(base_path) / DATABASE_FILENAME
    return get_user_data_dir() / DATABASE_FILENAME
