"""SQLite persistence for catalogue entries and the team."""
from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple

from pokecatch.data.errors import StoreError
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.team import TEAM_POSITIONS

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS pokemon (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    pokedex_id INTEGER UNIQUE NOT NULL,
    name VARCHAR(100) NOT NULL,
    image_url VARCHAR(255) NOT NULL DEFAULT '',
    is_captured BOOLEAN NOT NULL DEFAULT 0,
    capture_date TIMESTAMP,
    type_primary VARCHAR(50),
    type_secondary VARCHAR(50),
    height FLOAT,
    weight FLOAT,
    hp INTEGER DEFAULT 20,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_pokemon_name ON pokemon(name);
CREATE INDEX IF NOT EXISTS idx_pokemon_is_captured ON pokemon(is_captured);

CREATE TABLE IF NOT EXISTS team (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    position INTEGER UNIQUE NOT NULL CHECK (position BETWEEN 1 AND 6),
    pokemon_id INTEGER UNIQUE REFERENCES pokemon(id) ON DELETE SET NULL,
    added_date TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_team_pokemon_id ON team(pokemon_id);
"""


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CatalogueStore:
    """CRUD accessors over the local catalogue database."""

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = str(db_path)
        self._conn: sqlite3.Connection | None = None

    def initialize(self) -> None:
        """Open the connection and create tables if needed."""
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            # captures are written from the capture engine's executor thread
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise StoreError(f"Unable to open database {self.db_path}: {exc}") from exc
        logger.info("Database ready at %s", self.db_path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "CatalogueStore":
        self.initialize()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -----------------------
    # Entries
    # -----------------------
    def insert_entry(self, entry: CatalogueEntry) -> int:
        """Insert an entry and return its local row id."""
        sql = """
            INSERT INTO pokemon (pokedex_id, name, image_url, type_primary, type_secondary, height, weight, hp)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """
        params = (
            entry.pokedex_id,
            entry.name,
            entry.image_url or "",
            entry.type_primary,
            entry.type_secondary,
            entry.height,
            entry.weight,
            entry.hp,
        )
        with self._transaction("insert_entry") as conn:
            cursor = conn.execute(sql, params)
            row_id = cursor.lastrowid
        assert row_id is not None
        return row_id

    def get_all_entries(self) -> List[CatalogueEntry]:
        rows = self._fetch_all("SELECT * FROM pokemon ORDER BY pokedex_id ASC")
        return [CatalogueEntry.from_row(row) for row in rows]

    def get_entry_by_id(self, entry_id: int) -> CatalogueEntry | None:
        return self._fetch_entry("SELECT * FROM pokemon WHERE id = ?", (entry_id,))

    def get_entry_by_pokedex_id(self, pokedex_id: int) -> CatalogueEntry | None:
        return self._fetch_entry("SELECT * FROM pokemon WHERE pokedex_id = ?", (pokedex_id,))

    def get_entry_by_name(self, name: str) -> CatalogueEntry | None:
        return self._fetch_entry("SELECT * FROM pokemon WHERE LOWER(name) = LOWER(?)", (name,))

    def get_captured_entries(self) -> List[CatalogueEntry]:
        rows = self._fetch_all("SELECT * FROM pokemon WHERE is_captured = 1 ORDER BY name ASC")
        return [CatalogueEntry.from_row(row) for row in rows]

    def update_captured(self, entry_id: int, captured: bool) -> str | None:
        """Set the captured flag and return the stored capture date.

        Raises StoreError when no entry has the given id.
        """
        capture_date = _utc_now_iso() if captured else None
        with self._transaction("update_captured") as conn:
            cursor = conn.execute(
                "UPDATE pokemon SET is_captured = ?, capture_date = ? WHERE id = ?",
                (1 if captured else 0, capture_date, entry_id),
            )
            if cursor.rowcount == 0:
                raise StoreError(f"No entry with id {entry_id}.")
        return capture_date

    def count_captured(self) -> int:
        return self._count("SELECT COUNT(*) FROM pokemon WHERE is_captured = 1")

    def count_all(self) -> int:
        return self._count("SELECT COUNT(*) FROM pokemon")

    def delete_entry(self, entry_id: int) -> None:
        with self._transaction("delete_entry") as conn:
            conn.execute("DELETE FROM pokemon WHERE id = ?", (entry_id,))

    def clear_entries(self) -> None:
        """Remove every entry and every team slot."""
        with self._transaction("clear_entries") as conn:
            conn.execute("DELETE FROM team")
            conn.execute("DELETE FROM pokemon")
        logger.info("All catalogue entries removed")

    # -----------------------
    # Team
    # -----------------------
    def get_team(self) -> List[Tuple[int, int | None]]:
        """Return (position, entry_id) pairs ordered by position."""
        rows = self._fetch_all("SELECT position, pokemon_id FROM team ORDER BY position ASC")
        return [(row["position"], row["pokemon_id"]) for row in rows]

    def get_team_with_details(self) -> List[Tuple[int, CatalogueEntry | None]]:
        rows = self._fetch_all(
            """
            SELECT t.position AS slot_position, p.* FROM team t
            LEFT JOIN pokemon p ON t.pokemon_id = p.id
            ORDER BY t.position ASC
            """
        )
        details: List[Tuple[int, CatalogueEntry | None]] = []
        for row in rows:
            entry = CatalogueEntry.from_row(row) if row["id"] is not None else None
            details.append((row["slot_position"], entry))
        return details

    def add_to_team(self, position: int, entry_id: int) -> None:
        """Put an entry in a slot; the entry leaves any other slot it held."""
        self._validate_position(position)
        with self._transaction("add_to_team") as conn:
            conn.execute("DELETE FROM team WHERE pokemon_id = ? AND position != ?", (entry_id, position))
            conn.execute(
                "INSERT OR REPLACE INTO team (position, pokemon_id, added_date) VALUES (?, ?, CURRENT_TIMESTAMP)",
                (position, entry_id),
            )

    def remove_from_team(self, position: int) -> None:
        self._validate_position(position)
        with self._transaction("remove_from_team") as conn:
            conn.execute("UPDATE team SET pokemon_id = NULL WHERE position = ?", (position,))

    def update_team(self, slots: Iterable[Tuple[int, int | None]]) -> None:
        """Replace the whole team with the given (position, entry_id) pairs."""
        assignments = [(position, entry_id) for position, entry_id in slots if entry_id is not None]
        for position, _ in assignments:
            self._validate_position(position)
        with self._transaction("update_team") as conn:
            conn.execute("DELETE FROM team")
            conn.executemany(
                "INSERT INTO team (position, pokemon_id, added_date) VALUES (?, ?, CURRENT_TIMESTAMP)",
                assignments,
            )

    # -----------------------
    # Helpers
    # -----------------------
    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Database is not initialized.")
        return self._conn

    def _transaction(self, operation: str) -> "_Transaction":
        return _Transaction(self._connection(), operation)

    def _fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        try:
            return self._connection().execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"Query failed: {exc}") from exc

    def _fetch_entry(self, sql: str, params: Sequence[Any]) -> CatalogueEntry | None:
        try:
            row = self._connection().execute(sql, params).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Query failed: {exc}") from exc
        return CatalogueEntry.from_row(row) if row is not None else None

    def _count(self, sql: str) -> int:
        try:
            row = self._connection().execute(sql).fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Query failed: {exc}") from exc
        return int(row[0]) if row is not None else 0

    @staticmethod
    def _validate_position(position: int) -> None:
        if position not in TEAM_POSITIONS:
            raise ValueError("Position must be between 1 and 6.")


class _Transaction:
    """Commit on success, roll back and raise StoreError on sqlite3 errors."""

    def __init__(self, conn: sqlite3.Connection, operation: str) -> None:
        self._conn = conn
        self._operation = operation

    def __enter__(self) -> sqlite3.Connection:
        return self._conn

    def __exit__(self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: object) -> bool:
        if exc_type is None:
            self._conn.commit()
            return False
        self._conn.rollback()
        if isinstance(exc, sqlite3.Error):
            logger.error("%s failed: %s", self._operation, exc)
            raise StoreError(f"{self._operation} failed: {exc}") from exc
        return False
