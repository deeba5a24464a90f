"""Application boundary between the UI, the capture engine and the data layer."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from pokecatch.data.api_client import CatalogueClient, SyncReport
from pokecatch.data.database import CatalogueStore
from pokecatch.data.errors import DataError, StoreError
from pokecatch.domain.catalogue import CatalogueEntry
from pokecatch.domain.roster_state import RosterState
from pokecatch.domain.team import TeamRoster
from pokecatch.services.errors import CaptureCommitError, EntryNotFoundError, SyncError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommitResult:
    """Outcome of a capture commit; failures carry a reason instead of raising."""

    success: bool
    entry_id: int
    capture_date: str | None = None
    reason: str | None = None

    @classmethod
    def ok(cls, entry_id: int, capture_date: str | None) -> "CommitResult":
        return cls(success=True, entry_id=entry_id, capture_date=capture_date)

    @classmethod
    def failed(cls, entry_id: int, reason: str) -> "CommitResult":
        return cls(success=False, entry_id=entry_id, reason=reason)


class PokedexService:
    """Loads session state, mirrors the catalogue and commits captures."""

    def __init__(self, *, store: CatalogueStore, client: CatalogueClient) -> None:
        self._store = store
        self._client = client

    def load_roster(self) -> RosterState:
        """Return a fresh snapshot of entries, captured subset and team."""
        roster = RosterState()
        self.refresh_roster(roster)
        return roster

    def refresh_roster(self, roster: RosterState) -> None:
        roster.replace_entries(self._store.get_all_entries())
        roster.team = TeamRoster.from_assignments(self._store.get_team())
        logger.debug("Roster refreshed: %d entries, %d captured", roster.total_count, roster.captured_count)

    def get_entry_details(self, entry_id: int) -> CatalogueEntry:
        entry = self._store.get_entry_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(f"No entry with id {entry_id}.")
        return entry

    def commit_capture(self, entry_id: int) -> CommitResult:
        """Persist a capture; store failures come back as a failed result."""
        try:
            capture_date = self._write_capture(entry_id)
        except CaptureCommitError as exc:
            logger.error("Capture of entry %s was not saved: %s", entry_id, exc)
            return CommitResult.failed(entry_id, str(exc))
        logger.info("Entry %s captured at %s", entry_id, capture_date)
        return CommitResult.ok(entry_id, capture_date)

    def sync_catalogue(self, limit: int = 0) -> SyncReport:
        """Mirror the remote catalogue into the store."""
        try:
            return self._client.seed_database(self._store, limit)
        except DataError as exc:
            raise SyncError(f"Catalogue sync failed: {exc}") from exc

    def reset_catalogue(self) -> None:
        """Drop every entry and team slot, and forget cached API answers."""
        try:
            self._store.clear_entries()
        except StoreError as exc:
            raise SyncError(f"Could not reset the catalogue: {exc}") from exc
        self._client.clear_cache()

    def resync_catalogue(self) -> SyncReport:
        self.reset_catalogue()
        return self.sync_catalogue(limit=0)

    def _write_capture(self, entry_id: int) -> str | None:
        try:
            return self._store.update_captured(entry_id, True)
        except StoreError as exc:
            raise CaptureCommitError(str(exc)) from exc
