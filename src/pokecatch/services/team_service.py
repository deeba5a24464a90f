"""Service for editing and saving the six-slot team."""
from __future__ import annotations

import logging

from pokecatch.data.database import CatalogueStore
from pokecatch.data.errors import StoreError
from pokecatch.domain.roster_state import RosterState
from pokecatch.domain.team import TeamRoster
from pokecatch.services.errors import TeamError

logger = logging.getLogger(__name__)


class TeamService:
    """Edits the in-memory team and persists it as a whole."""

    def __init__(self, *, store: CatalogueStore) -> None:
        self._store = store

    def load_team(self) -> TeamRoster:
        return TeamRoster.from_assignments(self._store.get_team())

    def assign(self, roster: RosterState, position: int, entry_id: int) -> None:
        entry = roster.find(entry_id)
        if entry is None:
            raise TeamError(f"Entry {entry_id} is not known.")
        if not entry.is_captured:
            raise TeamError(f"{entry.name} has not been captured yet.")
        try:
            roster.team.assign(position, entry_id)
        except ValueError as exc:
            raise TeamError(str(exc)) from exc

    def remove(self, roster: RosterState, position: int) -> None:
        try:
            roster.team.remove(position)
        except ValueError as exc:
            raise TeamError(str(exc)) from exc

    def move(self, roster: RosterState, from_position: int, to_position: int) -> None:
        """Swap the contents of two slots."""
        team = roster.team
        try:
            source = team.get(from_position)
            target = team.get(to_position)
        except ValueError as exc:
            raise TeamError(str(exc)) from exc
        if from_position == to_position:
            return
        team.remove(from_position)
        team.remove(to_position)
        if source is not None:
            team.assign(to_position, source)
        if target is not None:
            team.assign(from_position, target)

    def save_team(self, roster: RosterState) -> None:
        """Persist the team; an empty team is refused."""
        if roster.team.size() == 0:
            raise TeamError("Add at least one creature to your team.")
        try:
            self._store.update_team(roster.team.assignments())
        except StoreError as exc:
            raise TeamError(f"Could not save the team: {exc}") from exc
        logger.info("Team saved with %d members", roster.team.size())
