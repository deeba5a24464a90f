"""Domain models: catalogue entries, encounters, team and session roster."""

from .catalogue import CatalogueEntry
from .encounter import BonusSpawn, Encounter, Position
from .roster_state import RosterState
from .team import TEAM_SIZE, TeamRoster
from .tuning import CaptureTuning

__all__ = [
    "BonusSpawn",
    "CaptureTuning",
    "CatalogueEntry",
    "Encounter",
    "Position",
    "RosterState",
    "TEAM_SIZE",
    "TeamRoster",
]
