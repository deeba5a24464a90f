"""Service layer exports."""

from .errors import CaptureCommitError, EntryNotFoundError, SyncError, TeamError
from .pokedex_service import CommitResult, PokedexService
from .team_service import TeamService
from .capture_engine import CaptureEngine, CaptureEvent, CaptureGateway

__all__ = [
    "CaptureCommitError",
    "EntryNotFoundError",
    "SyncError",
    "TeamError",
    "CommitResult",
    "PokedexService",
    "TeamService",
    "CaptureEngine",
    "CaptureEvent",
    "CaptureGateway",
]
