"""Service-layer exceptions."""


class CaptureCommitError(Exception):
    """Raised when a capture cannot be written to the store."""


class TeamError(Exception):
    """Raised when a team edit or save is not allowed."""


class SyncError(Exception):
    """Raised when the catalogue cannot be mirrored into the store."""


class EntryNotFoundError(Exception):
    """Raised when a catalogue entry id is not in the store."""
