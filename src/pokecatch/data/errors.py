"""Custom exceptions for the data layer."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataValidationError(DataError):
    """Raised when a catalogue record fails structural validation."""


class CatalogueFetchError(DataError):
    """Raised when the remote catalogue cannot be reached or answers with an error."""


class StoreError(DataError):
    """Raised when the local SQLite store rejects an operation."""
