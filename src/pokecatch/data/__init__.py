"""Data layer: catalogue mirror, record transform and SQLite store."""

from .errors import CatalogueFetchError, DataError, DataValidationError, StoreError
from .paths import get_database_path, get_user_data_dir

__all__ = [
    "CatalogueFetchError",
    "DataError",
    "DataValidationError",
    "StoreError",
    "get_database_path",
    "get_user_data_dir",
]
