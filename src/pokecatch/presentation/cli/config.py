"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pokecatch.data.api_client import DEFAULT_BASE_URL
from pokecatch.data.paths import get_database_path, get_user_data_dir
from pokecatch.domain.tuning import CaptureTuning

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger(__name__)


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, Any]:
    return {
        "database_path": str(get_database_path()),
        "api_base_url": DEFAULT_BASE_URL,
        "log_level": _DEFAULT_LOG_LEVEL,
        "capture": {},
    }


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _normalize(raw: Dict[str, Any]) -> Dict[str, Any]:
    config = default_config()
    for key in ("database_path", "api_base_url"):
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            config[key] = value.strip()
    config["log_level"] = _normalize_log_level(raw.get("log_level"))
    capture = raw.get("capture")
    if isinstance(capture, dict):
        try:
            CaptureTuning.from_mapping(capture)
        except ValueError as exc:
            logger.warning("Ignoring invalid capture settings: %s", exc)
        else:
            config["capture"] = dict(capture)
    return config


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Config at %s is unreadable, using defaults: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def build_tuning(config: Dict[str, Any]) -> CaptureTuning:
    """Return the capture tuning described by a loaded config."""
    return CaptureTuning.from_mapping(config.get("capture"))
