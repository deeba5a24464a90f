"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .capture_controller import CaptureController, ClickTarget, EncounterView

__all__ = [
    "CaptureController",
    "ClickTarget",
    "EncounterView",
]
