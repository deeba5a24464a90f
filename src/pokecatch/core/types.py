"""Shared type aliases for the core and domain layers."""
from typing import Literal

CapturePhase = Literal[
    "idle",
    "spawning",
    "active",
    "resolving",
    "expired",
    "all_captured",
    "stopped",
]
HpBand = Literal["high", "medium", "low"]
HitVisual = Literal["slash", "critical"]
AnimationStage = Literal["throw", "flash"]
SyncStatus = Literal["already_filled", "completed"]

__all__ = ["AnimationStage", "CapturePhase", "HitVisual", "HpBand", "SyncStatus"]
