"""pokecatch: catalogue mirror, capture minigame and team builder."""

__version__ = "0.3.0"
