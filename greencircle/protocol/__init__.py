"""
Protocol Module - The game's line-oriented input format.

Turns the text the game prints each turn into an immutable GameState.
"""

from .reader import SnapshotReader, CardLocation, read_snapshot, parse_snapshot

__all__ = [
    "SnapshotReader",
    "CardLocation",
    "read_snapshot",
    "parse_snapshot",
]
