"""
Session Module - Drives a bot through a live game.

A session is one play-through:
- Snapshots arrive on the input stream, one per turn
- The bot answers each with exactly one command
- The session ends when the game closes the stream

Sessions are EPHEMERAL: nothing survives between turns or runs.
"""

from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
]
