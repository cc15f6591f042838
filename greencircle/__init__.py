"""
Green Circle - Turn-based decision bot

A deterministic, single-ply engine for a two-player desk/application
game. Each turn it reads a snapshot of the table and answers with
exactly one of the commands the game says are legal. Provides:
- Resource model and three-tier cost deduction
- Immutable per-turn game state
- Phase strategy state machine
- Line-protocol reader, turn driver, CLI and HTTP API
"""

__version__ = "0.1.0"
