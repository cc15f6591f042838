"""
Bots module - Decision-making for Green Circle.

Provides:
- BotPolicy: Interface for bot decision-making
- DeskBot: Phase strategy state machine
- ApplicationEvaluator: Ranks applications by shoddy-mana need
- Personality: Configurable strategy knobs
"""

from .policy import BotPolicy, BotDecision
from .evaluator import ApplicationEvaluator, ApplicationEvaluation
from .personality import Personality, AdjacencyScope, PERSONALITIES, get_personality
from .desk_bot import DeskBot, decide

__all__ = [
    "BotPolicy",
    "BotDecision",
    "ApplicationEvaluator",
    "ApplicationEvaluation",
    "Personality",
    "AdjacencyScope",
    "PERSONALITIES",
    "get_personality",
    "DeskBot",
    "decide",
]
