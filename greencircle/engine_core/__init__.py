"""
Engine Core - The game model the bot reasons over.

The core:
1. Models resource categories, pools, and cost deduction
2. Models cards and what they yield
3. Holds the immutable per-turn GameState
4. Guards every emitted command against the legal-action list
"""

from .errors import GreenCircleError, ProtocolError, IllegalActionError, StrategyNotFoundError
from .resources import (
    ResourceCategory,
    ResourcePool,
    Cost,
    CostVector,
    PRIMARY_CATEGORIES,
    cost_vector,
    cost_remaining_after,
    is_affordable,
    required_shoddy_mana,
    desk_from_index,
    desk_to_index,
)
from .cards import Card, CardKind, provided_mana, pool_from_cards
from .state import (
    GamePhase,
    Application,
    ParticipantState,
    PlayerState,
    OpponentState,
    GameState,
    available_resources,
)
from .action import DEFAULT_ACTION, RANDOM, WAIT, assert_legal, is_legal

__all__ = [
    "GreenCircleError",
    "ProtocolError",
    "IllegalActionError",
    "StrategyNotFoundError",
    "ResourceCategory",
    "ResourcePool",
    "Cost",
    "CostVector",
    "PRIMARY_CATEGORIES",
    "cost_vector",
    "cost_remaining_after",
    "is_affordable",
    "required_shoddy_mana",
    "desk_from_index",
    "desk_to_index",
    "Card",
    "CardKind",
    "provided_mana",
    "pool_from_cards",
    "GamePhase",
    "Application",
    "ParticipantState",
    "PlayerState",
    "OpponentState",
    "GameState",
    "available_resources",
    "DEFAULT_ACTION",
    "RANDOM",
    "WAIT",
    "assert_legal",
    "is_legal",
]
