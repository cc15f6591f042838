"""
Action System - Command texts and the legality guard.

Actions are opaque strings owned by the environment. The engine only
ever builds a command to look it up in the legal-action list; it never
emits a command the environment did not offer this turn.
"""

from __future__ import annotations
import logging
from collections.abc import Sequence

from .cards import Card
from .errors import IllegalActionError
from .resources import ResourceCategory, desk_to_index

logger = logging.getLogger(__name__)


RANDOM = "RANDOM"
WAIT = "WAIT"

# Fallback when a strategy has nothing better to do
DEFAULT_ACTION = RANDOM


def move(desk: ResourceCategory) -> str:
    """Factory for a move to a desk."""
    return f"MOVE {desk_to_index(desk)}"


def release(app_id: int) -> str:
    """Factory for releasing an application."""
    return f"RELEASE {app_id}"


def play(card: Card) -> str:
    """Factory for playing a card from hand."""
    return card.name


def give(card: Card) -> str:
    """Factory for giving a card to the opponent."""
    return f"GIVE {card.type_id}"


def is_legal(action: str, legal_actions: Sequence[str]) -> bool:
    return action in legal_actions


def assert_legal(action: str, legal_actions: Sequence[str]) -> str:
    """
    Return the action if it is a literal member of the legal list.

    Raises IllegalActionError otherwise, after logging the rejected
    action together with the whole legal set.
    """
    if is_legal(action, legal_actions):
        return action
    logger.error("Rejected action %r; legal actions were:", action)
    for legal in legal_actions:
        logger.error("  %s", legal)
    raise IllegalActionError(action, legal_actions)
