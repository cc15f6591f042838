"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game snapshot and returns a decision.
Decisions include:
- The literal command to send
- Explanation (for logs/debugging)
- Evaluation details (what was considered)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..engine_core.state import GameState, GamePhase


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    `action` is always a member of the snapshot's legal actions.
    """
    action: str
    phase: GamePhase | None = None
    explanation: str = ""

    # Evaluation details (for debugging)
    evaluated_candidates: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects one action per snapshot.
    Policies hold no state between turns.
    """

    @abstractmethod
    def select_action(self, state: GameState) -> BotDecision:
        """
        Select an action for this snapshot.

        Args:
            state: Current game snapshot, legal actions included

        Returns:
            BotDecision with the selected action
        """
        pass

    def decide(self, state: GameState) -> str:
        """Select an action and return just its command text."""
        return self.select_action(state).action
