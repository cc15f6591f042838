"""
Desk Bot - Phase strategy state machine for Green Circle.

Each snapshot's phase picks exactly one strategy:
- MOVE: walk towards the cheapest reachable application
- RELEASE: release the cheapest releasable application
- PLAY_CARD: hold cards if a release is close, else play by priority
- GIVE_CARD: give away the least valuable card
- THROW_CARD: default action

The bot does NOT:
- Look ahead more than one ply
- Model the opponent beyond its desk position
- Remember anything between turns
"""

from __future__ import annotations
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core import action as commands
from ..engine_core.cards import Card, CardKind
from ..engine_core.errors import StrategyNotFoundError
from ..engine_core.resources import ResourceCategory
from ..engine_core.state import GamePhase
from .evaluator import ApplicationEvaluator
from .personality import BALANCED, Personality
from .policy import BotDecision, BotPolicy

if TYPE_CHECKING:
    from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class DeskBot(BotPolicy):
    """
    Greedy single-ply bot.

    Usage:
        bot = DeskBot(personality=CAUTIOUS)
        decision = bot.select_action(state)
        print(decision.action)
    """
    personality: Personality = field(default=BALANCED)
    evaluator: ApplicationEvaluator = None  # type: ignore

    def __post_init__(self):
        if self.evaluator is None:
            self.evaluator = ApplicationEvaluator(self.personality)
        self._strategies: dict[GamePhase, Callable[[GameState], BotDecision]] = {
            GamePhase.MOVE: self._select_move,
            GamePhase.RELEASE: self._select_release,
            GamePhase.PLAY_CARD: self._select_play,
            GamePhase.GIVE_CARD: self._select_give,
            GamePhase.THROW_CARD: self._select_default,
        }

    def select_action(self, state: GameState) -> BotDecision:
        """
        Run the strategy for the snapshot's phase.

        Raises:
            StrategyNotFoundError: no strategy for the phase
            IllegalActionError: the chosen command is not legal
        """
        strategy = self._strategies.get(state.phase)
        if strategy is None:
            raise StrategyNotFoundError(state.phase)
        decision = strategy(state)
        logger.debug("%s -> %s (%s)", state.phase.value, decision.action, decision.explanation)
        return decision

    # =========================================================================
    # Strategies
    # =========================================================================

    def _select_move(self, state: GameState) -> BotDecision:
        candidates = self.evaluator.pursuable(state)
        if not candidates:
            return self._select_default(state, "No pursuable application")

        best = candidates[0]
        desk = best.reachable_desks[0]
        return self._emit(
            state,
            commands.move(desk),
            f"Move to {desk.name} for application {best.application.app_id}",
            evaluated=len(candidates),
            details={
                "application": best.application.app_id,
                "required_shoddy": best.required_shoddy,
                "safe_categories": best.safe_categories,
            },
        )

    def _select_release(self, state: GameState) -> BotDecision:
        best = self.evaluator.best_releasable(state)
        if best is None:
            return self._select_default(state, "Nothing releasable")

        return self._emit(
            state,
            best.application.release_command,
            f"Release application {best.application.app_id}",
            evaluated=len(state.releasable_applications()),
            details={"required_shoddy": best.required_shoddy},
        )

    def _select_play(self, state: GameState) -> BotDecision:
        if self.evaluator.has_safe_release(state):
            return self._emit(state, commands.WAIT, "Holding cards for a safe release")

        card = self._first_in_hand(state, self.personality.play_priority)
        if card is None:
            return self._select_default(state, "No playable card in hand")
        return self._emit(state, commands.play(card), f"Play {card.name}")

    def _select_give(self, state: GameState) -> BotDecision:
        card = self._first_in_hand(state, self.personality.give_priority)
        if card is None:
            return self._select_default(state, "No card worth giving")
        return self._emit(state, commands.give(card), f"Give {card.name}")

    def _select_default(self, state: GameState, reason: str = "Default action") -> BotDecision:
        return self._emit(state, commands.DEFAULT_ACTION, reason)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _first_in_hand(
        state: GameState,
        priority: tuple[ResourceCategory, ...],
    ) -> Card | None:
        """First generic card in hand, walking categories in priority order."""
        held = {
            card.category
            for card in state.player.hand
            if card.kind == CardKind.GENERIC
        }
        for category in priority:
            if category in held:
                return Card.generic(category)
        return None

    def _emit(
        self,
        state: GameState,
        action: str,
        explanation: str,
        evaluated: int = 0,
        details: dict | None = None,
    ) -> BotDecision:
        """Validate the command against the legal list and wrap it."""
        commands.assert_legal(action, state.legal_actions)
        return BotDecision(
            action=action,
            phase=state.phase,
            explanation=explanation,
            evaluated_candidates=evaluated,
            evaluation_details=details or {},
        )


def decide(state: GameState, personality: Personality | None = None) -> str:
    """One-shot decision with a fresh bot."""
    return DeskBot(personality=personality or BALANCED).decide(state)
