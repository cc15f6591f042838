"""
Application Evaluator - Ranks applications for the phase strategies.

The evaluator answers two questions:
- Which applications are worth walking towards (MOVE)
- Which releasable application is cheapest in good resources (RELEASE)

Both rank by "required shoddy mana": how much of the cost only
low-quality resources could cover. Lower is better.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.resources import PRIMARY_CATEGORIES, CostVector, ResourceCategory, ResourcePool
from .personality import AdjacencyScope, BALANCED, Personality

if TYPE_CHECKING:
    from ..engine_core.state import Application, GameState


@dataclass(frozen=True)
class ApplicationEvaluation:
    """How one application looks from the acting player's hand."""
    application: Application
    remaining: CostVector
    required_shoddy: int
    safe_categories: int
    reachable_desks: tuple[ResourceCategory, ...]

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.required_shoddy, -self.safe_categories)


def neighbours(desk: ResourceCategory) -> tuple[ResourceCategory, ...]:
    """The desk itself and the desks one index either side of it."""
    index = desk.value
    return tuple(
        PRIMARY_CATEGORIES[i]
        for i in (index - 1, index, index + 1)
        if 0 <= i < len(PRIMARY_CATEGORIES)
    )


class ApplicationEvaluator:
    """
    Scores applications against the current snapshot.

    Pure: nothing is cached between calls, the pool is recomputed
    from the hand every time a snapshot is evaluated.
    """

    def __init__(self, personality: Personality | None = None):
        self.personality = personality or BALANCED

    def unsafe_desks(self, state: GameState) -> frozenset[ResourceCategory]:
        """Desks at or next to the watched positions."""
        positions = [state.player.desk]
        if self.personality.adjacency_scope == AdjacencyScope.SELF_AND_OPPONENT:
            positions.append(state.opponent.desk)

        unsafe: set[ResourceCategory] = set()
        for desk in positions:
            if desk is not None:
                unsafe.update(neighbours(desk))
        return frozenset(unsafe)

    def evaluate(
        self,
        state: GameState,
        application: Application,
        pool: ResourcePool | None = None,
    ) -> ApplicationEvaluation:
        if pool is None:
            pool = state.player.available_resources()
        remaining = application.cost_excluding_pool(pool)
        unsafe = self.unsafe_desks(state)
        return ApplicationEvaluation(
            application=application,
            remaining=remaining,
            required_shoddy=application.required_shoddy_mana(pool),
            safe_categories=sum(1 for c in remaining if c.category not in unsafe),
            reachable_desks=tuple(
                c.category for c in remaining if state.is_desk_available(c.category)
            ),
        )

    def pursuable(self, state: GameState) -> list[ApplicationEvaluation]:
        """
        Applications worth moving towards, best first.

        Excludes anything already releasable (RELEASE handles those) and
        anything whose missing categories are all occupied desks. Ties
        on required shoddy mana go to more safe categories, then to
        game order.
        """
        pool = state.player.available_resources()
        candidates = []
        for app in state.applications:
            if app.can_release_now(state.legal_actions):
                continue
            evaluation = self.evaluate(state, app, pool)
            if evaluation.reachable_desks:
                candidates.append(evaluation)
        candidates.sort(key=lambda e: e.sort_key)
        return candidates

    def best_releasable(self, state: GameState) -> ApplicationEvaluation | None:
        """Cheapest releasable application; first in game order on ties."""
        pool = state.player.available_resources()
        best: ApplicationEvaluation | None = None
        for app in state.releasable_applications():
            evaluation = self.evaluate(state, app, pool)
            if best is None or evaluation.required_shoddy < best.required_shoddy:
                best = evaluation
        return best

    def has_safe_release(self, state: GameState) -> bool:
        """True when some releasable application is within the wait threshold."""
        pool = state.player.available_resources()
        threshold = self.personality.safe_release_threshold
        return any(
            app.required_shoddy_mana(pool) <= threshold
            for app in state.releasable_applications()
        )
