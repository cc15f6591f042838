"""
Game State - The per-turn snapshot the bot decides on.

Design principles:
- Immutable: every dataclass is frozen, collections are tuples
- Rebuilt every turn: nothing carries over between decisions
- Environment is authoritative: release legality comes from the
  legal-action list, never from local cost math
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from . import action as commands
from .cards import Card, pool_from_cards
from .errors import ProtocolError
from .resources import (
    PRIMARY_CATEGORIES,
    CostVector,
    ResourceCategory,
    ResourcePool,
    cost_remaining_after,
    is_affordable,
    required_shoddy_mana,
)


class GamePhase(Enum):
    """Turn phases, in the order the game cycles through them."""
    MOVE = "MOVE"
    GIVE_CARD = "GIVE_CARD"
    THROW_CARD = "THROW_CARD"
    PLAY_CARD = "PLAY_CARD"
    RELEASE = "RELEASE"

    @classmethod
    def parse(cls, raw: str) -> GamePhase:
        """Parse a phase tag, raising ProtocolError for anything unknown."""
        try:
            return cls(raw.strip())
        except ValueError:
            raise ProtocolError(f"Unknown phase: {raw.strip()!r}") from None


# =============================================================================
# Applications (goals)
# =============================================================================

@dataclass(frozen=True)
class Application:
    """
    An application the players race to release.

    Costs only list categories with a positive amount. An application
    can be fully paid for and still not be releasable this tick; the
    legal-action list lags one step behind.
    """
    app_id: int
    app_type: str = "APPLICATION"
    costs: CostVector = ()

    @property
    def release_command(self) -> str:
        return commands.release(self.app_id)

    def can_release_now(self, legal_actions: tuple[str, ...] | list[str]) -> bool:
        return self.release_command in legal_actions

    def cost_excluding_pool(self, pool: ResourcePool) -> CostVector:
        """Cost still owed after spending the pool."""
        return cost_remaining_after(self.costs, pool)

    def is_affordable(self, pool: ResourcePool) -> bool:
        return is_affordable(self.costs, pool)

    def required_shoddy_mana(self, pool: ResourcePool) -> int:
        return required_shoddy_mana(self.costs, pool)


# =============================================================================
# Participants
# =============================================================================

@dataclass(frozen=True)
class ParticipantState:
    """Fields shared by both sides of the table."""
    desk: ResourceCategory | None = None
    score: int = 0
    permanent_daily_routine: int = 0
    permanent_architecture_study: int = 0
    automated: tuple[Card, ...] = ()


@dataclass(frozen=True)
class PlayerState(ParticipantState):
    """The acting player: every zone is visible."""
    hand: tuple[Card, ...] = ()
    draw_pile: tuple[Card, ...] = ()
    discard: tuple[Card, ...] = ()
    played_cards: tuple[Card, ...] = ()

    @property
    def cards(self) -> tuple[Card, ...]:
        """Hand plus discard, the cards cycling through the deck."""
        return self.hand + self.discard

    def available_resources(self) -> ResourcePool:
        return available_resources(self)


@dataclass(frozen=True)
class OpponentState(ParticipantState):
    """
    The opponent: zones are flattened into one set.

    Only aggregate card counts are revealed, so there is no hand.
    """
    cards: tuple[Card, ...] = ()


def available_resources(player: PlayerState) -> ResourcePool:
    """Pool yielded by the player's hand this turn."""
    return pool_from_cards(player.hand)


# =============================================================================
# Snapshot
# =============================================================================

@dataclass(frozen=True)
class GameState:
    """
    Complete snapshot for one decision.

    Contains the phase, the open applications (in game order), the
    literal legal commands, and both participants.
    """
    phase: GamePhase
    applications: tuple[Application, ...] = ()
    legal_actions: tuple[str, ...] = ()
    player: PlayerState = field(default_factory=PlayerState)
    opponent: OpponentState = field(default_factory=OpponentState)

    @property
    def participants(self) -> tuple[ParticipantState, ParticipantState]:
        return (self.player, self.opponent)

    @property
    def occupied_desks(self) -> frozenset[ResourceCategory]:
        return frozenset(p.desk for p in self.participants if p.desk is not None)

    def is_desk_available(self, desk: ResourceCategory) -> bool:
        """A desk is free when no participant currently stands on it."""
        return desk.is_primary and desk not in self.occupied_desks

    @property
    def available_desks(self) -> tuple[ResourceCategory, ...]:
        occupied = self.occupied_desks
        return tuple(d for d in PRIMARY_CATEGORIES if d not in occupied)

    def get_application(self, app_id: int) -> Application | None:
        for app in self.applications:
            if app.app_id == app_id:
                return app
        return None

    def releasable_applications(self) -> tuple[Application, ...]:
        return tuple(a for a in self.applications if a.can_release_now(self.legal_actions))
