"""
Bot Personalities - Tunable knobs for the phase strategies.

Personalities adjust:
- Which cards are played first (and given away first, in reverse)
- How cheap a pending release must be before the bot holds its cards
- Whose position makes neighbouring desks unsafe during MOVE
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..engine_core.resources import ResourceCategory


class AdjacencyScope(Enum):
    """Whose desk positions count when marking desks as unsafe."""
    SELF = "self"
    SELF_AND_OPPONENT = "self_and_opponent"


# Parameterised cards (TASK_PRIORITIZATION, CONTINUOUS_DELIVERY) take
# arguments the strategies do not choose, so they are not listed.
DEFAULT_PLAY_PRIORITY: tuple[ResourceCategory, ...] = (
    ResourceCategory.ARCHITECTURE_STUDY,
    ResourceCategory.DAILY_ROUTINE,
    ResourceCategory.CODING,
    ResourceCategory.TRAINING,
    ResourceCategory.CODE_REVIEW,
    ResourceCategory.REFACTORING,
)

SAFE_RELEASE_THRESHOLD = 2


@dataclass(frozen=True)
class Personality:
    """
    A bot personality that defines play style.

    Every personality is deterministic; two bots with the same
    personality always pick the same action for the same snapshot.
    """
    name: str
    description: str = ""

    # PLAY_CARD: wait instead of playing when a release needs at most
    # this much shoddy-only mana
    safe_release_threshold: int = SAFE_RELEASE_THRESHOLD

    # Most preferred first; GIVE_CARD walks it backwards
    play_priority: tuple[ResourceCategory, ...] = DEFAULT_PLAY_PRIORITY

    # MOVE: desks equal or adjacent to these positions are unsafe
    adjacency_scope: AdjacencyScope = AdjacencyScope.SELF

    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def give_priority(self) -> tuple[ResourceCategory, ...]:
        return tuple(reversed(self.play_priority))

    def with_overrides(self, **kwargs) -> Personality:
        """Copy with some knobs replaced (None values are ignored)."""
        values = {k: v for k, v in kwargs.items() if v is not None}
        if not values:
            return self
        return Personality(
            name=values.get("name", self.name),
            description=values.get("description", self.description),
            safe_release_threshold=values.get("safe_release_threshold", self.safe_release_threshold),
            play_priority=tuple(values.get("play_priority", self.play_priority)),
            adjacency_scope=values.get("adjacency_scope", self.adjacency_scope),
            metadata={**self.metadata, **values.get("metadata", {})},
        )


# ============================================================================
# Predefined Personalities
# ============================================================================

BALANCED = Personality(
    name="Balanced",
    description="Default rules: own-desk adjacency, wait threshold 2",
)


CAUTIOUS = Personality(
    name="Cautious",
    description="Also treats desks next to the opponent as unsafe",
    adjacency_scope=AdjacencyScope.SELF_AND_OPPONENT,
)


HOARDER = Personality(
    name="Hoarder",
    description="Holds cards whenever a release is reasonably close",
    safe_release_threshold=4,
)


PERSONALITIES: dict[str, Personality] = {
    "balanced": BALANCED,
    "cautious": CAUTIOUS,
    "hoarder": HOARDER,
}


def get_personality(name: str) -> Personality:
    """Look up a predefined personality by (case-insensitive) name."""
    try:
        return PERSONALITIES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown personality {name!r}; choose from {sorted(PERSONALITIES)}"
        ) from None
