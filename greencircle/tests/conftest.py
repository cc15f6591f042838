"""
Pytest fixtures for Green Circle tests.
"""

import pytest

from ..engine_core.cards import Card
from ..engine_core.resources import ResourceCategory, cost_vector
from ..engine_core.state import (
    Application,
    GamePhase,
    GameState,
    OpponentState,
    PlayerState,
)


def make_app(app_id: int, **costs: int) -> Application:
    """Application with costs given by category name, e.g. CODING=3."""
    amounts = {ResourceCategory[name]: amount for name, amount in costs.items()}
    ordered = sorted(amounts.items(), key=lambda item: item[0].value)
    return Application(app_id=app_id, costs=cost_vector(ordered))


def make_state(
    phase: GamePhase = GamePhase.MOVE,
    applications=(),
    legal_actions=("RANDOM",),
    hand=(),
    desk: ResourceCategory | None = None,
    opponent_desk: ResourceCategory | None = None,
) -> GameState:
    """Snapshot with just the fields the strategies look at."""
    return GameState(
        phase=phase,
        applications=tuple(applications),
        legal_actions=tuple(legal_actions),
        player=PlayerState(desk=desk, hand=tuple(hand)),
        opponent=OpponentState(desk=opponent_desk),
    )


@pytest.fixture
def coding_card() -> Card:
    return Card.generic(ResourceCategory.CODING)


@pytest.fixture
def sample_snapshot_text() -> str:
    """A MOVE-phase snapshot in the game's line protocol."""
    return "\n".join([
        "MOVE",
        "2",
        "APPLICATION 3 0 4 4 0 0 0 0 0",
        "APPLICATION 7 2 0 0 0 0 0 0 4",
        "0 1 0 0",
        "5 2 1 0",
        "4",
        "HAND 0 1 0 0 0 0 0 0 1 0",
        "DRAW 2 0 0 0 0 0 0 0 0 1",
        "DISCARD 0 0 0 0 0 0 1 0 0 0",
        "OPPONENT_CARDS 0 0 0 0 0 0 0 0 2 3",
        "5",
        "RANDOM",
        "MOVE 1",
        "MOVE 2",
        "MOVE 3",
        "MOVE 7",
    ]) + "\n"


@pytest.fixture
def release_snapshot_text() -> str:
    """A RELEASE-phase snapshot where application 3 can be released."""
    return "\n".join([
        "RELEASE",
        "1",
        "APPLICATION 3 0 2 0 0 0 0 0 0",
        "1 1 0 0",
        "5 2 1 0",
        "1",
        "HAND 0 1 0 0 0 0 0 0 0 0",
        "3",
        "RANDOM",
        "WAIT",
        "RELEASE 3",
    ]) + "\n"
