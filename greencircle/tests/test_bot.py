"""
Tests for the phase strategy state machine.

Tests:
- Each phase picks the expected command
- No-candidate situations fall back to the default action
- Chosen commands are always checked against the legal list
- Personalities change the knobs they claim to change
"""

import pytest

from ..bots import DeskBot, decide
from ..bots.evaluator import ApplicationEvaluator, neighbours
from ..bots.personality import (
    BALANCED,
    CAUTIOUS,
    HOARDER,
    PERSONALITIES,
    AdjacencyScope,
    get_personality,
)
from ..engine_core.cards import Card
from ..engine_core.errors import IllegalActionError, StrategyNotFoundError
from ..engine_core.resources import ResourceCategory
from ..engine_core.state import GamePhase
from .conftest import make_app, make_state

TRAINING = ResourceCategory.TRAINING
CODING = ResourceCategory.CODING
DAILY_ROUTINE = ResourceCategory.DAILY_ROUTINE
ARCHITECTURE_STUDY = ResourceCategory.ARCHITECTURE_STUDY
CODE_REVIEW = ResourceCategory.CODE_REVIEW
REFACTORING = ResourceCategory.REFACTORING

ALL_MOVES = ["RANDOM"] + [f"MOVE {i}" for i in range(8)]


class TestMovePhase:
    """Tests for the MOVE strategy."""

    def test_picks_lowest_shoddy_requirement(self):
        """The application needing the least shoddy mana wins."""
        state = make_state(
            applications=[make_app(1, TRAINING=3), make_app(2, CODING=1, REFACTORING=1)],
            legal_actions=ALL_MOVES,
        )
        decision = DeskBot().select_action(state)
        assert decision.action == "MOVE 1"
        assert decision.evaluation_details["application"] == 2

    def test_ties_prefer_safe_categories(self):
        """Desks next to our own position are unsafe."""
        state = make_state(
            applications=[make_app(1, TRAINING=2), make_app(2, REFACTORING=2)],
            legal_actions=ALL_MOVES,
            desk=CODING,
        )
        assert DeskBot().decide(state) == "MOVE 7"

    def test_opponent_adjacency_when_configured(self):
        """With the opponent in scope both candidates are unsafe; game order wins."""
        state = make_state(
            applications=[make_app(1, TRAINING=2), make_app(2, REFACTORING=2)],
            legal_actions=ALL_MOVES,
            desk=CODING,
            opponent_desk=CODE_REVIEW,
        )
        assert DeskBot(personality=BALANCED).decide(state) == "MOVE 7"
        assert DeskBot(personality=CAUTIOUS).decide(state) == "MOVE 0"

    def test_releasable_application_not_pursued(self):
        state = make_state(
            applications=[make_app(1, TRAINING=1), make_app(2, CODING=5)],
            legal_actions=ALL_MOVES + ["RELEASE 1"],
        )
        assert DeskBot().decide(state) == "MOVE 1"

    def test_moves_to_first_free_missing_category(self):
        state = make_state(
            applications=[make_app(1, TRAINING=1, CODING=1, DAILY_ROUTINE=1)],
            legal_actions=ALL_MOVES,
            desk=TRAINING,
        )
        assert DeskBot().decide(state) == "MOVE 1"

    def test_occupied_desks_fall_back_to_default(self):
        """When every missing category is occupied, no exception is raised."""
        state = make_state(
            applications=[make_app(1, TRAINING=2, CODING=1)],
            legal_actions=ALL_MOVES,
            desk=TRAINING,
            opponent_desk=CODING,
        )
        decision = DeskBot().select_action(state)
        assert decision.action == "RANDOM"
        assert decision.explanation == "No pursuable application"

    def test_fully_paid_applications_are_skipped(self):
        state = make_state(
            applications=[make_app(1, CODING=2)],
            legal_actions=ALL_MOVES,
            hand=[Card.generic(CODING)],
        )
        assert DeskBot().decide(state) == "RANDOM"

    def test_illegal_move_raises(self):
        state = make_state(
            applications=[make_app(1, CODING=1)],
            legal_actions=["RANDOM", "MOVE 3"],
        )
        with pytest.raises(IllegalActionError) as exc_info:
            DeskBot().decide(state)
        assert exc_info.value.action == "MOVE 1"


class TestReleasePhase:
    """Tests for the RELEASE strategy."""

    def test_releases_cheapest(self):
        state = make_state(
            phase=GamePhase.RELEASE,
            applications=[make_app(1, TRAINING=2), make_app(2, CODING=2)],
            legal_actions=["RANDOM", "RELEASE 1", "RELEASE 2"],
            hand=[Card.generic(CODING)],
        )
        assert DeskBot().decide(state) == "RELEASE 2"

    def test_ties_go_to_first(self):
        state = make_state(
            phase=GamePhase.RELEASE,
            applications=[make_app(5, TRAINING=1), make_app(6, CODING=1)],
            legal_actions=["RANDOM", "RELEASE 6", "RELEASE 5"],
        )
        assert DeskBot().decide(state) == "RELEASE 5"

    def test_nothing_releasable(self):
        state = make_state(
            phase=GamePhase.RELEASE,
            applications=[make_app(1, CODING=1)],
            legal_actions=["RANDOM", "WAIT"],
        )
        assert DeskBot().decide(state) == "RANDOM"


class TestPlayCardPhase:
    """Tests for the PLAY_CARD strategy."""

    HAND = [Card.generic(CODING), Card.generic(ARCHITECTURE_STUDY)]
    LEGAL = ["RANDOM", "WAIT", "RELEASE 1", "CODING", "ARCHITECTURE_STUDY"]

    def test_waits_when_release_is_safe(self):
        """Required shoddy 1 is within the threshold, so cards are held."""
        state = make_state(
            phase=GamePhase.PLAY_CARD,
            applications=[make_app(1, CODING=2, TRAINING=1)],
            legal_actions=self.LEGAL,
            hand=self.HAND,
        )
        assert DeskBot().decide(state) == "WAIT"

    def test_plays_by_priority_when_release_is_risky(self):
        state = make_state(
            phase=GamePhase.PLAY_CARD,
            applications=[make_app(1, TRAINING=3)],
            legal_actions=self.LEGAL,
            hand=self.HAND,
        )
        assert DeskBot().decide(state) == "ARCHITECTURE_STUDY"

    def test_hoarder_waits_longer(self):
        state = make_state(
            phase=GamePhase.PLAY_CARD,
            applications=[make_app(1, TRAINING=3)],
            legal_actions=self.LEGAL,
            hand=self.HAND,
        )
        assert DeskBot(personality=HOARDER).decide(state) == "WAIT"

    def test_no_priority_card_in_hand(self):
        state = make_state(
            phase=GamePhase.PLAY_CARD,
            legal_actions=["RANDOM", "WAIT", "TASK_PRIORITIZATION 1 2"],
            hand=[Card.generic(ResourceCategory.TASK_PRIORITIZATION), Card.bonus()],
        )
        assert DeskBot().decide(state) == "RANDOM"

    def test_unplayable_card_raises(self):
        state = make_state(
            phase=GamePhase.PLAY_CARD,
            legal_actions=["RANDOM", "WAIT"],
            hand=[Card.generic(CODING)],
        )
        with pytest.raises(IllegalActionError):
            DeskBot().decide(state)


class TestGiveCardPhase:
    """Tests for the GIVE_CARD strategy."""

    def test_gives_least_valuable_first(self):
        state = make_state(
            phase=GamePhase.GIVE_CARD,
            legal_actions=["RANDOM", "GIVE 1", "GIVE 4", "GIVE 7"],
            hand=[Card.generic(CODING), Card.generic(ARCHITECTURE_STUDY), Card.generic(REFACTORING)],
        )
        assert DeskBot().decide(state) == "GIVE 7"

    def test_ignores_releasable_applications(self):
        state = make_state(
            phase=GamePhase.GIVE_CARD,
            applications=[make_app(1, CODING=1)],
            legal_actions=["RANDOM", "WAIT", "RELEASE 1", "GIVE 1"],
            hand=[Card.generic(CODING)],
        )
        assert DeskBot().decide(state) == "GIVE 1"

    def test_nothing_to_give(self):
        state = make_state(
            phase=GamePhase.GIVE_CARD,
            legal_actions=["RANDOM", "GIVE 8"],
            hand=[Card.bonus()],
        )
        assert DeskBot().decide(state) == "RANDOM"


class TestOtherPhases:
    """Tests for the fallback and the dispatch table."""

    def test_throw_card_uses_default(self):
        state = make_state(phase=GamePhase.THROW_CARD, legal_actions=["RANDOM", "THROW 9"])
        assert decide(state) == "RANDOM"

    def test_default_must_be_legal(self):
        state = make_state(phase=GamePhase.THROW_CARD, legal_actions=["THROW 9"])
        with pytest.raises(IllegalActionError):
            decide(state)

    def test_missing_strategy_raises(self):
        bot = DeskBot()
        del bot._strategies[GamePhase.THROW_CARD]
        with pytest.raises(StrategyNotFoundError):
            bot.decide(make_state(phase=GamePhase.THROW_CARD))

    def test_decisions_are_deterministic(self):
        state = make_state(
            applications=[make_app(1, TRAINING=2), make_app(2, REFACTORING=2)],
            legal_actions=ALL_MOVES,
        )
        assert len({DeskBot().decide(state) for _ in range(10)}) == 1


class TestEvaluator:
    """Tests for application ranking helpers."""

    def test_neighbours_clip_at_edges(self):
        assert neighbours(TRAINING) == (TRAINING, CODING)
        assert neighbours(REFACTORING) == (CODE_REVIEW, REFACTORING)
        assert len(neighbours(DAILY_ROUTINE)) == 3

    def test_unsafe_desks_follow_scope(self):
        state = make_state(desk=CODING, opponent_desk=REFACTORING)
        assert REFACTORING not in ApplicationEvaluator(BALANCED).unsafe_desks(state)
        assert REFACTORING in ApplicationEvaluator(CAUTIOUS).unsafe_desks(state)

    def test_unplaced_player_has_no_unsafe_desks(self):
        assert ApplicationEvaluator().unsafe_desks(make_state()) == frozenset()


class TestPersonality:
    """Tests for personalities."""

    def test_predefined_personalities_exist(self):
        assert set(PERSONALITIES) == {"balanced", "cautious", "hoarder"}

    def test_give_priority_is_reversed(self):
        assert BALANCED.give_priority == tuple(reversed(BALANCED.play_priority))

    def test_lookup_is_case_insensitive(self):
        assert get_personality(" Cautious ") is CAUTIOUS

    def test_unknown_personality(self):
        with pytest.raises(ValueError):
            get_personality("reckless")

    def test_overrides(self):
        tuned = BALANCED.with_overrides(
            adjacency_scope=AdjacencyScope.SELF_AND_OPPONENT,
            safe_release_threshold=None,
        )
        assert tuned.adjacency_scope == AdjacencyScope.SELF_AND_OPPONENT
        assert tuned.safe_release_threshold == BALANCED.safe_release_threshold
        assert BALANCED.with_overrides() is BALANCED
