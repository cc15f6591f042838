"""
API Service - Business logic layer between API and engine.

The service:
1. Translates request schemas into an immutable GameState
2. Runs the bot
3. Formats the decision for the response

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
and lets engine errors propagate; the app maps them to HTTP codes.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..bots import DeskBot, Personality, get_personality
from ..bots.personality import BALANCED
from ..engine_core.cards import CARD_TYPE_COUNT, Card
from ..engine_core.errors import ProtocolError
from ..engine_core.resources import ResourceCategory, cost_vector, desk_from_index
from ..engine_core.state import (
    Application,
    GamePhase,
    GameState,
    OpponentState,
    PlayerState,
)
from ..protocol import parse_snapshot
from .schemas import (
    ApplicationInfo,
    DecideResponse,
    OpponentInfo,
    PlayerInfo,
    RawSnapshotRequest,
    SnapshotRequest,
)

_CARD_TYPES: dict[str, Card] = {
    card.name: card for card in (Card.from_type_id(i) for i in range(CARD_TYPE_COUNT))
}


def _cards(counts: dict[str, int]) -> tuple[Card, ...]:
    cards: list[Card] = []
    for name, count in counts.items():
        card = _CARD_TYPES.get(name.upper())
        if card is None:
            raise ProtocolError(f"Unknown card type {name!r}")
        if count < 0:
            raise ProtocolError(f"Negative count for {name}: {count}")
        cards.extend([card] * count)
    return tuple(cards)


def _application(info: ApplicationInfo) -> Application:
    amounts = []
    for name, amount in info.costs.items():
        try:
            amounts.append((ResourceCategory[name.upper()], amount))
        except KeyError:
            raise ProtocolError(f"Unknown cost category {name!r}") from None
    try:
        # Game order, not request order
        costs = cost_vector(sorted(amounts, key=lambda item: item[0].value))
    except ValueError as e:
        raise ProtocolError(str(e)) from None
    return Application(app_id=info.id, app_type=info.type, costs=costs)


def _player(info: PlayerInfo) -> PlayerState:
    return PlayerState(
        desk=desk_from_index(info.desk),
        score=info.score,
        permanent_daily_routine=info.permanent_daily_routine,
        permanent_architecture_study=info.permanent_architecture_study,
        automated=_cards(info.automated),
        hand=_cards(info.hand),
        draw_pile=_cards(info.draw_pile),
        discard=_cards(info.discard),
        played_cards=_cards(info.played_cards),
    )


def _opponent(info: OpponentInfo) -> OpponentState:
    return OpponentState(
        desk=desk_from_index(info.desk),
        score=info.score,
        permanent_daily_routine=info.permanent_daily_routine,
        permanent_architecture_study=info.permanent_architecture_study,
        automated=_cards(info.automated),
        cards=_cards(info.cards),
    )


def snapshot_from_request(request: SnapshotRequest) -> GameState:
    """Build the engine's GameState from a request body."""
    return GameState(
        phase=GamePhase.parse(request.phase),
        applications=tuple(_application(a) for a in request.applications),
        legal_actions=tuple(a.strip() for a in request.legal_actions),
        player=_player(request.player),
        opponent=_opponent(request.opponent),
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        response = service.decide(request)
    """
    personality: Personality = field(default=BALANCED)

    def _bot(self, personality_name: str | None) -> DeskBot:
        if personality_name:
            return DeskBot(personality=get_personality(personality_name))
        return DeskBot(personality=self.personality)

    def decide(self, request: SnapshotRequest) -> DecideResponse:
        """Decide on a JSON snapshot."""
        state = snapshot_from_request(request)
        return self._decide(state, request.personality)

    def decide_raw(self, request: RawSnapshotRequest) -> DecideResponse:
        """Decide on a snapshot in the game's line protocol."""
        state = parse_snapshot(request.snapshot)
        return self._decide(state, request.personality)

    def _decide(self, state: GameState, personality_name: str | None) -> DecideResponse:
        decision = self._bot(personality_name).select_action(state)
        return DecideResponse(
            action=decision.action,
            phase=state.phase.value,
            explanation=decision.explanation,
            evaluated_candidates=decision.evaluated_candidates,
            details=decision.evaluation_details,
        )
