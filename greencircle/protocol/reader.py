"""
Snapshot Reader - Parses the game's line protocol into a GameState.

Each turn the game sends, in order:
1. The phase name
2. Application count, then `<type> <id> <8 costs>` per application
3. Player line then opponent line: `<desk> <score> <perm DR> <perm AS>`
4. Card location count, then `<location> <10 counts>` per location
5. Legal action count, then one command per line

Anything that does not fit raises ProtocolError. Running out of input
before the phase line raises EOFError so the driver can stop cleanly.
"""

from __future__ import annotations
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from ..engine_core.cards import CARD_TYPE_COUNT, Card, cards_from_counts
from ..engine_core.errors import ProtocolError
from ..engine_core.resources import PRIMARY_CATEGORIES, cost_vector, desk_from_index
from ..engine_core.state import (
    Application,
    GamePhase,
    GameState,
    OpponentState,
    PlayerState,
)

logger = logging.getLogger(__name__)


class CardLocation(Enum):
    """Where a group of cards sits."""
    HAND = "HAND"
    DRAW = "DRAW"
    DISCARD = "DISCARD"
    PLAYED_CARDS = "PLAYED_CARDS"
    AUTOMATED = "AUTOMATED"
    OPPONENT_CARDS = "OPPONENT_CARDS"
    OPPONENT_AUTOMATED = "OPPONENT_AUTOMATED"


@dataclass
class _Participant:
    """Mutable scratch record used while a snapshot is being read."""
    desk: int = -1
    score: int = 0
    permanent_daily_routine: int = 0
    permanent_architecture_study: int = 0
    zones: dict[CardLocation, tuple[Card, ...]] = field(default_factory=dict)


def _to_int(token: str, line: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ProtocolError(f"Expected an integer, got {token!r}", line) from None


class SnapshotReader:
    """
    Reads one snapshot at a time from a stream of lines.

    Usage:
        reader = SnapshotReader(sys.stdin)
        state = reader.read()
    """

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)

    def read(self) -> GameState:
        """Read the next full snapshot."""
        try:
            phase_line = next(self._lines)
        except StopIteration:
            raise EOFError("No more snapshots") from None

        phase = GamePhase.parse(phase_line)
        applications = self._read_applications()
        player, opponent = self._read_participant(), self._read_participant()
        self._read_cards(player, opponent)
        legal_actions = self._read_legal_actions()

        return GameState(
            phase=phase,
            applications=applications,
            legal_actions=legal_actions,
            player=PlayerState(
                desk=desk_from_index(player.desk),
                score=player.score,
                permanent_daily_routine=player.permanent_daily_routine,
                permanent_architecture_study=player.permanent_architecture_study,
                automated=player.zones.get(CardLocation.AUTOMATED, ()),
                hand=player.zones.get(CardLocation.HAND, ()),
                draw_pile=player.zones.get(CardLocation.DRAW, ()),
                discard=player.zones.get(CardLocation.DISCARD, ()),
                played_cards=player.zones.get(CardLocation.PLAYED_CARDS, ()),
            ),
            opponent=OpponentState(
                desk=desk_from_index(opponent.desk),
                score=opponent.score,
                permanent_daily_routine=opponent.permanent_daily_routine,
                permanent_architecture_study=opponent.permanent_architecture_study,
                automated=opponent.zones.get(CardLocation.OPPONENT_AUTOMATED, ()),
                cards=opponent.zones.get(CardLocation.OPPONENT_CARDS, ()),
            ),
        )

    def __iter__(self) -> Iterator[GameState]:
        while True:
            try:
                yield self.read()
            except EOFError:
                return

    # =========================================================================
    # Sections
    # =========================================================================

    def _next_line(self) -> str:
        try:
            return next(self._lines).rstrip("\r\n")
        except StopIteration:
            raise ProtocolError("Truncated snapshot") from None

    def _read_count(self) -> int:
        line = self._next_line()
        count = _to_int(line.strip(), line)
        if count < 0:
            raise ProtocolError("Negative count", line)
        return count

    def _read_ints(self, expected: int) -> tuple[list[int], str]:
        line = self._next_line()
        tokens = line.split()
        if len(tokens) != expected:
            raise ProtocolError(f"Expected {expected} tokens, got {len(tokens)}", line)
        return [_to_int(t, line) for t in tokens], line

    def _read_applications(self) -> tuple[Application, ...]:
        applications = []
        for _ in range(self._read_count()):
            line = self._next_line()
            tokens = line.split()
            if len(tokens) != 2 + len(PRIMARY_CATEGORIES):
                raise ProtocolError("Malformed application", line)
            amounts = [_to_int(t, line) for t in tokens[2:]]
            try:
                costs = cost_vector(zip(PRIMARY_CATEGORIES, amounts))
            except ValueError as e:
                raise ProtocolError(str(e), line) from None
            applications.append(
                Application(app_id=_to_int(tokens[1], line), app_type=tokens[0], costs=costs)
            )
        return tuple(applications)

    def _read_participant(self) -> _Participant:
        values, _ = self._read_ints(4)
        return _Participant(
            desk=values[0],
            score=values[1],
            permanent_daily_routine=values[2],
            permanent_architecture_study=values[3],
        )

    def _read_cards(self, player: _Participant, opponent: _Participant) -> None:
        for _ in range(self._read_count()):
            line = self._next_line()
            tokens = line.split()
            if len(tokens) != 1 + CARD_TYPE_COUNT:
                raise ProtocolError("Malformed card location", line)
            try:
                location = CardLocation(tokens[0])
            except ValueError:
                raise ProtocolError(f"Unknown card location {tokens[0]!r}", line) from None

            cards = cards_from_counts([_to_int(t, line) for t in tokens[1:]])
            if location in (CardLocation.OPPONENT_CARDS, CardLocation.OPPONENT_AUTOMATED):
                opponent.zones[location] = cards
            else:
                player.zones[location] = cards

    def _read_legal_actions(self) -> tuple[str, ...]:
        actions = []
        for _ in range(self._read_count()):
            action = self._next_line().strip()
            logger.debug("Legal action: %s", action)
            actions.append(action)
        return tuple(actions)


def read_snapshot(lines: Iterable[str]) -> GameState:
    """Read a single snapshot from an iterable of lines."""
    return SnapshotReader(lines).read()


def parse_snapshot(text: str) -> GameState:
    """Parse one snapshot from a block of text."""
    try:
        return read_snapshot(line for line in text.splitlines() if line.strip())
    except EOFError:
        raise ProtocolError("Empty snapshot") from None
