"""
Game Loop - The read / decide / write driver.

The loop:
1. Read a snapshot from the game
2. Ask the bot for one action
3. Write the action as a single line and flush
4. Repeat until the game closes the input

The loop owns every side effect (I/O, logging, timing) so the bot
itself stays a pure function of the snapshot.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from ..engine_core.errors import GreenCircleError, IllegalActionError

if TYPE_CHECKING:
    from ..bots.policy import BotPolicy
    from ..engine_core.state import GamePhase
    from ..protocol.reader import SnapshotReader

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_SNAPSHOT = "waiting_snapshot"
    DECIDING = "deciding"
    FINISHED = "finished"
    FAILED = "failed"


@dataclass
class TurnResult:
    """What happened on one turn."""
    turn: int
    phase: GamePhase
    action: str
    explanation: str = ""
    elapsed: float = 0.0


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(DeskBot(), SnapshotReader(sys.stdin), sys.stdout)
        loop.run()

    A fatal engine error is logged with its context and re-raised; the
    loop never substitutes an action of its own.
    """

    def __init__(self, bot: BotPolicy, reader: SnapshotReader, output: TextIO):
        self.bot = bot
        self.reader = reader
        self.output = output
        self.state = LoopState.WAITING_SNAPSHOT
        self.turn = 0

    def step(self) -> TurnResult:
        """
        Play one turn.

        Raises EOFError when the input is exhausted before a snapshot.
        """
        self.state = LoopState.WAITING_SNAPSHOT
        snapshot = self.reader.read()

        self.turn += 1
        self.state = LoopState.DECIDING
        logger.debug(
            "Turn %d phase %s, %d legal action(s)",
            self.turn, snapshot.phase.value, len(snapshot.legal_actions),
        )

        started = time.perf_counter()
        decision = self.bot.select_action(snapshot)
        elapsed = time.perf_counter() - started

        self.output.write(decision.action + "\n")
        self.output.flush()
        logger.info(
            "Turn %d %s: %s (%s) in %.1fms",
            self.turn, snapshot.phase.value, decision.action,
            decision.explanation, elapsed * 1000,
        )

        self.state = LoopState.WAITING_SNAPSHOT
        return TurnResult(
            turn=self.turn,
            phase=snapshot.phase,
            action=decision.action,
            explanation=decision.explanation,
            elapsed=elapsed,
        )

    def run(self, max_turns: int | None = None) -> list[TurnResult]:
        """Play turns until the input ends (or max_turns is reached)."""
        results: list[TurnResult] = []
        while max_turns is None or len(results) < max_turns:
            try:
                results.append(self.step())
            except EOFError:
                logger.info("Input closed after %d turn(s)", self.turn)
                break
            except IllegalActionError as e:
                self.state = LoopState.FAILED
                logger.error(
                    "Turn %d: illegal action %r (legal: %s)",
                    self.turn, e.action, e.legal_actions,
                )
                raise
            except GreenCircleError:
                self.state = LoopState.FAILED
                logger.exception("Turn %d: decision aborted", self.turn)
                raise
        self.state = LoopState.FINISHED
        return results
