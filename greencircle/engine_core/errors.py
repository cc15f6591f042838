"""
Engine errors.

Everything raised by the decision core derives from GreenCircleError so
the driver can tell engine failures apart from programming errors.
None of these are retried: a failed decision is final for that turn.
"""

from __future__ import annotations


class GreenCircleError(Exception):
    """Base class for engine errors."""


class ProtocolError(GreenCircleError):
    """
    The snapshot could not be understood.

    Raised for unknown phase tags, unknown card locations, bad integer
    tokens, or truncated input.
    """

    def __init__(self, message: str, line: str | None = None):
        self.line = line
        if line is not None:
            message = f"{message} (line: {line!r})"
        super().__init__(message)


class IllegalActionError(GreenCircleError):
    """A strategy chose a command that is not in the legal-action list."""

    def __init__(self, action: str, legal_actions: list[str] | tuple[str, ...]):
        self.action = action
        self.legal_actions = list(legal_actions)
        super().__init__(
            f"Action {action!r} is not legal; legal actions: {self.legal_actions}"
        )


class StrategyNotFoundError(GreenCircleError):
    """No strategy is registered for the snapshot's phase."""

    def __init__(self, phase):
        self.phase = phase
        super().__init__(f"No strategy registered for phase {phase!r}")
