"""
Configuration - Environment-driven settings.

Environment variables:
    GREENCIRCLE_PERSONALITY              balanced | cautious | hoarder
    GREENCIRCLE_LOG_LEVEL                DEBUG, INFO, WARNING, ...
    GREENCIRCLE_ADJACENCY_SCOPE          self | self_and_opponent
    GREENCIRCLE_SAFE_RELEASE_THRESHOLD   integer
    GREENCIRCLE_HOST / GREENCIRCLE_PORT  HTTP API bind address

stdout carries the bot's commands, so logs always go to stderr.
"""

from __future__ import annotations
import logging
import os
import sys
from dataclasses import dataclass

from .bots.personality import AdjacencyScope, Personality, get_personality


@dataclass
class Settings:
    """Runtime settings for the bot, the driver and the API."""
    personality: str = "balanced"
    log_level: str = "WARNING"
    adjacency_scope: str | None = None
    safe_release_threshold: int | None = None
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> Settings:
        threshold = os.getenv("GREENCIRCLE_SAFE_RELEASE_THRESHOLD")
        return cls(
            personality=os.getenv("GREENCIRCLE_PERSONALITY", "balanced"),
            log_level=os.getenv("GREENCIRCLE_LOG_LEVEL", "WARNING"),
            adjacency_scope=os.getenv("GREENCIRCLE_ADJACENCY_SCOPE") or None,
            safe_release_threshold=int(threshold) if threshold else None,
            host=os.getenv("GREENCIRCLE_HOST", "127.0.0.1"),
            port=int(os.getenv("GREENCIRCLE_PORT", "8000")),
        )

    def build_personality(self) -> Personality:
        """Resolve the named personality and apply any overrides."""
        scope = AdjacencyScope(self.adjacency_scope) if self.adjacency_scope else None
        return get_personality(self.personality).with_overrides(
            adjacency_scope=scope,
            safe_release_threshold=self.safe_release_threshold,
        )


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr at the given level."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
