"""
API Module - HTTP interface.

Exposes the decision engine via REST so other tools (replayers,
tournament runners, dashboards) can ask for a move without
speaking the game's line protocol.
"""

from .schemas import (
    SnapshotRequest,
    RawSnapshotRequest,
    ApplicationInfo,
    PlayerInfo,
    OpponentInfo,
    DecideResponse,
    ErrorResponse,
    ErrorCode,
    HealthResponse,
)
from .service import APIService, snapshot_from_request
from .app import create_app

__all__ = [
    "SnapshotRequest",
    "RawSnapshotRequest",
    "ApplicationInfo",
    "PlayerInfo",
    "OpponentInfo",
    "DecideResponse",
    "ErrorResponse",
    "ErrorCode",
    "HealthResponse",
    "APIService",
    "snapshot_from_request",
    "create_app",
]
