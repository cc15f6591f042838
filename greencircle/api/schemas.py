"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between HTTP clients and the engine.
Categories and card types are referred to by their upper-case names
(e.g. "CODING", "BONUS"); desks by index (-1 = not placed yet).

Error Codes:
- PROTOCOL_ERROR: the snapshot could not be understood
- ILLEGAL_ACTION: the bot chose a command outside the legal list
- VALIDATION_ERROR: request body failed schema validation
- INTERNAL_ERROR: anything else
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    ILLEGAL_ACTION = "ILLEGAL_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class ApplicationInfo(BaseModel):
    """An open application and its cost per category."""
    id: int
    type: str = "APPLICATION"
    costs: dict[str, int] = Field(
        default_factory=dict,
        description="Cost per category name, e.g. {\"CODING\": 3}",
    )


class ParticipantInfo(BaseModel):
    """Public state shared by both participants."""
    desk: int = Field(-1, ge=-1, le=7, description="Desk index, -1 if not placed")
    score: int = Field(0, ge=0)
    permanent_daily_routine: int = Field(0, ge=0)
    permanent_architecture_study: int = Field(0, ge=0)
    automated: dict[str, int] = Field(default_factory=dict, description="Card counts by type name")


class PlayerInfo(ParticipantInfo):
    """The acting player, all zones visible."""
    hand: dict[str, int] = Field(default_factory=dict)
    draw_pile: dict[str, int] = Field(default_factory=dict)
    discard: dict[str, int] = Field(default_factory=dict)
    played_cards: dict[str, int] = Field(default_factory=dict)


class OpponentInfo(ParticipantInfo):
    """The opponent, zones flattened."""
    cards: dict[str, int] = Field(default_factory=dict)


class SnapshotRequest(BaseModel):
    """A full per-turn snapshot."""
    phase: str = Field(..., description="MOVE, GIVE_CARD, THROW_CARD, PLAY_CARD or RELEASE")
    applications: list[ApplicationInfo] = Field(default_factory=list)
    legal_actions: list[str] = Field(..., min_length=1)
    player: PlayerInfo = Field(default_factory=PlayerInfo)
    opponent: OpponentInfo = Field(default_factory=OpponentInfo)
    personality: Optional[str] = Field(None, description="Override the server's personality")


class RawSnapshotRequest(BaseModel):
    """A snapshot in the game's own line protocol."""
    snapshot: str = Field(..., min_length=1)
    personality: Optional[str] = None


# =============================================================================
# Response Models
# =============================================================================

class DecideResponse(BaseModel):
    """The chosen command."""
    action: str
    phase: str
    explanation: str = ""
    evaluated_candidates: int = 0
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
