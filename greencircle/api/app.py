"""
FastAPI Application - REST API around the decision engine.

Endpoints:
    GET    /health                 Health check
    POST   /api/v1/decide          Decide on a JSON snapshot
    POST   /api/v1/decide/raw      Decide on a line-protocol snapshot

Engine errors map to structured error responses:
    ProtocolError        -> 400 PROTOCOL_ERROR
    IllegalActionError   -> 409 ILLEGAL_ACTION
    unknown personality  -> 400 VALIDATION_ERROR
"""

from typing import Optional
import logging

from ..config import Settings

logger = logging.getLogger(__name__)


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI
    from fastapi.responses import JSONResponse

    from .service import APIService
    from .schemas import (
        DecideResponse,
        ErrorCode,
        ErrorResponse,
        HealthResponse,
        RawSnapshotRequest,
        SnapshotRequest,
    )
    from .. import __version__
    from ..engine_core.errors import IllegalActionError, ProtocolError

    settings = settings or Settings.from_env()
    api_service = service or APIService(personality=settings.build_personality())

    app = FastAPI(
        title="Green Circle Bot API",
        description="Turn-based decision engine: send a snapshot, get one legal command back.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def run_decision(call, request):
        try:
            return call(request)
        except ProtocolError as e:
            logger.warning("Protocol error: %s", e)
            return make_error_response(
                ErrorCode.PROTOCOL_ERROR, str(e), details={"line": e.line} if e.line else None
            )
        except IllegalActionError as e:
            return make_error_response(
                ErrorCode.ILLEGAL_ACTION,
                str(e),
                status_code=409,
                details={"action": e.action, "legal_actions": e.legal_actions},
            )
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

    # =========================================================================
    # Decision Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/decide",
        response_model=DecideResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Snapshot could not be understood"},
            409: {"model": ErrorResponse, "description": "Chosen action was not legal"},
        },
        tags=["Decisions"],
        summary="Choose one legal action for a snapshot",
    )
    async def decide(request: SnapshotRequest):
        """
        Choose the bot's command for this turn.

        The returned `action` is always one of `legal_actions`.
        """
        return run_decision(api_service.decide, request)

    @app.post(
        "/api/v1/decide/raw",
        response_model=DecideResponse,
        responses={
            400: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
        },
        tags=["Decisions"],
        summary="Choose one legal action for a line-protocol snapshot",
    )
    async def decide_raw(request: RawSnapshotRequest):
        return run_decision(api_service.decide_raw, request)

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="greencircle-engine",
            version=__version__,
        )

    return app
