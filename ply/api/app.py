"""
FastAPI Application - REST API for playing and analysing games.

Endpoints:
    GET    /api/v1/games                          List registered games
    POST   /api/v1/sessions                       Create game session
    GET    /api/v1/sessions                       List active sessions
    GET    /api/v1/sessions/{id}                  Get session status
    DELETE /api/v1/sessions/{id}                  End session
    POST   /api/v1/sessions/{id}/actions          Play a legal action by index
    POST   /api/v1/sessions/{id}/bot-turn         Let the bot to act move
    POST   /api/v1/sessions/{id}/recommendation   Search statistics per action

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union
import logging
import os

from .. import __version__
from ..utils.logging import setup_logger

# Environment configuration
PLY_ENV = os.getenv("PLY_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

ERROR_STATUS = {
    "SESSION_NOT_FOUND": 404,
    "UNKNOWN_GAME": 400,
    "ILLEGAL_ACTION": 400,
    "GAME_OVER": 409,
    "VALIDATION_ERROR": 422,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        ApplyActionRequest,
        RecommendationRequest,
        # Response models
        SessionResponse,
        RecommendationResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        GameInfo,
    )

    logger = logging.getLogger(__name__)

    app = FastAPI(
        title="Ply Engine API",
        description="""
Turn-based game engine with Monte Carlo tree search opponents.

## Playing

Every session response lists the current `legal_actions` with their
index. Play one with `POST /actions`, let a bot move with
`POST /bot-turn`, or ask for search statistics with
`POST /recommendation`.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `UNKNOWN_GAME` | Game type is not registered |
| `ILLEGAL_ACTION` | Action index is not currently legal |
| `GAME_OVER` | The game has already ended |
| `VALIDATION_ERROR` | Request cannot be applied |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or APIService()
    logger.info("Ply API starting (env=%s)", PLY_ENV)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Serialize an ErrorResponse with the status code of its error code."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code.value, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games",
        response_model=list[GameInfo],
        tags=["Games"],
        summary="List registered games",
    )
    async def list_games() -> list[GameInfo]:
        """Game types accepted by `POST /api/v1/sessions`."""
        return api_service.list_games()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown game type"},
            422: {"model": ErrorResponse, "description": "Invalid bot players"},
        },
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        Players listed in `bot_players` are driven by tree search.
        """
        return respond(api_service.create_session(request))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status of a game session."""
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Play Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=SessionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Illegal action index"},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Game is over"},
        },
        tags=["Play"],
        summary="Play a legal action",
    )
    async def apply_action(
        session_id: str,
        request: ApplyActionRequest,
    ) -> Union[SessionResponse, JSONResponse]:
        """Apply the legal action at `action_index`."""
        return respond(api_service.apply_action(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/bot-turn",
        response_model=SessionResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Game is over"},
            422: {"model": ErrorResponse, "description": "Not a bot's turn"},
        },
        tags=["Play"],
        summary="Let the bot to act move",
    )
    async def bot_turn(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Run the search policy of the bot whose turn it is and apply its choice."""
        return respond(api_service.play_bot_turn(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/recommendation",
        response_model=RecommendationResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Game is over"},
        },
        tags=["Play"],
        summary="Search statistics for each legal action",
    )
    async def recommendation(
        session_id: str,
        request: RecommendationRequest,
    ) -> Union[RecommendationResponse, JSONResponse]:
        """Value sums and visit counts per legal action, best mean first."""
        return respond(api_service.recommend(session_id, request))

    # =========================================================================
    # Health Check
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
            service="ply-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Ply Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


def main():
    """Serve the API with uvicorn. Logging is configured here, not on import."""
    try:
        import uvicorn
    except ImportError:
        raise ImportError(
            "uvicorn not installed. Install with: pip install ply[server]"
        )

    setup_logger("ply")
    uvicorn.run(
        "ply.api.app:app",
        host=os.getenv("PLY_HOST", "127.0.0.1"),
        port=int(os.getenv("PLY_PORT", "8000")),
    )


# For running directly: uvicorn ply.api.app:app
app = create_app()

if __name__ == "__main__":
    main()
