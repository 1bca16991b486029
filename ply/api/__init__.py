"""
API Module - REST interface to the engine.

Exposes games, sessions, bots and search recommendations over HTTP.
Clients:
1. Pick a registered game and create a session
2. Play legal actions by index
3. Let bot players move
4. Ask for search statistics on the current position

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    ApplyActionRequest,
    RecommendationRequest,
    # Responses
    SessionResponse,
    RecommendationResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    ActionInfo,
    ActionStats,
    GameInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "ApplyActionRequest",
    "RecommendationRequest",
    # Responses
    "SessionResponse",
    "RecommendationResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "ActionInfo",
    "ActionStats",
    "GameInfo",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
