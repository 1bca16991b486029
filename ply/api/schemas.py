"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Actions are addressed by their index in the current legal action list,
which is part of every SessionResponse.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- UNKNOWN_GAME: Game type is not registered
- ILLEGAL_ACTION: Action index is not in the current legal actions
- GAME_OVER: The game has already ended
- VALIDATION_ERROR: Request is well-formed but not acceptable
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    YOUR_TURN = "your_turn"
    BOT_TURN = "bot_turn"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_GAME = "UNKNOWN_GAME"
    ILLEGAL_ACTION = "ILLEGAL_ACTION"
    GAME_OVER = "GAME_OVER"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ActionInfo(BaseModel):
    """A legal action, addressed by index."""
    index: int = Field(..., ge=0, description="Position in the legal action list")
    name: str = Field(..., description="Human-readable action name")

    model_config = {"from_attributes": True}


class ActionStats(BaseModel):
    """Search statistics for one legal action."""
    index: int = Field(..., ge=0)
    name: str
    value: float = Field(..., description="Sum of rollout outcomes through this action")
    visits: float = Field(..., ge=0.0)
    mean_value: float = Field(..., description="value / visits, 0 visits counting as 1")


class GameInfo(BaseModel):
    """A registered game type."""
    game_type: str
    players: list[str] = Field(default_factory=list)


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    game_type: str = Field("tictactoe", description="Registered game type")
    bot_players: list[str] = Field(
        default_factory=list, description="Players driven by tree search"
    )
    iterations: Optional[int] = Field(
        None, ge=0, description="Search iterations per bot decision"
    )
    exploration_constant: Optional[float] = Field(None, ge=0.0)
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")


class ApplyActionRequest(BaseModel):
    """Request to play one legal action."""
    action_index: int = Field(..., ge=0, description="Index into the legal actions")


class RecommendationRequest(BaseModel):
    """Request for search statistics from the current state."""
    iterations: int = Field(1000, ge=0, le=1_000_000)
    open_loop: bool = Field(True, description="Open-loop (stochastic-safe) or closed-loop search")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    game_type: str
    players: list[str] = Field(default_factory=list)
    bot_players: list[str] = Field(default_factory=list)
    current_player: Optional[str] = None
    legal_actions: list[ActionInfo] = Field(default_factory=list)
    winners: list[str] = Field(default_factory=list)
    losers: list[str] = Field(default_factory=list)
    description: str = Field("", description="Rendered game state")
    log: list[str] = Field(default_factory=list, description="Effect log of the last move")
    turn_number: int = Field(0, description="Actions applied so far")
    created_at: float = 0.0
    api_version: str = "v1"


class RecommendationResponse(BaseModel):
    """Search statistics for every legal action, best first."""
    session_id: str
    player: Optional[str] = None
    iterations: int
    actions: list[ActionStats] = Field(default_factory=list)
    best_action_index: Optional[int] = None
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
