"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Manages sessions
3. Maps engine errors to structured ErrorResponses
4. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    ApplyActionRequest,
    RecommendationRequest,
    # Responses
    SessionResponse,
    RecommendationResponse,
    ErrorResponse,
    # Shared
    ActionInfo,
    ActionStats,
    GameInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..config import SearchConfig
from ..engine_core import ActionResult, IllegalActionError
from ..games import GAMES
from ..search import best_actions, mean_value
from ..session import Session, SessionManager

logger = logging.getLogger(__name__)

# Per-request search limits for bot turns and recommendations.
SERVICE_SEARCH_DEFAULTS = {"iterations": 200, "time_budget": 2.0}


def default_search_config(environ=None) -> SearchConfig:
    """Service search settings; PLY_SEARCH_* variables still take precedence."""
    return SearchConfig.from_env(environ, defaults=SERVICE_SEARCH_DEFAULTS)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(request)

        # Play
        service.apply_action(session_id, ApplyActionRequest(action_index=0))
        service.play_bot_turn(session_id)

        # Ask for advice
        service.recommend(session_id, RecommendationRequest(iterations=500))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    search_config: SearchConfig = field(default_factory=default_search_config)

    def list_games(self) -> list[GameInfo]:
        """Registered game types with their players."""
        games = []
        for game_type, factory in GAMES.items():
            state = factory().new_state()
            games.append(GameInfo(game_type=game_type, players=[str(p) for p in state.players]))
        return games

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """
        Create a new game session.
        """
        if request.game_type not in GAMES:
            return ErrorResponse(
                error=f"Unknown game type: {request.game_type}",
                error_code=ErrorCode.UNKNOWN_GAME,
                details={"available": sorted(GAMES)},
            )

        overrides = {}
        if request.iterations is not None:
            overrides["iterations"] = request.iterations
        if request.exploration_constant is not None:
            overrides["exploration_constant"] = request.exploration_constant
        if request.random_seed is not None:
            overrides["seed"] = request.random_seed
        search_config = self.search_config.model_copy(update=overrides)

        try:
            session = self.session_manager.create_session(
                game_type=request.game_type,
                bot_players=request.bot_players,
                search_config=search_config,
                seed=request.random_seed,
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get session status.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def apply_action(
        self,
        session_id: str,
        request: ApplyActionRequest,
    ) -> SessionResponse | ErrorResponse:
        """
        Apply the legal action at request.action_index.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        if session.game_state.ended:
            return self._game_over(session_id)

        try:
            result = session.apply(request.action_index)
        except IllegalActionError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.ILLEGAL_ACTION,
                details={"action_index": request.action_index},
            )
        return self._session_to_response(session, result)

    def play_bot_turn(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Let the bot whose turn it is move.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        if session.game_state.ended:
            return self._game_over(session_id)
        if not session.is_bot_turn():
            return ErrorResponse(
                error=f"{session.game_state.player} is not a bot player",
                error_code=ErrorCode.VALIDATION_ERROR,
            )

        before = len(session.log)
        session.play_bot_turn()
        return self._session_to_response(session, log=session.log[before:])

    def recommend(
        self,
        session_id: str,
        request: RecommendationRequest,
    ) -> RecommendationResponse | ErrorResponse:
        """
        Search statistics for each legal action, best first.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        if session.game_state.ended:
            return self._game_over(session_id)

        legal = session.legal_actions()
        recommendation = session.recommend(
            iterations=request.iterations,
            open_loop=request.open_loop,
        )

        stats = []
        for index, action in enumerate(legal):
            value, visits = recommendation.get(action, (0.0, 0.0))
            stats.append(
                ActionStats(
                    index=index,
                    name=str(action),
                    value=value,
                    visits=visits,
                    mean_value=mean_value(value, visits),
                )
            )
        stats.sort(key=lambda s: s.mean_value, reverse=True)

        best = best_actions(recommendation)
        return RecommendationResponse(
            session_id=session_id,
            player=str(session.game_state.player),
            iterations=request.iterations,
            actions=stats,
            best_action_index=legal.index(best[0]) if best else None,
        )

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a game session.
        """
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """
        List active session IDs.
        """
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )

    def _game_over(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error="Game is over",
            error_code=ErrorCode.GAME_OVER,
            details={"session_id": session_id},
        )

    def _session_to_response(
        self,
        session: Session,
        result: ActionResult | None = None,
        log: list[str] | None = None,
    ) -> SessionResponse:
        """Convert Session to SessionResponse."""
        state = session.game_state
        if log is None:
            log = result.log if result else []

        return SessionResponse(
            session_id=session.session_id,
            status=self._session_status(session),
            game_type=session.game_type,
            players=[str(p) for p in state.players],
            bot_players=[str(p) for p in session.bots],
            current_player=None if state.ended else str(state.player),
            legal_actions=[
                ActionInfo(index=i, name=str(action))
                for i, action in enumerate(session.legal_actions())
            ],
            winners=[str(p) for p in state.victory_for],
            losers=[str(p) for p in state.defeat_for],
            description=state.describe(),
            log=list(log),
            turn_number=len(session.history),
            created_at=session.created_at,
        )

    def _session_status(self, session: Session) -> SessionStatus:
        """Convert session state to API status."""
        if session.game_state.ended:
            return SessionStatus.GAME_OVER
        if session.is_bot_turn():
            return SessionStatus.BOT_TURN
        return SessionStatus.YOUR_TURN
