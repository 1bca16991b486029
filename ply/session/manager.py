"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Client picks a registered game type → session created with a fresh state
2. During game:
   - Human players submit an index into the current legal actions
   - Engine validates and updates the canonical state
   - Bot players move on request, through their policy
   - Any player may ask for a search recommendation
3. Game ends → session stays readable until ended or cleaned up

PERSISTENCE RULES:
- In-memory only
- A session's state is always the initial state reduced by its history
"""

from __future__ import annotations
import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..bots import BotDecision, BotPolicy, SearchPolicy
from ..config import SearchConfig
from ..engine_core import Action, ActionResult, Game, GameState, IllegalActionError
from ..games import create_game
from ..search import OpenLoopSearch, Recommendation, TreeSearch

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game reached a terminal state
    ABANDONED = "abandoned"  # Ended before the game was over


@dataclass
class Session:
    """
    One play-through of a game.

    Contains:
    - The game (rules, effects, randomness)
    - Current canonical game state
    - Bots for automated players
    - Applied actions and their effect log
    """
    session_id: str
    game_type: str
    game: Game
    game_state: GameState
    created_at: float

    status: SessionState = SessionState.ACTIVE
    bots: dict[Any, BotPolicy] = field(default_factory=dict)
    search_config: SearchConfig = field(default_factory=SearchConfig)

    history: list[Action] = field(default_factory=list)
    log: list[str] = field(default_factory=list)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.status is SessionState.ACTIVE

    def is_bot_turn(self) -> bool:
        return not self.game_state.ended and self.game_state.player in self.bots

    def legal_actions(self) -> list[Action]:
        return self.game.allowed_actions(self.game_state)

    def apply(self, action_index: int) -> ActionResult:
        """
        Apply the legal action at action_index.

        Raises IllegalActionError if the game is over or the index is
        outside the current legal actions.
        """
        legal = self.legal_actions()
        if not 0 <= action_index < len(legal):
            raise IllegalActionError(
                action_index,
                reason=f"Action index {action_index} out of range (0-{len(legal) - 1})"
                if legal else "Game is over - no actions available",
            )
        return self._apply(legal[action_index])

    def _apply(self, action: Action) -> ActionResult:
        result = self.game.reducer().apply(self.game_state, action)
        self.game_state = result.new_state
        self.history.append(action)
        self.log.extend(result.log)
        if self.game_state.ended:
            self.status = SessionState.GAME_OVER
            logger.info("Session %s finished: %s", self.session_id, self.game_state.describe())
        return result

    def recommend(
        self,
        iterations: int | None = None,
        open_loop: bool = True,
    ) -> Recommendation:
        """Search statistics per legal action for the player to act."""
        search_cls = OpenLoopSearch if open_loop else TreeSearch
        search = search_cls(self.game, self.game_state, config=self.search_config)
        return search.recommendation(iterations=iterations)

    def play_bot_turn(self) -> BotDecision:
        """
        Let the bot owning the current turn pick and apply an action.

        Raises IllegalActionError when the game is over or the player
        to act is not a bot.
        """
        if self.game_state.ended:
            raise IllegalActionError(None, reason="Game is over - no bot turn to play")
        player = self.game_state.player
        bot = self.bots.get(player)
        if bot is None:
            raise IllegalActionError(None, reason=f"{player} is not a bot player")

        decision = bot.select_action(self.game_state, self.game, self.legal_actions())
        logger.debug("Bot %s chose %s (%s)", player, decision.action, decision.explanation)
        self._apply(decision.action)
        return decision


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions for registered games
    - Track active sessions
    - Clean up completed sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        game_type: str,
        bot_players: list[Any] | None = None,
        search_config: SearchConfig | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            game_type: Key of the GAMES registry
            bot_players: Players driven by a SearchPolicy
            search_config: Settings for recommendations and bots
            seed: Seed for the game's randomness

        Returns:
            New Session at the game's starting state

        Raises:
            KeyError: unknown game type
            ValueError: a bot player that is not in the game
        """
        game = create_game(game_type, seed=seed)
        state = game.new_state()
        search_config = search_config or SearchConfig()

        bots = {}
        for player in bot_players or []:
            if player not in state.players:
                raise ValueError(f"Unknown player for {game_type}: {player}")
            bots[player] = SearchPolicy(config=search_config)

        session = Session(
            session_id=str(uuid.uuid4()),
            game_type=game_type,
            game=game,
            game_state=state,
            created_at=time.time(),
            bots=bots,
            search_config=search_config,
        )

        self._sessions[session.session_id] = session
        logger.info("Created %s session %s (bots: %s)", game_type, session.session_id, list(bots))
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.is_active():
            session.status = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove sessions older than max_age that are no longer active.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
