"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when a client starts a game
- Holds the current game state and history
- Applies human actions and bot turns
- Answers search recommendations
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
