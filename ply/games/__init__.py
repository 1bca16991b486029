"""
Games - Concrete games built on the engine.

Each game is a Game subclass; GAMES maps a game type name to a factory
accepting rng/seed keyword arguments.
"""

from typing import Callable

from ..engine_core import Game
from .bandit import BanditGame
from .tictactoe import TicTacToeGame
from .cant_stop import CantStopGame

GAMES: dict[str, Callable[..., Game]] = {
    BanditGame.name: BanditGame,
    TicTacToeGame.name: TicTacToeGame,
    CantStopGame.name: CantStopGame,
}


def create_game(game_type: str, **kwargs) -> Game:
    """Instantiate a registered game. Raises KeyError for unknown types."""
    if game_type not in GAMES:
        raise KeyError(f"Unknown game type: {game_type}")
    return GAMES[game_type](**kwargs)


__all__ = ["GAMES", "create_game", "BanditGame", "TicTacToeGame", "CantStopGame"]
