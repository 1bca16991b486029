"""
Pytest fixtures for Ply tests.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

import pytest

from ..config import SearchConfig
from ..engine_core import Action, Game, GameState, IllegalActionError, Rule
from ..games.bandit import BanditGame
from ..games.cant_stop import CantStopGame
from ..games.tictactoe import TicTacToeGame


# =============================================================================
# Corridor - one real decision followed by forced steps
# =============================================================================

@dataclass(frozen=True)
class Go(Action):
    direction: str

    @property
    def name(self) -> str:
        return f"Go {self.direction}"


@dataclass(frozen=True)
class Step(Action):
    pass


@dataclass
class CorridorState(GameState):
    player: str = "walker"
    players: list[str] = field(default_factory=lambda: ["walker"])
    direction: Optional[str] = None
    steps: int = 0


class CorridorGame(Game):
    """Choose left (wins) or right (loses), then take `length` forced steps."""

    name = "corridor"

    def __init__(self, length: int = 3, rng=None, seed=None):
        super().__init__(rng=rng, seed=seed)
        self.length = length

    def new_state(self) -> CorridorState:
        return CorridorState()

    def rules(self) -> list[Rule]:
        return [
            Rule(
                condition=lambda state: state.direction is None,
                generate=lambda state: [Go("left"), Go("right")],
                name="choose",
            ),
            Rule(
                condition=lambda state: state.direction is not None,
                generate=lambda state: [Step()],
                name="step",
            ),
        ]

    def apply(self, state: CorridorState, action: Action) -> list[str]:
        if isinstance(action, Go):
            state.direction = action.direction
            return [f"went {action.direction}"]
        if isinstance(action, Step):
            state.steps += 1
            if state.steps >= self.length:
                if state.direction == "left":
                    state.end(victors=[state.player])
                else:
                    state.end(losers=[state.player])
            return ["step"]
        raise IllegalActionError(action)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def bandit() -> BanditGame:
    """Arm A always pays, arm B never does."""
    return BanditGame({"A": 1.0, "B": 0.0}, seed=7)


@pytest.fixture
def tictactoe() -> TicTacToeGame:
    return TicTacToeGame(seed=7)


@pytest.fixture
def cant_stop() -> CantStopGame:
    return CantStopGame(seed=7)


@pytest.fixture
def corridor() -> CorridorGame:
    return CorridorGame()


@pytest.fixture
def search_config() -> SearchConfig:
    """Small, reproducible search settings."""
    return SearchConfig(iterations=10, exploration_constant=1.0, seed=42)
