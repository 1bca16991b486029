"""
Bandit - a one-decision game with known win probabilities.

The single player pulls one arm; the pull draws from game.rng and ends
the game in victory or defeat. With probabilities 1.0 and 0.0 the arms
are deterministic; with anything in between they are a noisy benchmark
for search convergence.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from ..engine_core import Action, Game, GameState, IllegalActionError, Rule

SOLO = "player"


@dataclass(frozen=True)
class Pull(Action):
    arm: str

    @property
    def name(self) -> str:
        return f"Pull {self.arm}"


@dataclass
class BanditState(GameState):
    player: str = SOLO
    players: list[str] = field(default_factory=lambda: [SOLO])
    pulled: Optional[str] = None

    def describe(self) -> str:
        if self.pulled is None:
            return "Choose an arm"
        return f"Pulled {self.pulled}: {'won' if self.victory_for else 'lost'}"


class BanditGame(Game):
    """Arms named by the keys of win_probabilities, offered in that order."""

    name = "bandit"

    def __init__(self, win_probabilities: dict[str, float] | None = None, rng=None, seed=None):
        super().__init__(rng=rng, seed=seed)
        self.win_probabilities = dict(win_probabilities or {"A": 1.0, "B": 0.0})
        for arm, p in self.win_probabilities.items():
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"Win probability for {arm} must be in [0, 1], got {p}")

    def new_state(self) -> BanditState:
        return BanditState()

    def rules(self) -> list[Rule]:
        return [
            Rule(
                condition=lambda state: state.pulled is None,
                generate=lambda state: [Pull(arm) for arm in self.win_probabilities],
                name="pull",
            )
        ]

    def apply(self, state: BanditState, action: Action) -> list[str]:
        if not isinstance(action, Pull) or action.arm not in self.win_probabilities:
            raise IllegalActionError(action, reason=f"Unknown bandit action: {action}")

        state.pulled = action.arm
        if self.rng.random() < self.win_probabilities[action.arm]:
            state.end(victors=[state.player])
            return [f"{action.arm} paid out"]
        state.end(losers=[state.player])
        return [f"{action.arm} did not pay out"]
