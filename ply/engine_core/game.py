"""
Game Definition Contract - What a client game must provide.

A game supplies:
1. new_state(): the starting GameState
2. rules(): the ordered list of Rules producing legal actions
3. apply(state, action): the effect of one atomic action, in place

Everything else (legal-action union, deduplication, sequences,
lookahead chaining, validation) is generic and lives here or in the
engine modules.

Randomness: a game owns a random.Random as its only nondeterminism
point. Actions such as "roll dice" draw from game.rng; tests replace it
with a seeded or scripted source.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from typing import Hashable

from .action import Action
from .action_generator import ActionGenerator
from .reducer import Reducer
from .rules import Rule, append
from .state import GameState


class Game(ABC):
    """
    Abstract base class for games.

    Implementations keep all game logic in rules and apply(); states and
    actions stay plain data.
    """

    name: str = "game"

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        self.rng = rng or random.Random(seed)

    @abstractmethod
    def new_state(self) -> GameState:
        """Create the starting state."""

    @abstractmethod
    def rules(self) -> list[Rule]:
        """The rules, in declaration order."""

    @abstractmethod
    def apply(self, state: GameState, action: Action) -> list[str] | None:
        """
        Apply one atomic action to state, mutating it.

        Returns human-readable log lines. Sequences never reach this
        method. Unknown actions must raise IllegalActionError.
        """

    def canonicalize(self, state: GameState) -> Hashable:
        """
        Canonical form used to decide whether two outcomes are the same.

        Defaults to state.canonical(). Override to fold in game-level
        knowledge, e.g. treating interchangeable pieces as identical.
        """
        return state.canonical()

    def equivalent(self, lhs: GameState, rhs: GameState) -> bool:
        return self.canonicalize(lhs) == self.canonicalize(rhs)

    def allowed_actions(self, state: GameState) -> list[Action]:
        """Legal actions for the player to act, one per distinct outcome."""
        return ActionGenerator(game=self).generate(state)

    def reducer(self, validate: bool = True) -> Reducer:
        return Reducer(game=self, validate=validate)

    def reduce(self, state: GameState, action: Action) -> GameState:
        """Validated, pure transition."""
        return self.reducer().reduce(state, action)

    def append(self, first: Rule, second: Rule) -> Rule:
        """Lookahead chaining bound to this game's transition."""
        return append(first, second, self.reducer(validate=False).reduce)

    def __str__(self) -> str:
        return self.name
