"""
Game State - Generic state container that each game specializes.

Design principles:
- Fully visible: the search engine sees everything
- Copyable: rollouts and lookahead work on clones, never on the caller's state
- Comparable for equivalence: canonical() drops cosmetic identity
- Game-agnostic: concrete games inherit from this
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field, fields
from typing import Any, Hashable


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Every game exposes:
    - player: whose turn it is
    - players: everyone taking part, in turn order
    - ended / victory_for / defeat_for: the terminal verdict

    All state changes go through the reducer.
    """
    player: Any = None
    players: list[Any] = field(default_factory=list)

    ended: bool = False
    victory_for: list[Any] = field(default_factory=list)
    defeat_for: list[Any] = field(default_factory=list)

    def end(self, victors: list[Any] | None = None, losers: list[Any] | None = None):
        """Mark the game as over. Both lists may be empty (a draw)."""
        self.ended = True
        self.victory_for = list(victors or [])
        self.defeat_for = list(losers or [])

    def next_player(self) -> Any:
        """The player after the current one in turn order."""
        if not self.players:
            return self.player
        idx = self.players.index(self.player)
        return self.players[(idx + 1) % len(self.players)]

    def advance_player(self):
        self.player = self.next_player()

    def canonical(self) -> Hashable:
        """
        Hashable summary used for equivalence.

        Two states are equivalent iff their canonical forms are equal.
        The default covers every dataclass field; games with
        interchangeable pieces override this to forget which piece is which.
        """
        return tuple(_freeze(getattr(self, f.name)) for f in fields(self))

    def equivalent(self, other: GameState) -> bool:
        return self.canonical() == other.canonical()

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)

    def describe(self) -> str:
        """Human-readable rendering."""
        if self.ended:
            if self.victory_for:
                return f"Game over. Winner: {', '.join(map(str, self.victory_for))}"
            return "Game over. Draw"
        return f"{self.player} to play"

    def __str__(self) -> str:
        return self.describe()


def _freeze(value: Any) -> Hashable:
    """Turn nested lists/dicts/sets into hashable tuples."""
    if isinstance(value, dict):
        return tuple(sorted((_freeze(k), _freeze(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value
