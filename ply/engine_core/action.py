"""
Action System - Actions, composite sequences, and results.

Actions are:
1. Atomic moves defined by each game (frozen dataclasses, hashable)
2. Sequences of sub-actions, so one rule can offer a multi-step
   consequence as a single selectable unit

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Action:
    """
    Base class for game actions.

    Subclasses must stay frozen dataclasses: search trees key
    children by action, so actions need value equality and a hash.
    """

    @property
    def name(self) -> str:
        """Display name. An empty name is skipped inside a Sequence."""
        return type(self).__name__

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Sequence(Action):
    """An ordered list of actions applied left to right."""
    actions: tuple[Action, ...] = ()

    @property
    def name(self) -> str:
        return " and ".join(a.name for a in self.actions if a.name)

    def flatten(self) -> list[Action]:
        """All atomic actions, depth first."""
        flat = []
        for action in self.actions:
            if isinstance(action, Sequence):
                flat.extend(action.flatten())
            else:
                flat.append(action)
        return flat


def sequence(*actions: Action) -> Action:
    """Factory for a Sequence. A single action is returned as-is."""
    if len(actions) == 1:
        return actions[0]
    return Sequence(actions=tuple(actions))


@dataclass
class ActionResult:
    """
    Result of applying an action.

    The log is a side channel of human-readable effect descriptions;
    it is never part of the state.
    """
    new_state: Any
    action: Action
    log: list[str] = field(default_factory=list)
