"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Search trees to enumerate possible moves
2. Sessions to show available actions
3. Validation (is this action in legal_actions?)

Design: the legal set is the union, in rule-declaration order, of every
applicable rule's actions, with actions leading to equivalent states
collapsed to their first representative.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import Action

if TYPE_CHECKING:
    from .game import Game


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current game state.

    Uses the game's rules to determine what is available and the
    game's equivalence to drop duplicate outcomes.
    """
    game: Game
    deduplicate: bool = True

    def generate(self, state) -> list[Action]:
        """
        Generate all legal actions for the player to act.

        Returns a list of fully-specified Action objects.
        """
        if state.ended:
            return []

        actions = []
        for rule in self.game.rules():
            if rule.condition(state):
                actions.extend(rule.generate(state))

        if not self.deduplicate:
            return actions
        return remove_equivalent(self.game, state, actions)


def remove_equivalent(game: Game, state, actions: list[Action]) -> list[Action]:
    """
    Keep one action per class of equivalent outcomes, in discovery order.

    Each candidate is reduced on a private copy of state; outcomes are
    compared through game.canonicalize().
    """
    reducer = game.reducer(validate=False)
    kept: list[Action] = []
    seen = set()
    for action in actions:
        if action in kept:
            continue
        outcome = game.canonicalize(reducer.reduce(state, action))
        if outcome in seen:
            continue
        seen.add(outcome)
        kept.append(action)
    return kept


def legal_actions(game: Game, state) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator(game=game).generate(state)


def is_legal(game: Game, state, action: Action) -> bool:
    """Check if a specific action is legal."""
    return action in legal_actions(game, state)
