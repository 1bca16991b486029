"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through it.

Design principles:
- Pure at the boundary: (state, action) -> new_state, input untouched
- Validates before applying; illegal actions raise, they never
  silently produce a state
- Sequences apply their sub-actions left to right
- Atomic effects are delegated to the game
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import Action, ActionResult, Sequence
from .errors import IllegalActionError

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in the GameState.
    The game provides the atomic effects and the legality check.
    """
    game: Game
    validate: bool = True

    def apply(self, state, action: Action) -> ActionResult:
        """
        Apply an action to a copy of the game state.

        Returns ActionResult with the new state and the effect log.
        Raises IllegalActionError if the action is not allowed.
        """
        if self.validate:
            self._validate_action(state, action)

        new_state = state.clone()
        log = self.reduce_in_place(new_state, action)
        return ActionResult(new_state=new_state, action=action, log=log)

    def reduce(self, state, action: Action):
        """Apply an action and return only the new state."""
        return self.apply(state, action).new_state

    def reduce_in_place(self, state, action: Action) -> list[str]:
        """
        Mutate state by action without validation.

        Only for private copies whose actions came from allowed_actions,
        e.g. inside search and lookahead.
        """
        if isinstance(action, Sequence):
            log = []
            for sub_action in action.actions:
                log.extend(self.reduce_in_place(state, sub_action))
            return log
        return list(self.game.apply(state, action) or [])

    def _validate_action(self, state, action: Action):
        """Raise unless action is in the legal set of state."""
        if state.ended:
            raise IllegalActionError(action, reason=f"Game is over - {action} not allowed")

        legal = self.game.allowed_actions(state)
        if action not in legal:
            logger.debug("Rejected %s; legal: %s", action, [str(a) for a in legal])
            raise IllegalActionError(action, state)


def apply_action(game: Game, state, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    return Reducer(game=game).apply(state, action)
