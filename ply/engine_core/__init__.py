"""
Engine Core - Game contract, rule composition and deterministic reduction.

The engine is the runtime that:
1. Takes a Game (state factory, rules, atomic effects)
2. Manages GameState
3. Generates legal actions from composed rules, deduplicated by outcome
4. Applies actions (atomic or Sequence) via the reducer
"""

from .state import GameState
from .action import Action, Sequence, sequence, ActionResult
from .rules import Rule, append
from .errors import EngineError, IllegalActionError
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions, is_legal, remove_equivalent
from .game import Game

__all__ = [
    "GameState",
    "Action",
    "Sequence",
    "sequence",
    "ActionResult",
    "Rule",
    "append",
    "EngineError",
    "IllegalActionError",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
    "remove_equivalent",
    "Game",
]
