"""
Can't Stop - dice race where each turn is a gamble on continuing.
"""

from .components import (
    COLUMN_HEIGHTS,
    AssignDicePair,
    Bust,
    ClaimVictory,
    Pass,
    ProgressColumn,
    RollDice,
)
from .state import CantStopState
from .game import CantStopGame

__all__ = [
    "COLUMN_HEIGHTS",
    "AssignDicePair",
    "Bust",
    "ClaimVictory",
    "Pass",
    "ProgressColumn",
    "RollDice",
    "CantStopState",
    "CantStopGame",
]
