"""
Can't Stop components - columns, dice, markers and actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations

from ...engine_core import Action

# Column number -> number of spaces. Column 0 means "off the board".
OFF_BOARD = 0
COLUMN_HEIGHTS: dict[int, int] = {
    2: 3, 3: 5, 4: 7, 5: 9, 6: 11, 7: 13,
    8: 11, 9: 9, 10: 7, 11: 5, 12: 3,
}
COLUMNS = tuple(COLUMN_HEIGHTS)

NUM_DICE = 4
NUM_WHITE_MARKERS = 3
COLUMNS_TO_WIN = 3

UNROLLED = 0  # die face meaning "not rolled yet" or "already assigned"
DIE_FACES = (1, 2, 3, 4, 5, 6)


def player_names(num_players: int) -> list[str]:
    return [f"player{i + 1}" for i in range(num_players)]


def dice_pairs(dice: list[int]) -> list[tuple[int, int]]:
    """Index pairs (i, j), i < j, over rolled dice."""
    rolled = [i for i, face in enumerate(dice) if face != UNROLLED]
    return list(combinations(rolled, 2))


@dataclass(frozen=True)
class RollDice(Action):
    @property
    def name(self) -> str:
        return "Roll dice"


@dataclass(frozen=True)
class Pass(Action):
    @property
    def name(self) -> str:
        return "Pass"


@dataclass(frozen=True)
class Bust(Action):
    @property
    def name(self) -> str:
        return "Busted: Pass"


@dataclass(frozen=True)
class ClaimVictory(Action):
    @property
    def name(self) -> str:
        return "Claim victory!"


@dataclass(frozen=True)
class AssignDicePair(Action):
    """Consume two dice; their sum becomes the assigned column."""
    first: int
    second: int

    @property
    def name(self) -> str:
        return ""


@dataclass(frozen=True)
class ProgressColumn(Action):
    """Advance a white marker one space in column."""
    column: int

    @property
    def name(self) -> str:
        return str(self.column)
