"""
Can't Stop state.

White markers are interchangeable: which of the three sits in a column
carries no meaning. canonical() therefore compares them as a sorted
multiset of positions, and leaves out the dice, which are transient
between moves.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Hashable, Optional

from ...engine_core import GameState
from .components import (
    COLUMN_HEIGHTS,
    COLUMNS,
    COLUMNS_TO_WIN,
    NUM_DICE,
    NUM_WHITE_MARKERS,
    OFF_BOARD,
    UNROLLED,
    player_names,
)

Position = tuple[int, int]  # (column, row)


@dataclass
class CantStopState(GameState):
    player: str = "player1"
    players: list[str] = field(default_factory=lambda: player_names(2))

    dice: list[int] = field(default_factory=lambda: [UNROLLED] * NUM_DICE)
    assigned_column: int = OFF_BOARD
    whites: list[Position] = field(default_factory=lambda: [(OFF_BOARD, 0)] * NUM_WHITE_MARKERS)
    # player -> column -> saved row
    progress: dict[str, dict[int, int]] = field(default_factory=dict)

    def __post_init__(self):
        for p in self.players:
            self.progress.setdefault(p, {col: 0 for col in COLUMNS})

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def rolled_dice(self) -> list[int]:
        """Indices of dice showing a face."""
        return [i for i, face in enumerate(self.dice) if face != UNROLLED]

    def white_in(self, column: int) -> Optional[int]:
        """Index of the white marker in column (OFF_BOARD for a spare one)."""
        for i, (col, _) in enumerate(self.whites):
            if col == column:
                return i
        return None

    def farthest_along(self, column: int, player: str | None = None) -> int:
        """Player's high-water mark in column, counting this turn's white marker."""
        player = self.player if player is None else player
        saved = self.progress[player].get(column, 0)
        white = self.white_in(column) if player == self.player else None
        white_row = self.whites[white][1] if white is not None else 0
        return max(saved, white_row)

    def column_is_won(self, column: int) -> bool:
        """Someone's saved progress sits at the top of column."""
        height = COLUMN_HEIGHTS.get(column)
        if height is None:
            return False
        return any(rows.get(column, 0) >= height for rows in self.progress.values())

    def won_columns(self, player: str) -> list[int]:
        return [col for col, row in self.progress[player].items() if row >= COLUMN_HEIGHTS[col]]

    def topped_columns(self) -> set[int]:
        """Columns the current player tops, saved or with a white marker."""
        return {
            col for col in COLUMNS
            if self.farthest_along(col) >= COLUMN_HEIGHTS[col]
        }

    def win_achieved(self) -> bool:
        return len(self.topped_columns()) >= COLUMNS_TO_WIN

    # -------------------------------------------------------------------------
    # Mutations (used by the game's apply)
    # -------------------------------------------------------------------------

    def clear_dice(self):
        self.dice = [UNROLLED] * NUM_DICE

    def clear_whites(self):
        self.whites = [(OFF_BOARD, 0)] * NUM_WHITE_MARKERS

    def save_place(self):
        """Turn this turn's white markers into saved progress."""
        for col, row in self.whites:
            if col != OFF_BOARD:
                self.progress[self.player][col] = max(self.progress[self.player][col], row)
        self.clear_whites()

    # -------------------------------------------------------------------------
    # Equivalence and rendering
    # -------------------------------------------------------------------------

    def canonical(self) -> Hashable:
        return (
            self.ended,
            self.player,
            tuple(self.players),
            tuple(sorted(self.whites)),
            self.assigned_column,
            tuple(
                (p, tuple(sorted(self.progress[p].items())))
                for p in self.players
            ),
            tuple(self.victory_for),
            tuple(self.defeat_for),
        )

    def describe(self) -> str:
        dice = " ".join(str(face) if face != UNROLLED else "-" for face in self.dice)
        whites = ", ".join(f"{col}:{row}" for col, row in sorted(self.whites) if col != OFF_BOARD)
        lines = [f"Dice: {dice}", f"Whites: {whites or 'none'}"]
        for p in self.players:
            saved = ", ".join(f"{col}:{row}" for col, row in self.progress[p].items() if row)
            lines.append(f"{p}: {saved or 'nothing saved'}")
        lines.append(super().describe())
        return "\n".join(lines)
