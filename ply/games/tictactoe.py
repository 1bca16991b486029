"""
Tic-tac-toe - two players, deterministic, used to exercise multi-perspective search.

Cells are numbered 0..8, row by row.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core import Action, Game, GameState, IllegalActionError, Rule

X = "X"
O = "O"
EMPTY = "."

LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


@dataclass(frozen=True)
class Mark(Action):
    cell: int

    @property
    def name(self) -> str:
        return f"Mark {self.cell}"


@dataclass
class TicTacToeState(GameState):
    player: str = X
    players: list[str] = field(default_factory=lambda: [X, O])
    board: list[str] = field(default_factory=lambda: [EMPTY] * 9)

    @classmethod
    def from_rows(cls, rows: str, player: str = X) -> TicTacToeState:
        """Build a position from 'XO.|...|...' style text."""
        cells = [c for c in rows if c not in "|\n "]
        if len(cells) != 9:
            raise ValueError(f"Expected 9 cells, got {len(cells)}")
        return cls(player=player, board=cells)

    def empty_cells(self) -> list[int]:
        return [i for i, c in enumerate(self.board) if c == EMPTY]

    def winner(self) -> str | None:
        for a, b, c in LINES:
            if self.board[a] != EMPTY and self.board[a] == self.board[b] == self.board[c]:
                return self.board[a]
        return None

    def describe(self) -> str:
        rows = ["".join(self.board[r * 3:r * 3 + 3]) for r in range(3)]
        return "|".join(rows) + " " + super().describe()


class TicTacToeGame(Game):
    name = "tictactoe"

    def new_state(self) -> TicTacToeState:
        return TicTacToeState()

    def rules(self) -> list[Rule]:
        return [
            Rule(
                condition=lambda state: not state.ended,
                generate=lambda state: [Mark(cell) for cell in state.empty_cells()],
                name="mark",
            )
        ]

    def apply(self, state: TicTacToeState, action: Action) -> list[str]:
        if not isinstance(action, Mark):
            raise IllegalActionError(action, reason=f"Unknown tic-tac-toe action: {action}")
        if state.board[action.cell] != EMPTY:
            raise IllegalActionError(action, reason=f"Cell {action.cell} is taken")

        mover = state.player
        state.board[action.cell] = mover
        log = [f"{mover} marks {action.cell}"]

        winner = state.winner()
        if winner is not None:
            state.end(victors=[winner], losers=[p for p in state.players if p != winner])
            log.append(f"{winner} wins")
        elif not state.empty_cells():
            state.end()
            log.append("Draw")
        else:
            state.advance_player()
        return log
