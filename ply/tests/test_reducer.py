"""
Tests for the reducer (state transitions).

Tests:
- Action application
- Sequences and their associativity
- Validation
- Error handling
"""

import pytest

from ..engine_core import EngineError, IllegalActionError, Reducer, Sequence, apply_action, sequence
from ..engine_core.action import Action
from ..games.tictactoe import Mark, TicTacToeState, X, O


class TestApply:
    """Tests for validated application."""

    def test_apply_returns_new_state(self, tictactoe):
        """Applying leaves the input untouched."""
        state = tictactoe.new_state()
        result = apply_action(tictactoe, state, Mark(4))

        assert result.new_state.board[4] == X
        assert result.new_state.player == O
        assert state.board[4] == "."
        assert state.player == X

    def test_apply_collects_log(self, tictactoe):
        result = apply_action(tictactoe, tictactoe.new_state(), Mark(4))
        assert result.log == ["X marks 4"]
        assert result.action == Mark(4)

    def test_deterministic(self, tictactoe):
        """Same state and action give equal results."""
        state = TicTacToeState.from_rows("X..|.O.|...", player=X)
        first = tictactoe.reduce(state, Mark(8))
        second = tictactoe.reduce(state, Mark(8))
        assert first.canonical() == second.canonical()

    def test_winning_move_ends_game(self, tictactoe):
        state = TicTacToeState.from_rows("XX.|OO.|...", player=X)
        new_state = tictactoe.reduce(state, Mark(2))

        assert new_state.ended
        assert new_state.victory_for == [X]
        assert new_state.defeat_for == [O]

    def test_draw_has_no_winner(self, tictactoe):
        state = TicTacToeState.from_rows("XOX|XOO|OX.", player=X)
        new_state = tictactoe.reduce(state, Mark(8))

        assert new_state.ended
        assert new_state.victory_for == []
        assert new_state.defeat_for == []
        assert new_state.describe() == "XOX|XOO|OXX Game over. Draw"


class TestSequences:
    """Tests for composite actions."""

    def test_sequence_applies_left_to_right(self, tictactoe):
        state = tictactoe.new_state()
        new_state = tictactoe.reducer(validate=False).reduce(state, Sequence((Mark(0), Mark(4))))
        assert new_state.board[0] == X
        assert new_state.board[4] == O
        assert new_state.player == X

    def test_associativity(self, tictactoe):
        """(a, (b, c)) and ((a, b), c) reach the same state as a, b, c in turn."""
        reducer = tictactoe.reducer(validate=False)
        state = tictactoe.new_state()
        a, b, c = Mark(0), Mark(4), Mark(8)

        right = reducer.reduce(state, Sequence((a, Sequence((b, c)))))
        left = reducer.reduce(state, Sequence((Sequence((a, b)), c)))
        stepwise = reducer.reduce(reducer.reduce(reducer.reduce(state, a), b), c)

        assert right.canonical() == left.canonical() == stepwise.canonical()

    def test_sequence_factory_collapses_single(self):
        assert sequence(Mark(3)) == Mark(3)
        assert sequence(Mark(3), Mark(4)) == Sequence((Mark(3), Mark(4)))

    def test_flatten(self):
        nested = Sequence((Mark(0), Sequence((Mark(1), Mark(2)))))
        assert nested.flatten() == [Mark(0), Mark(1), Mark(2)]


class TestValidation:
    """Tests for illegal actions."""

    def test_taken_cell_rejected(self, tictactoe):
        state = TicTacToeState.from_rows("X..|...|...", player=O)
        with pytest.raises(IllegalActionError):
            tictactoe.reduce(state, Mark(0))

    def test_ended_game_rejects_everything(self, tictactoe):
        state = TicTacToeState.from_rows("XXX|OO.|...", player=O)
        state.end(victors=[X], losers=[O])
        with pytest.raises(IllegalActionError, match="Game is over"):
            tictactoe.reduce(state, Mark(5))

    def test_unknown_action_rejected(self, tictactoe):
        with pytest.raises(IllegalActionError):
            tictactoe.reduce(tictactoe.new_state(), Action())

    def test_illegal_action_error_hierarchy(self):
        """Callers may catch either the engine base class or ValueError."""
        error = IllegalActionError(Mark(0))
        assert isinstance(error, EngineError)
        assert isinstance(error, ValueError)
        assert error.action == Mark(0)

    def test_unvalidated_reducer_skips_legality(self, tictactoe):
        """Without validation the game itself still rejects a taken cell."""
        state = TicTacToeState.from_rows("X..|...|...", player=O)
        with pytest.raises(IllegalActionError, match="taken"):
            Reducer(game=tictactoe, validate=False).reduce(state, Mark(0))
