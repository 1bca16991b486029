"""
Tests for Can't Stop.

Tests:
- Turn structure (roll, pass, bust, claim victory)
- Dice pairs chained into one decision
- Blocked columns
- Equivalence of interchangeable markers
- Random play stays within the legal action set
"""

import random

import pytest

from ..config import SearchConfig
from ..engine_core import IllegalActionError, Sequence
from ..games.cant_stop import (
    COLUMN_HEIGHTS,
    AssignDicePair,
    Bust,
    CantStopGame,
    CantStopState,
    ClaimVictory,
    Pass,
    ProgressColumn,
    RollDice,
)
from ..games.cant_stop.components import OFF_BOARD, UNROLLED, dice_pairs
from ..search import OpenLoopSearch


def names(actions):
    return [str(a) for a in actions]


class TestTurnStart:
    """Tests for a turn with no dice on the table."""

    def test_roll_or_pass(self, cant_stop):
        actions = cant_stop.allowed_actions(cant_stop.new_state())
        assert actions == [RollDice(), Pass()]
        assert names(actions) == ["Roll dice", "Pass"]

    def test_roll_draws_four_dice(self, cant_stop):
        state = cant_stop.reduce(cant_stop.new_state(), RollDice())
        assert len(state.dice) == 4
        assert all(1 <= face <= 6 for face in state.dice)
        assert state.player == "player1"

    def test_roll_repeatable_with_same_seed(self):
        """Equal seeds draw equal dice."""
        first = CantStopGame(seed=11)
        second = CantStopGame(seed=11)

        rolls = [first.reduce(first.new_state(), RollDice()).dice for _ in range(5)]
        again = [second.reduce(second.new_state(), RollDice()).dice for _ in range(5)]
        assert rolls == again

    def test_roll_uses_game_rng(self, cant_stop):
        """Re-seeding the game's source replays the same roll."""
        state = cant_stop.new_state()
        cant_stop.rng.seed(5)
        first = cant_stop.reduce(state, RollDice())
        cant_stop.rng.seed(5)
        second = cant_stop.reduce(state, RollDice())
        assert first.dice == second.dice

    def test_roll_from_injected_source(self):
        """A scripted source decides the faces."""

        class Sixes(random.Random):
            def choice(self, seq):
                return seq[-1]

        game = CantStopGame(rng=Sixes())
        state = game.reduce(game.new_state(), RollDice())
        assert state.dice == [6, 6, 6, 6]

    def test_pass_hands_over(self, cant_stop):
        state = cant_stop.reduce(cant_stop.new_state(), Pass())
        assert state.player == "player2"
        assert state.dice == [UNROLLED] * 4

    def test_player_count_validated(self):
        with pytest.raises(ValueError):
            CantStopGame(num_players=5)

    def test_new_state_players(self):
        state = CantStopGame(num_players=3).new_state()
        assert state.players == ["player1", "player2", "player3"]
        assert set(state.progress) == set(state.players)


class TestMoves:
    """Tests for assigning dice pairs to columns."""

    def test_both_pairs_in_one_decision(self, cant_stop):
        """Each move uses one pair and then the other; mirrored pairings collapse."""
        state = cant_stop.new_state()
        state.dice = [1, 6, 3, 4]

        actions = cant_stop.allowed_actions(state)

        assert names(actions) == ["7 and 7", "4 and 10", "5 and 9"]
        assert all(isinstance(a, Sequence) for a in actions)

    def test_move_structure(self, cant_stop):
        state = cant_stop.new_state()
        state.dice = [1, 6, 3, 4]
        first = cant_stop.allowed_actions(state)[0]

        assert first == Sequence((
            Sequence((AssignDicePair(0, 1), ProgressColumn(7))),
            Sequence((AssignDicePair(2, 3), ProgressColumn(7))),
        ))

    def test_double_move_in_same_column(self, cant_stop):
        state = cant_stop.new_state()
        state.dice = [1, 6, 3, 4]
        after = cant_stop.reduce(state, cant_stop.allowed_actions(state)[0])

        assert sorted(after.whites)[-1] == (7, 2)
        assert after.dice == [UNROLLED] * 4
        assert after.assigned_column == OFF_BOARD
        assert cant_stop.allowed_actions(after) == [RollDice(), Pass()]

    def test_single_usable_pair(self, cant_stop):
        """When the remaining dice cannot be used the first move stands alone."""
        state = cant_stop.new_state()
        state.whites = [(3, 1), (4, 1), (5, 1)]
        state.dice = [1, 2, 6, 6]

        actions = cant_stop.allowed_actions(state)

        assert names(actions) == ["3"]
        after = cant_stop.reduce(state, actions[0])
        assert (3, 2) in after.whites
        assert cant_stop.allowed_actions(after) == [RollDice(), Pass()]

    def test_won_column_blocked(self, cant_stop):
        state = cant_stop.new_state()
        state.progress["player2"][7] = COLUMN_HEIGHTS[7]
        state.dice = [1, 6, 3, 4]

        assert names(cant_stop.allowed_actions(state)) == ["4 and 10", "5 and 9"]

    def test_progress_stops_at_top(self, cant_stop):
        state = cant_stop.new_state()
        state.progress["player1"][2] = COLUMN_HEIGHTS[2] - 1
        state.dice = [1, 1, 1, 1]

        actions = cant_stop.allowed_actions(state)
        assert names(actions) == ["2"]
        after = cant_stop.reduce(state, actions[0])
        assert (2, COLUMN_HEIGHTS[2]) in after.whites

    def test_dice_pairs(self):
        assert dice_pairs([1, 0, 3, 4]) == [(0, 2), (0, 3), (2, 3)]
        assert dice_pairs([0, 0, 0, 0]) == []


class TestBustAndPass:
    """Tests for ending a turn."""

    def test_bust_when_no_move(self, cant_stop):
        state = cant_stop.new_state()
        state.whites = [(3, 1), (4, 1), (5, 1)]
        state.dice = [6, 6, 6, 6]

        actions = cant_stop.allowed_actions(state)

        assert actions == [Bust()]
        assert names(actions) == ["Busted: Pass"]

    def test_bust_loses_turn_progress(self, cant_stop):
        state = cant_stop.new_state()
        state.whites = [(3, 1), (4, 1), (5, 1)]
        state.dice = [6, 6, 6, 6]

        after = cant_stop.reduce(state, Bust())

        assert after.player == "player2"
        assert all(col == OFF_BOARD for col, _ in after.whites)
        assert after.progress["player1"][3] == 0

    def test_pass_saves_progress(self, cant_stop):
        state = cant_stop.new_state()
        state.whites = [(3, 2), (OFF_BOARD, 0), (OFF_BOARD, 0)]

        after = cant_stop.reduce(state, Pass())

        assert after.progress["player1"][3] == 2
        assert all(col == OFF_BOARD for col, _ in after.whites)
        assert after.player == "player2"

    def test_white_marker_resumes_from_saved_progress(self, cant_stop):
        state = cant_stop.new_state()
        state.progress["player1"][6] = 4
        state.dice = [3, 3, 6, 6]

        after = cant_stop.reduce(state, cant_stop.allowed_actions(state)[0])
        assert (6, 5) in after.whites


class TestVictory:
    """Tests for claiming the win."""

    @pytest.fixture
    def winning_state(self) -> CantStopState:
        state = CantStopState()
        state.progress["player1"][2] = COLUMN_HEIGHTS[2]
        state.progress["player1"][3] = COLUMN_HEIGHTS[3]
        state.whites = [(4, COLUMN_HEIGHTS[4]), (OFF_BOARD, 0), (OFF_BOARD, 0)]
        return state

    def test_only_claim_offered(self, cant_stop, winning_state):
        assert winning_state.win_achieved()
        assert cant_stop.allowed_actions(winning_state) == [ClaimVictory()]

    def test_claim_ends_game(self, cant_stop, winning_state):
        after = cant_stop.reduce(winning_state, ClaimVictory())

        assert after.ended
        assert after.victory_for == ["player1"]
        assert after.defeat_for == ["player2"]
        assert after.progress["player1"][4] == COLUMN_HEIGHTS[4]
        assert cant_stop.allowed_actions(after) == []

    def test_won_columns(self, winning_state):
        assert winning_state.won_columns("player1") == [2, 3]
        assert winning_state.topped_columns() == {2, 3, 4}


class TestEquivalence:
    """Tests for the canonical form."""

    def test_white_order_ignored(self):
        a = CantStopState(whites=[(3, 1), (5, 2), (OFF_BOARD, 0)])
        b = CantStopState(whites=[(OFF_BOARD, 0), (5, 2), (3, 1)])
        assert a.equivalent(b)

    def test_dice_ignored(self):
        a = CantStopState(dice=[1, 2, 3, 4])
        b = CantStopState(dice=[6, 6, 6, 6])
        assert a.equivalent(b)

    def test_progress_matters(self):
        a = CantStopState()
        b = CantStopState()
        b.progress["player2"][7] = 1
        assert not a.equivalent(b)

    def test_describe(self):
        state = CantStopState(dice=[1, 2, 0, 0], whites=[(3, 1), (OFF_BOARD, 0), (OFF_BOARD, 0)])
        text = state.describe()
        assert "Dice: 1 2 - -" in text
        assert "Whites: 3:1" in text
        assert "player1 to play" in text


class TestPlay:
    """Tests over whole games."""

    def test_random_play_stays_legal(self):
        """Every action drawn from the legal set passes validation."""
        game = CantStopGame(seed=3)
        rng = random.Random(3)
        state = game.new_state()
        for _ in range(300):
            if state.ended:
                break
            actions = game.allowed_actions(state)
            assert actions
            state = game.reduce(state, rng.choice(actions))

    def test_unknown_action_rejected(self, cant_stop):
        with pytest.raises(IllegalActionError):
            cant_stop.apply(cant_stop.new_state(), object())

    def test_seeded_search_is_reproducible(self):
        config = SearchConfig(iterations=30, max_depth=60, seed=9)
        results = []
        for _ in range(2):
            game = CantStopGame(seed=9)
            state = game.new_state()
            state.dice = [1, 6, 3, 4]
            results.append(OpenLoopSearch(game, state, config=config).recommendation())
        assert results[0] == results[1]
        assert sum(visits for _, visits in results[0].values()) == 30
