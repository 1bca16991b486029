"""
Can't Stop - a push-your-luck dice race, expressed purely as rules.

Turn structure:
- Roll four dice or pass (saving this turn's progress)
- Split rolled dice into pairs; each pair's sum advances a white marker
  in that column. Up to three white markers per turn.
- Using one pair and then, if possible, the other is one decision: the
  move rule is chained with itself instead of looping
- A full roll that allows no move busts the turn
- Topping three columns lets the player claim victory
"""

from __future__ import annotations
import logging

from ...engine_core import Action, Game, IllegalActionError, Rule, sequence
from .components import (
    COLUMN_HEIGHTS,
    DIE_FACES,
    NUM_DICE,
    OFF_BOARD,
    UNROLLED,
    AssignDicePair,
    Bust,
    ClaimVictory,
    Pass,
    ProgressColumn,
    RollDice,
    dice_pairs,
    player_names,
)
from .state import CantStopState

logger = logging.getLogger(__name__)


class CantStopGame(Game):
    name = "cant_stop"

    def __init__(self, num_players: int = 2, rng=None, seed=None):
        super().__init__(rng=rng, seed=seed)
        if not 2 <= num_players <= 4:
            raise ValueError(f"Can't Stop is for 2-4 players, got {num_players}")
        self.num_players = num_players
        self._rules = self._build_rules()

    def new_state(self) -> CantStopState:
        players = player_names(self.num_players)
        return CantStopState(player=players[0], players=players)

    def rules(self) -> list[Rule]:
        return self._rules

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def _build_rules(self) -> list[Rule]:
        move_rule = Rule(
            condition=lambda state: bool(state.rolled_dice()),
            generate=self._move_actions,
            name="move",
        )

        def no_move(state) -> bool:
            return not move_rule.actions(state)

        victory_rule = Rule(
            condition=lambda state: (
                state.win_achieved() and len(state.rolled_dice()) < NUM_DICE and no_move(state)
            ),
            generate=lambda state: [ClaimVictory()],
            name="victory",
        )
        pass_rule = Rule(
            condition=lambda state: (
                not state.win_achieved() and len(state.rolled_dice()) < NUM_DICE and no_move(state)
            ),
            generate=lambda state: [RollDice(), Pass()],
            name="roll or pass",
        )
        bust_rule = Rule(
            condition=lambda state: len(state.rolled_dice()) == NUM_DICE and no_move(state),
            generate=lambda state: [Bust()],
            name="bust",
        )
        return [victory_rule, pass_rule, bust_rule, self.append(move_rule, move_rule)]

    def _move_actions(self, state: CantStopState) -> list[Action]:
        """One composite action per usable pair of rolled dice."""
        actions = []
        for i, j in dice_pairs(state.dice):
            column = state.dice[i] + state.dice[j]
            if self._can_advance(state, column):
                actions.append(sequence(AssignDicePair(i, j), ProgressColumn(column)))
        return actions

    @staticmethod
    def _can_advance(state: CantStopState, column: int) -> bool:
        if state.column_is_won(column):
            return False
        if state.farthest_along(column) >= COLUMN_HEIGHTS[column]:
            return False
        return state.white_in(column) is not None or state.white_in(OFF_BOARD) is not None

    # -------------------------------------------------------------------------
    # Effects
    # -------------------------------------------------------------------------

    def apply(self, state: CantStopState, action: Action) -> list[str]:
        if isinstance(action, RollDice):
            state.dice = [self.rng.choice(DIE_FACES) for _ in range(NUM_DICE)]
            return [f"{state.player} rolled {' '.join(map(str, state.dice))}"]

        if isinstance(action, AssignDicePair):
            state.assigned_column = state.dice[action.first] + state.dice[action.second]
            state.dice[action.first] = UNROLLED
            state.dice[action.second] = UNROLLED
            return []

        if isinstance(action, ProgressColumn):
            return self._progress(state, action.column)

        if isinstance(action, Pass):
            mover = state.player
            state.save_place()
            state.clear_dice()
            state.advance_player()
            return [f"{mover} passed"]

        if isinstance(action, Bust):
            mover = state.player
            state.clear_whites()
            state.clear_dice()
            state.advance_player()
            return [f"{mover} busted"]

        if isinstance(action, ClaimVictory):
            winner = state.player
            state.save_place()
            state.clear_dice()
            state.end(victors=[winner], losers=[p for p in state.players if p != winner])
            logger.debug("%s claimed victory", winner)
            return [f"{winner} wins"]

        raise IllegalActionError(action, reason=f"Unknown Can't Stop action: {action}")

    def _progress(self, state: CantStopState, column: int) -> list[str]:
        new_row = min(COLUMN_HEIGHTS[column], state.farthest_along(column) + 1)
        white = state.white_in(column)
        if white is None:
            white = state.white_in(OFF_BOARD)
        if white is None:
            raise IllegalActionError(
                ProgressColumn(column),
                reason=f"No white marker available for column {column}",
            )
        state.whites[white] = (column, new_row)
        state.assigned_column = OFF_BOARD
        return [f"{state.player} advanced in {column} to {new_row}"]
