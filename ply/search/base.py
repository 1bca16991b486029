"""
Anytime search driver shared by the closed-loop and open-loop trees.

A search is built for one root state and answers recommendation():
run iterations until the iteration count or the wall-clock budget is
spent, then report (value_sum, visits) for every legal root action.
"""

from __future__ import annotations
import logging
import random
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from ..config import SearchConfig
from .exploration import get_exploration
from .stats import Recommendation, format_recommendation

if TYPE_CHECKING:
    from ..engine_core.game import Game
    from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


class AnytimeSearch(ABC):
    """
    Abstract base class for Monte Carlo tree searches.

    The root state is cloned on construction; searches never mutate
    the caller's state.
    """

    def __init__(
        self,
        game: Game,
        state: GameState,
        config: SearchConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.game = game
        self.root_state = state.clone()
        self.config = config or SearchConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.reducer = game.reducer(validate=False)
        self.explore = get_exploration(self.config.exploration)
        self.iterations_run = 0

    @property
    def root_player(self):
        return self.root_state.player

    def recommendation(
        self,
        iterations: Optional[int] = None,
        rollouts_per_expansion: Optional[int] = None,
    ) -> Recommendation:
        """
        Run the search and report statistics per legal root action.

        Returns {} on a terminal root without doing any tree work.
        """
        if self.root_state.ended:
            return {}

        iterations = self.config.iterations if iterations is None else iterations
        rollouts = rollouts_per_expansion or self.config.rollouts_per_expansion
        deadline = None
        if self.config.time_budget is not None:
            deadline = time.monotonic() + self.config.time_budget

        started = time.monotonic()
        done = 0
        for done in range(1, iterations + 1):
            self._iterate(rollouts)
            self.iterations_run += 1
            if deadline is not None and time.monotonic() >= deadline:
                logger.debug("Time budget spent after %d iterations", done)
                break
        else:
            done = iterations

        result = self._root_statistics()
        logger.info(
            "%s ran %d iterations in %.3fs from: %s",
            type(self).__name__, done, time.monotonic() - started, self.root_state,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Root statistics:\n%s", format_recommendation(result))
        return result

    def _legal(self, state) -> list:
        return self.game.allowed_actions(state)

    def _random_playout(self, state, depth_budget: int) -> int:
        """Play uniformly random legal actions in place. Returns plies played."""
        plies = 0
        while plies < depth_budget and not state.ended:
            actions = self._legal(state)
            if not actions:
                break
            self.reducer.reduce_in_place(state, self.rng.choice(actions))
            plies += 1
        return plies

    @abstractmethod
    def _iterate(self, rollouts: int):
        """One selection / expansion / rollout / backpropagation pass."""

    @abstractmethod
    def _root_statistics(self) -> Recommendation:
        """(value_sum, visits) for each legal root action."""

    @abstractmethod
    def dump_tree(self, max_depth: Optional[int] = None) -> str:
        """Diagnostic text rendering of the tree."""
