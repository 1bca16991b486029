"""
Open-Loop Search Tree - per-player action trees over a live state.

Closed-loop caching is unsound when transitions are stochastic (the same
action path leads to different futures) and when several players must
each accumulate their own statistics while jointly advancing one state.
Here a node records only the action that reached it. The state is
threaded through the iteration from outside and legality is re-derived
on every visit.

Each player owns a tree made of its own decisions; the other players'
moves and chance events are part of the environment seen between two of
its decisions.

Per iteration, on one private copy of the root state:
1. The acting player's phase picks the action:
   SELECT   mark every legal child as visitable, then UCT; switches to
            EXPAND as soon as a legal child has never been visited
   EXPAND   a zero-visit legal action (falls through to ROLLOUT if none)
   ROLLOUT  uniformly random, no nodes are created
2. The action is applied to the shared state and the player descends
   into its own tree (SELECT/EXPAND only)
3. Tree play stops when the game ends, the ply bound is hit, or every
   player is in ROLLOUT; then rollouts_per_expansion random playouts
   are run from private copies
4. Every playout is backpropagated into each player's visited chain,
   scored for that player: +1 victory, -1 defeat, 0 otherwise. Defeat
   counts against the loser, the same scale the closed-loop tree uses,
   rather than scoring every non-winner as 0.
"""

from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Any, Optional

from ..engine_core.action import Action
from .base import AnytimeSearch
from .node import Node, NodeArena
from .stats import Recommendation, outcome_value

logger = logging.getLogger(__name__)


class SearchPhase(Enum):
    """Where a player stands within one iteration."""
    SELECT = "select"
    EXPAND = "expand"
    ROLLOUT = "rollout"


class OpenLoopSearch(AnytimeSearch):
    """Multi-perspective MCTS tolerant of stochastic transitions."""

    def __init__(self, game, state, config=None, rng=None):
        super().__init__(game, state, config, rng)
        self.arena = NodeArena()

        players = list(self.root_state.players)
        if self.root_player not in players:
            players.append(self.root_player)
        self.roots: dict[Any, Node] = {
            player: self.arena.new_node(player=player) for player in players
        }
        self.root_actions = [] if self.root_state.ended else self._legal(self.root_state)

    # -------------------------------------------------------------------------
    # Action choice per phase
    # -------------------------------------------------------------------------

    def mark_visitable(self, node: Node, legal: list[Action]):
        """Ensure a child per legal action and count this visit as an opportunity."""
        for action in legal:
            child = self.arena.get_or_create_child(node, action, player=node.player)
            child.visitable_count += 1

    def unvisited(self, node: Node, legal: list[Action]) -> list[Action]:
        result = []
        for action in legal:
            child = self.arena.child(node, action)
            if child is None or child.visit_count == 0:
                result.append(action)
        return result

    def select_action(self, node: Node, legal: list[Action]) -> Action:
        """UCT over the legal children, ties broken at random."""
        best_score = -math.inf
        best: list[Action] = []
        for action in legal:
            score = self.child_score(self.arena.child(node, action))
            if score > best_score:
                best_score, best = score, [action]
            elif score == best_score:
                best.append(action)
        return best[0] if len(best) == 1 else self.rng.choice(best)

    def child_score(self, child: Optional[Node]) -> float:
        """exploit + C * explore, where explore uses how often the child was legal."""
        if child is None or child.visit_count == 0:
            return math.inf
        exploit = child.value_sum / child.visit_count
        explore = self.explore(child.visitable_count, child.visit_count)
        return exploit + self.config.exploration_constant * explore

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def _iterate(self, rollouts: int):
        state = self.root_state.clone()
        current = dict(self.roots)
        phase = {player: SearchPhase.SELECT for player in self.roots}
        max_depth = self.config.max_depth
        plies = 0

        while plies < max_depth and not state.ended:
            if all(p is SearchPhase.ROLLOUT for p in phase.values()):
                break
            legal = self._legal(state)
            if not legal:
                break

            player = state.player
            node = current.get(player)
            if node is None:
                # Not a tracked perspective; treat as part of the environment.
                self.reducer.reduce_in_place(state, self.rng.choice(legal))
                plies += 1
                continue

            action, acted_in = self._choose(node, legal, phase[player])
            self.reducer.reduce_in_place(state, action)
            plies += 1

            if acted_in is not SearchPhase.ROLLOUT:
                current[player] = self.arena.get_or_create_child(node, action, player=player)
            phase[player] = SearchPhase.SELECT if acted_in is SearchPhase.SELECT else SearchPhase.ROLLOUT

        if state.ended or plies >= max_depth or not all(p is SearchPhase.ROLLOUT for p in phase.values()):
            self.backpropagate(current, state)
            return

        for _ in range(rollouts):
            playout = state.clone()
            self._random_playout(playout, max_depth - plies)
            self.backpropagate(current, playout)

    def _choose(self, node: Node, legal: list[Action], phase: SearchPhase) -> tuple[Action, SearchPhase]:
        """Pick the next action. Returns it with the phase it was actually chosen in."""
        if phase is SearchPhase.SELECT:
            self.mark_visitable(node, legal)
            if not self.unvisited(node, legal):
                return self.select_action(node, legal), SearchPhase.SELECT
            phase = SearchPhase.EXPAND

        if phase is SearchPhase.EXPAND:
            candidates = self.unvisited(node, legal)
            if candidates:
                return self.rng.choice(candidates), SearchPhase.EXPAND

        return self.rng.choice(legal), SearchPhase.ROLLOUT

    def backpropagate(self, current: dict[Any, Node], final_state):
        """Score final_state for each player and credit its visited chain."""
        for player, node in current.items():
            value = outcome_value(final_state, player)
            for ancestor in self.arena.path_to_root(node):
                ancestor.record(value)

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def _root_statistics(self) -> Recommendation:
        root = self.roots[self.root_player]
        result = {}
        for action in self.root_actions:
            child = self.arena.child(root, action)
            if child is None:
                result[action] = (0.0, 0.0)
            else:
                result[action] = (float(child.value_sum), float(child.visit_count))
        return result

    def dump_tree(self, max_depth: Optional[int] = None, player=None) -> str:
        player = self.root_player if player is None else player
        return self.arena.dump(self.roots[player], max_depth=max_depth)
