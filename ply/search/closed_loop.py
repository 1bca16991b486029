"""
Closed-Loop Search Tree - classic MCTS keyed by action path.

Each node stands for the state reached by one specific path of actions
from the root and keeps a copy of that state. Nodes are never merged by
state content, so different histories stay apart even when they look
alike.

Per iteration:
1. Selection      UCT over legal actions until a node has an unvisited
                  action or is terminal
2. Expansion      one random unvisited action; forced continuations
                  (a single legal action) are expanded eagerly
3. Rollout        random play on a private copy, bounded by max_depth
4. Backpropagation to every ancestor and the edge traversed there

Values are scored for the root player only, even after advance().
"""

from __future__ import annotations
import logging
import math
from typing import Optional

from ..engine_core.action import Action
from .base import AnytimeSearch
from .node import Node, NodeArena
from .stats import Recommendation, outcome_value

logger = logging.getLogger(__name__)


class TreeSearch(AnytimeSearch):
    """Single-perspective MCTS over states reached by action paths."""

    def __init__(self, game, state, config=None, rng=None):
        super().__init__(game, state, config, rng)
        self.perspective = self.root_player
        self.arena = NodeArena()
        self.root = self._new_node(self.root_state, parent=None, action=None)

    def _new_node(self, state, parent: Optional[Node], action: Optional[Action]) -> Node:
        return self.arena.new_node(
            parent=None if parent is None else parent.index,
            action=action,
            player=self.perspective,
            state=state,
            actions=self._legal(state),
        )

    def create_child(self, parent: Node, action: Action) -> Node:
        """Child of parent through action, creating it on first use."""
        existing = self.arena.child(parent, action)
        if existing is not None:
            return existing
        state = parent.state.clone()
        self.reducer.reduce_in_place(state, action)
        return self._new_node(state, parent=parent, action=action)

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def selection(self, node: Node) -> Node:
        """Descend by UCT until a node with an unvisited action, or a leaf."""
        while not node.is_terminal and node.actions and not node.unvisited_actions():
            action = self.select_action(node)
            node = self.create_child(node, action)
        return node

    def select_action(self, node: Node) -> Action:
        """Legal action with the best exploit + C * explore score."""
        best_score = -math.inf
        best: list[Action] = []
        for action in node.actions:
            score = self.action_score(node, action)
            if score > best_score:
                best_score, best = score, [action]
            elif score == best_score:
                best.append(action)
        return best[0] if len(best) == 1 else self.rng.choice(best)

    def action_score(self, node: Node, action: Action) -> float:
        visits = node.child_visits.get(action, 0)
        if visits == 0:
            return math.inf
        exploit = node.child_values.get(action, 0.0) / visits
        explore = self.explore(node.visit_count, visits)
        return exploit + self.config.exploration_constant * explore

    def expansion(self, node: Node) -> Node:
        """Create a child for a random untried action, then follow forced moves."""
        untried = node.unvisited_actions()
        if node.is_terminal or not untried:
            return node
        child = self.create_child(node, self.rng.choice(untried))
        while not child.is_terminal and len(child.actions) == 1:
            child = self.create_child(child, child.actions[0])
        return child

    def rollout(self, node: Node) -> float:
        """Random playout from a copy of node's state."""
        state = node.state.clone()
        self._random_playout(state, self.config.max_depth)
        return outcome_value(state, self.perspective)

    def backpropagate(self, node: Node, value: float):
        """Credit value to node and every ancestor, on the edge taken."""
        node.record(value)
        child = node
        parent = self.arena.parent(child)
        while parent is not None:
            parent.record(value, via=child.action)
            child, parent = parent, self.arena.parent(parent)

    # -------------------------------------------------------------------------
    # Driver hooks
    # -------------------------------------------------------------------------

    def _iterate(self, rollouts: int):
        selected = self.selection(self.root)
        expanded = self.expansion(selected)
        for _ in range(rollouts):
            self.backpropagate(expanded, self.rollout(expanded))

    def _root_statistics(self) -> Recommendation:
        return {
            action: (
                float(self.root.child_values.get(action, 0.0)),
                float(self.root.child_visits.get(action, 0)),
            )
            for action in self.root.actions
        }

    def advance(self, action: Action):
        """
        Re-root the tree at the child reached by action, keeping its statistics.

        Lets a driver reuse work across turns instead of rebuilding.
        """
        child = self.create_child(self.root, action)
        self.arena.detach(child)
        self.root = child
        self.root_state = child.state.clone()
        logger.debug("Re-rooted at %s with %d prior visits", action, child.visit_count)

    def dump_tree(self, max_depth: Optional[int] = None) -> str:
        return self.arena.dump(self.root, max_depth=max_depth)
