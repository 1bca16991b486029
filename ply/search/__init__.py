"""
Search module - Monte Carlo Tree Search over any Game.

Provides:
- TreeSearch: closed-loop MCTS keyed by action path, single perspective
- OpenLoopSearch: per-player action trees over a live, possibly stochastic state
- best_action: pick from a recommendation by value/visit ratio
"""

from .base import AnytimeSearch
from .closed_loop import TreeSearch
from .open_loop import OpenLoopSearch, SearchPhase
from .node import Node, NodeArena
from .exploration import sqrt_ratio, ucb1, get_exploration, uct_score
from .stats import (
    Recommendation,
    outcome_value,
    mean_value,
    best_action,
    best_actions,
    format_recommendation,
)

__all__ = [
    "AnytimeSearch",
    "TreeSearch",
    "OpenLoopSearch",
    "SearchPhase",
    "Node",
    "NodeArena",
    "sqrt_ratio",
    "ucb1",
    "get_exploration",
    "uct_score",
    "Recommendation",
    "outcome_value",
    "mean_value",
    "best_action",
    "best_actions",
    "format_recommendation",
]
