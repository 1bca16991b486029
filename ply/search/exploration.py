"""
Exploration terms for UCT selection.

score(a) = exploit(a) + C * explore(a)

The default term is sqrt(N / n), without the logarithm of the classic
UCB1 bound. UCB1's sqrt(ln N / n) is available for comparison.
"""

from __future__ import annotations
import math
from typing import Callable

from ..config import ExplorationFormula

ExplorationTerm = Callable[[float, float], float]


def sqrt_ratio(parent_visits: float, child_visits: float) -> float:
    """sqrt(N / n); +inf for an unvisited child."""
    if child_visits <= 0:
        return math.inf
    return math.sqrt(max(parent_visits, 1) / child_visits)


def ucb1(parent_visits: float, child_visits: float) -> float:
    """sqrt(ln N / n); +inf for an unvisited child."""
    if child_visits <= 0:
        return math.inf
    return math.sqrt(math.log(max(parent_visits, 1)) / child_visits)


EXPLORATION_TERMS: dict[ExplorationFormula, ExplorationTerm] = {
    ExplorationFormula.SQRT_RATIO: sqrt_ratio,
    ExplorationFormula.UCB1: ucb1,
}


def get_exploration(formula: ExplorationFormula | str) -> ExplorationTerm:
    return EXPLORATION_TERMS[ExplorationFormula(formula)]


def uct_score(
    value_sum: float,
    visits: float,
    parent_visits: float,
    constant: float = 1.0,
    explore: ExplorationTerm = sqrt_ratio,
) -> float:
    """Mean value plus weighted exploration bonus."""
    if visits <= 0:
        return math.inf
    return value_sum / visits + constant * explore(parent_visits, visits)
