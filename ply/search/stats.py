"""
Statistics helpers shared by the search trees and their consumers.
"""

from __future__ import annotations
import random
from typing import Hashable

from ..engine_core.action import Action

Recommendation = dict[Action, tuple[float, float]]

VICTORY = 1.0
DEFEAT = -1.0
NEUTRAL = 0.0


def outcome_value(state, player: Hashable) -> float:
    """
    Score a final rollout state for one player.

    +1 if player is in victory_for, -1 if in defeat_for, 0 otherwise
    (draws and depth-limited rollouts that never ended).
    """
    if player in state.victory_for:
        return VICTORY
    if player in state.defeat_for:
        return DEFEAT
    return NEUTRAL


def mean_value(value_sum: float, visits: float) -> float:
    """value / visits, with zero visits counting as one."""
    return value_sum / (visits if visits > 0 else 1)


def best_actions(recommendation: Recommendation, tolerance: float = 1e-9) -> list[Action]:
    """All actions sharing the highest value/visit ratio."""
    if not recommendation:
        return []
    ratios = {action: mean_value(*stats) for action, stats in recommendation.items()}
    best = max(ratios.values())
    return [action for action, ratio in ratios.items() if abs(ratio - best) <= tolerance]


def best_action(recommendation: Recommendation, rng: random.Random | None = None) -> Action | None:
    """Highest value/visit ratio, ties broken uniformly at random."""
    candidates = best_actions(recommendation)
    if not candidates:
        return None
    return (rng or random).choice(candidates)


def format_recommendation(recommendation: Recommendation) -> str:
    """One line per action, best ratio first."""
    rows = sorted(
        recommendation.items(),
        key=lambda item: mean_value(*item[1]),
        reverse=True,
    )
    return "\n".join(
        f"{action}: {mean_value(value, visits):+.3f} ({value:g}/{visits:g})"
        for action, (value, visits) in rows
    )
