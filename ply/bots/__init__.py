"""
Bots module - Automated players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy / FirstLegalPolicy: baselines
- SearchPolicy: Monte Carlo tree search player
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, SearchPolicy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "SearchPolicy",
]
