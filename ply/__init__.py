"""
Ply - Rule-composed turn-based games with Monte Carlo tree search

A game is a starting state, a list of rules and the effect of each atomic
action. The engine provides:
- Legal action generation as the union of applicable rules
- Rule chaining for multi-step moves taken as one decision
- Equivalent-outcome deduplication
- Validated, pure state transitions
- Closed-loop and open-loop tree search
- Bot policies and an HTTP session service
"""

__version__ = "0.1.0"
