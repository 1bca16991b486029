"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and returns a decision.
Decisions include:
- Which action to take
- Explanation and confidence for the UI
- The search statistics behind the choice, when there are any
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..config import SearchConfig
from ..search import OpenLoopSearch, TreeSearch, best_action, mean_value

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.game import Game
    from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Confidence in the decision
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    Implementations can range from simple baselines
    to full tree search.
    """

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        game: Game,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            game: The game being played
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        state: GameState,
        game: Game,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(
        self,
        state: GameState,
        game: Game,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )


class SearchPolicy(BotPolicy):
    """
    Monte Carlo tree search policy.

    Builds a fresh search per decision and plays the action with the
    best value/visit ratio, ties broken at random.
    """

    def __init__(self, config: SearchConfig | None = None, open_loop: bool = True):
        self.config = config or SearchConfig()
        self.open_loop = open_loop
        self.rng = random.Random(self.config.seed)

    def select_action(
        self,
        state: GameState,
        game: Game,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")
        if len(legal_actions) == 1:
            return BotDecision(
                action=legal_actions[0],
                explanation="Only legal action",
                evaluated_actions=1,
            )

        search_cls = OpenLoopSearch if self.open_loop else TreeSearch
        search = search_cls(game, state, config=self.config, rng=self.rng)
        recommendation = search.recommendation()

        action = best_action(recommendation, rng=self.rng)
        if action is None or action not in legal_actions:
            action = legal_actions[0]

        value, visits = recommendation.get(action, (0.0, 0.0))
        total_visits = sum(v for _, v in recommendation.values())
        return BotDecision(
            action=action,
            explanation=f"Best of {len(recommendation)} actions after {search.iterations_run} iterations",
            confidence=visits / total_visits if total_visits else 0.0,
            evaluated_actions=len(recommendation),
            best_score=mean_value(value, visits),
            evaluation_details={
                str(a): {"value": v, "visits": n} for a, (v, n) in recommendation.items()
            },
        )
