"""
Configuration - Search settings with environment overrides.

Environment variables (all optional):
    PLY_SEARCH_ITERATIONS               iterations per recommendation
    PLY_SEARCH_EXPLORATION_CONSTANT     C in exploit + C * explore
    PLY_SEARCH_EXPLORATION              sqrt_ratio | ucb1
    PLY_SEARCH_MAX_DEPTH                ply bound for rollouts
    PLY_SEARCH_ROLLOUTS_PER_EXPANSION   playouts per iteration
    PLY_SEARCH_TIME_BUDGET              wall-clock seconds per recommendation
    PLY_SEARCH_SEED                     seed for the search's own randomness
"""

from __future__ import annotations
import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "PLY_SEARCH_"


class ExplorationFormula(str, Enum):
    """Exploration terms for UCT selection."""
    SQRT_RATIO = "sqrt_ratio"  # sqrt(N / n)
    UCB1 = "ucb1"  # sqrt(ln N / n)


class SearchConfig(BaseModel):
    """Settings shared by the closed-loop and open-loop searches."""
    iterations: int = Field(default=1000, ge=0, description="Iterations per recommendation")
    exploration_constant: float = Field(default=1.0, ge=0.0, description="C in exploit + C * explore")
    exploration: ExplorationFormula = Field(
        default=ExplorationFormula.SQRT_RATIO,
        description="Exploration term",
    )
    max_depth: int = Field(default=1000, ge=1, description="Ply bound for one rollout")
    rollouts_per_expansion: int = Field(default=1, ge=1)
    time_budget: Optional[float] = Field(default=None, gt=0, description="Seconds per recommendation")
    seed: Optional[int] = None

    model_config = {"frozen": True}

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        defaults: Mapping[str, object] | None = None,
        **overrides,
    ) -> SearchConfig:
        """
        Build a config from PLY_SEARCH_* variables.

        Precedence, lowest first: field defaults, `defaults`, environment,
        `overrides`.
        """
        environ = os.environ if environ is None else environ
        values = dict(defaults or {})
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        values.update(overrides)
        return cls.model_validate(values)
