"""
Rules - Conditional action generators and their composition.

A Rule is a value holding two pure functions:
    condition: State -> bool
    generate:  State -> [Action]

generate may assume nothing about the state beyond what condition
guarantees. The legal actions of a game are the union of the actions of
every rule whose condition holds.

Rules compose:
    rule.also(pred)            adds a conjunct to the condition
    append(first, second, ...) one ply of lookahead: each action of first
                               is followed, when possible, by an action
                               of second in the resulting state
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable

from .action import Action, Sequence

StatePredicate = Callable[[Any], bool]
ActionSource = Callable[[Any], list[Action]]
ReduceFn = Callable[[Any, Action], Any]


@dataclass(frozen=True)
class Rule:
    """A conditional action generator."""
    condition: StatePredicate
    generate: ActionSource
    name: str = ""

    def applies(self, state) -> bool:
        return bool(self.condition(state))

    def actions(self, state) -> list[Action]:
        """Actions of this rule, or [] when the condition does not hold."""
        if not self.condition(state):
            return []
        return list(self.generate(state))

    def also(self, predicate: StatePredicate) -> Rule:
        """Same rule, additionally requiring predicate(state)."""
        condition = self.condition
        return Rule(
            condition=lambda state: condition(state) and predicate(state),
            generate=self.generate,
            name=self.name,
        )

    def __str__(self) -> str:
        return self.name or "rule"


def append(first: Rule, second: Rule, reduce: ReduceFn) -> Rule:
    """
    Chain second after first.

    For each action a1 of first, second is consulted in
    reduce(state, a1). If second applies there and offers actions, one
    Sequence((a1, a2)) is emitted per a2 (just a1 when a2 == a1);
    otherwise a1 is emitted alone. Entering the chain only needs
    first's condition.

    append(append(r, r, f), r, f) looks three plies ahead.
    """

    def generate(state) -> list[Action]:
        result = []
        for a1 in first.generate(state):
            after_a1 = reduce(state, a1)
            follow_ups = second.generate(after_a1) if second.condition(after_a1) else []
            if not follow_ups:
                result.append(a1)
                continue
            for a2 in follow_ups:
                if a2 == a1:
                    result.append(a1)
                else:
                    result.append(Sequence(actions=(a1, a2)))
        return result

    name = f"{first.name} then {second.name}" if first.name and second.name else ""
    return Rule(condition=first.condition, generate=generate, name=name)
