"""Rule and State definitions.

Declarations (Rule, Include, StateSpec) are what grammar authors write.
CompiledRule and State are what the builder produces: patterns compiled,
fragments flattened, nothing left to resolve at tokenize time.

Thread Safety:
All classes here are frozen dataclasses. Compiled states are shared by
every run of a grammar.

"""

from __future__ import annotations

import re
from dataclasses import dataclass

from strata.grammar.actions import ERROR_FALLBACK, Action, Control, Emit
from strata.tokens import TokenType


@dataclass(frozen=True, slots=True)
class Rule:
    """One pattern and the action taken when it matches.

    The pattern is only ever tried at the cursor (``re.Pattern.match``
    with a start position), never searched for further along the input.
    A bare TokenType action is shorthand for Emit.
    """

    pattern: str
    action: Action | TokenType


@dataclass(frozen=True, slots=True)
class Include:
    """Splice the rules of a fragment (or another state) in place."""

    name: str


def include(name: str) -> Include:
    """Include the named fragment's rules at this position."""
    return Include(name)


RuleItem = Rule | Include


@dataclass(frozen=True, slots=True)
class StateSpec:
    """A state as declared: rules, includes, and a fallback.

    The fallback runs when no rule matches. An Emit fallback consumes one
    character as a token of its type; a Control fallback applies its stack
    operations without consuming anything.
    """

    name: str
    items: tuple[RuleItem, ...]
    fallback: Emit | Control = ERROR_FALLBACK


@dataclass(frozen=True, slots=True)
class CompiledRule:
    """A rule with its pattern compiled and action normalized."""

    regex: re.Pattern[str]
    action: Action

    @property
    def pattern(self) -> str:
        return self.regex.pattern


@dataclass(frozen=True, slots=True)
class State:
    """A compiled state: a flat, ordered rule tuple and a fallback."""

    name: str
    rules: tuple[CompiledRule, ...]
    fallback: Emit | Control = ERROR_FALLBACK

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def patterns(self) -> tuple[str, ...]:
        """Rule patterns in match order."""
        return tuple(rule.pattern for rule in self.rules)
