"""Declarative grammar model for strata.

A grammar is a set of named states, each an ordered list of rules. Rules
pair an anchored regular expression with an action. States share rules
through fragments, spliced in at build time.

Architecture:
grammar/
├── __init__.py          # Re-exports
├── actions.py           # Emit, EmitGroups, EmitDynamic, Control, stack ops
├── rules.py             # Rule, include(), StateSpec, State
├── builder.py           # GrammarBuilder (fragment resolution, validation)
└── core.py              # Grammar (immutable), GrammarInfo

"""

from strata.grammar.actions import (
    ERROR_FALLBACK,
    Action,
    Control,
    Emit,
    EmitDynamic,
    EmitGroups,
    StackCommand,
    StackOp,
    bygroups,
    dynamic,
    pop,
    push,
    replace,
    reset,
    then,
)
from strata.grammar.builder import GrammarBuilder
from strata.grammar.core import Grammar, GrammarInfo
from strata.grammar.rules import CompiledRule, Include, Rule, State, StateSpec, include

__all__ = [
    "ERROR_FALLBACK",
    "Action",
    "CompiledRule",
    "Control",
    "Emit",
    "EmitDynamic",
    "EmitGroups",
    "Grammar",
    "GrammarBuilder",
    "GrammarInfo",
    "Include",
    "Rule",
    "StackCommand",
    "StackOp",
    "State",
    "StateSpec",
    "bygroups",
    "dynamic",
    "include",
    "pop",
    "push",
    "replace",
    "reset",
    "then",
]
