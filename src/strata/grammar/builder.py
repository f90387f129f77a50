"""Grammar builder: declare states and fragments, then compile once.

All composition happens in build(): fragments are spliced into the states
that include them, patterns are compiled, and every state reference is
checked. A Grammar that builds never fails on a reference at tokenize time.

Example:
    >>> builder = GrammarBuilder("root")
    >>> builder.fragment("numbers", [Rule("[0-9]+", TokenType.NUMBER)])
    >>> builder.state("root", [
    ...     include("numbers"),
    ...     Rule("[ ]+", TokenType.TEXT),
    ... ])
    >>> grammar = builder.build()
    >>> grammar["root"].patterns
    ('[0-9]+', '[ ]+')
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from strata.errors import (
    DuplicateStateError,
    FragmentCycleError,
    GrammarError,
    InvalidPatternError,
    UndefinedFragmentError,
    UndefinedStateError,
)
from strata.grammar.actions import (
    ERROR_FALLBACK,
    Control,
    Emit,
    action_targets,
    as_action,
)
from strata.grammar.core import Grammar, GrammarInfo
from strata.grammar.rules import CompiledRule, Include, Rule, RuleItem, State, StateSpec
from strata.utils.logger import get_logger

if TYPE_CHECKING:
    from strata.lexer.indentation import Indentation

logger = get_logger(__name__)


class GrammarBuilder:
    """Mutable builder for Grammar.

    Register states and fragments, then call build() to create an
    immutable grammar. Registration order does not matter; a state may
    include a fragment declared after it.
    """

    __slots__ = ("_initial", "_flags", "_states", "_fragments", "_indentation", "_info")

    def __init__(self, initial: str = "root", *, flags: int = 0) -> None:
        """Initialize empty builder.

        Args:
            initial: Name of the state runs start in
            flags: ``re`` flags applied to every pattern
        """
        self._initial = initial
        self._flags = flags
        self._states: dict[str, StateSpec] = {}
        self._fragments: dict[str, tuple[RuleItem, ...]] = {}
        self._indentation: Indentation | None = None
        self._info = GrammarInfo()

    def state(
        self,
        name: str,
        items: Iterable[RuleItem],
        *,
        fallback: Emit | Control = ERROR_FALLBACK,
    ) -> GrammarBuilder:
        """Declare a state.

        Args:
            name: State name
            items: Rules and include() markers, in match order
            fallback: Action taken when no rule matches

        Returns:
            Self for chaining

        Raises:
            DuplicateStateError: If the name is already declared
        """
        self._claim(name)
        self._states[name] = StateSpec(name, tuple(items), fallback)
        return self

    def fragment(self, name: str, items: Iterable[RuleItem]) -> GrammarBuilder:
        """Declare a reusable rule fragment.

        Fragments are not states: nothing can push one. They only exist
        to be included.

        Returns:
            Self for chaining
        """
        self._claim(name)
        self._fragments[name] = tuple(items)
        return self

    def indentation(self, capability: Indentation) -> GrammarBuilder:
        """Opt this grammar into indentation tracking."""
        self._indentation = capability
        return self

    def metadata(
        self,
        name: str = "",
        *,
        aliases: Iterable[str] = (),
        filenames: Iterable[str] = (),
        mimetypes: Iterable[str] = (),
        description: str = "",
    ) -> GrammarBuilder:
        """Attach descriptive metadata (no effect on tokenizing)."""
        self._info = GrammarInfo(
            name=name,
            aliases=tuple(aliases),
            filenames=tuple(filenames),
            mimetypes=tuple(mimetypes),
            description=description,
        )
        return self

    def build(self) -> Grammar:
        """Compile every state and build an immutable Grammar.

        Raises:
            UndefinedStateError: A rule, fallback, or the indentation
                capability targets an undeclared state, or the initial
                state is undeclared
            UndefinedFragmentError: An include() names nothing declared
            FragmentCycleError: Fragment inclusion is cyclic
            InvalidPatternError: A pattern does not compile
            GrammarError: A fallback is not an Emit or emit-free Control
        """
        if self._initial not in self._states:
            raise UndefinedStateError(self._initial)
        if self._indentation is not None:
            block_state = self._indentation.block_state
            if block_state is not None and block_state not in self._states:
                raise UndefinedStateError(block_state)

        flattened: dict[str, tuple[Rule, ...]] = {}
        compiled: dict[str, re.Pattern[str]] = {}
        states: dict[str, State] = {}

        for name, spec in self._states.items():
            rules = self._flatten(name, flattened, ())
            states[name] = State(
                name=name,
                rules=tuple(self._compile(rule, name, compiled) for rule in rules),
                fallback=self._check_fallback(spec),
            )

        # Fragments no state includes are still validated.
        for name in self._fragments:
            for rule in self._flatten(name, flattened, ()):
                self._compile(rule, name, compiled)

        logger.debug(
            "built grammar %r: %d states, %d rules, %d distinct patterns",
            self._info.name or self._initial,
            len(states),
            sum(len(state) for state in states.values()),
            len(compiled),
        )
        return Grammar(states, self._initial, self._indentation, self._info)

    def __len__(self) -> int:
        """Number of declared states."""
        return len(self._states)

    # =========================================================================
    # Compilation helpers
    # =========================================================================

    def _claim(self, name: str) -> None:
        if name in self._states or name in self._fragments:
            raise DuplicateStateError(name)

    def _items(self, name: str, owner: str) -> tuple[RuleItem, ...]:
        if name in self._fragments:
            return self._fragments[name]
        if name in self._states:
            return self._states[name].items
        raise UndefinedFragmentError(name, owner)

    def _flatten(
        self,
        name: str,
        done: dict[str, tuple[Rule, ...]],
        path: tuple[str, ...],
    ) -> tuple[Rule, ...]:
        """Expand includes depth-first, memoizing every finished name."""
        if name in done:
            return done[name]
        if name in path:
            raise FragmentCycleError((*path[path.index(name) :], name))

        owner = path[-1] if path else name
        rules: list[Rule] = []
        for item in self._items(name, owner):
            if isinstance(item, Include):
                rules.extend(self._flatten(item.name, done, (*path, name)))
            else:
                rules.append(item)

        done[name] = tuple(rules)
        return done[name]

    def _compile(
        self,
        rule: Rule,
        owner: str,
        cache: dict[str, re.Pattern[str]],
    ) -> CompiledRule:
        action = as_action(rule.action)
        for target in action_targets(action):
            if target not in self._states:
                raise UndefinedStateError(target, owner)

        regex = cache.get(rule.pattern)
        if regex is None:
            try:
                regex = re.compile(rule.pattern, self._flags)
            except re.error as e:
                raise InvalidPatternError(rule.pattern, owner, e) from e
            cache[rule.pattern] = regex
        return CompiledRule(regex, action)

    def _check_fallback(self, spec: StateSpec) -> Emit | Control:
        fallback = spec.fallback
        if isinstance(fallback, Control):
            if fallback.emit is not None:
                raise GrammarError("a Control fallback cannot emit: it matches nothing", spec.name)
            for target in action_targets(fallback):
                if target not in self._states:
                    raise UndefinedStateError(target, spec.name)
            return fallback
        if isinstance(fallback, Emit):
            return fallback
        raise GrammarError(f"fallback must be Emit or Control, got {fallback!r}", spec.name)
