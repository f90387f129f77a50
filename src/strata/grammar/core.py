"""Compiled, immutable grammars.

Thread Safety:
Grammar is immutable after creation. Safe to share across threads and to
tokenize with from many threads at once; every run keeps its own state.
Use GrammarBuilder for mutable construction.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from strata.grammar.rules import State

if TYPE_CHECKING:
    from strata.lexer.indentation import Indentation
    from strata.tokens import Token


@dataclass(frozen=True, slots=True)
class GrammarInfo:
    """Descriptive metadata for a grammar.

    Carried for external dispatchers (by name, file pattern, or mimetype).
    Has no effect on tokenizing.
    """

    name: str = ""
    aliases: tuple[str, ...] = ()
    filenames: tuple[str, ...] = ()
    mimetypes: tuple[str, ...] = ()
    description: str = ""


class Grammar:
    """Immutable mapping from state name to compiled State.

    Use GrammarBuilder to create instances.
    """

    __slots__ = ("_states", "_initial", "_indentation", "_info")

    def __init__(
        self,
        states: Mapping[str, State],
        initial: str,
        indentation: Indentation | None = None,
        info: GrammarInfo | None = None,
    ) -> None:
        """Initialize grammar with pre-compiled states.

        Use GrammarBuilder to create instances.
        """
        self._states = MappingProxyType(dict(states))
        self._initial = initial
        self._indentation = indentation
        self._info = info or GrammarInfo()

    @property
    def initial(self) -> str:
        """Name of the state every run starts in."""
        return self._initial

    @property
    def indentation(self) -> Indentation | None:
        """Indentation capability, or None for grammars without blocks."""
        return self._indentation

    @property
    def info(self) -> GrammarInfo:
        return self._info

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def states(self) -> Mapping[str, State]:
        """Read-only view of all states."""
        return self._states

    @property
    def names(self) -> frozenset[str]:
        """Get all state names."""
        return frozenset(self._states)

    def tokenize(self, text: str, *, source_file: str | None = None) -> Iterator[Token]:
        """Tokenize ``text`` with this grammar.

        Shorthand for ``strata.tokenize(grammar, text)``.
        """
        from strata.lexer import Lexer

        return Lexer(self, text, source_file=source_file).tokenize()

    def __getitem__(self, name: str) -> State:
        return self._states[name]

    def __contains__(self, name: object) -> bool:
        """Support 'name in grammar' syntax."""
        return name in self._states

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        """Number of states."""
        return len(self._states)

    def __repr__(self) -> str:
        label = self._info.name or "anonymous"
        return f"<Grammar {label!r} states={len(self._states)} initial={self._initial!r}>"
