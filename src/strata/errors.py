"""Exception classes for strata.

Only grammar construction raises. Tokenizing never raises for malformed
input; bad regions come back as ERROR tokens instead.
"""

from __future__ import annotations


class StrataError(Exception):
    """Base exception for all strata errors.

    Subclass this for specific error categories.
    """

    pass


class GrammarError(StrataError):
    """A grammar could not be built.

    Raised by GrammarBuilder.build() before any input is processed.
    """

    def __init__(self, message: str, state: str | None = None) -> None:
        """Initialize grammar error with the offending state, if known.

        Args:
            message: Error description
            state: Name of the state (or fragment) being compiled
        """
        self.message = message
        self.state = state

        prefix = f"state '{state}': " if state else ""
        super().__init__(f"{prefix}{message}")


class UndefinedStateError(GrammarError):
    """A rule, fallback or capability targets a state that was never declared."""

    def __init__(self, target: str, state: str | None = None) -> None:
        self.target = target
        super().__init__(f"undefined state '{target}'", state)


class UndefinedFragmentError(GrammarError):
    """An include() names neither a fragment nor a state."""

    def __init__(self, target: str, state: str | None = None) -> None:
        self.target = target
        super().__init__(f"undefined fragment '{target}'", state)


class FragmentCycleError(GrammarError):
    """Fragment inclusion loops back on itself."""

    def __init__(self, cycle: tuple[str, ...]) -> None:
        self.cycle = cycle
        super().__init__(f"cyclic fragment inclusion: {' -> '.join(cycle)}", cycle[0])


class DuplicateStateError(GrammarError):
    """A state or fragment name was declared twice."""

    def __init__(self, name: str) -> None:
        super().__init__("declared more than once", name)


class InvalidPatternError(GrammarError):
    """A rule pattern is not a valid regular expression."""

    def __init__(self, pattern: str, state: str, error: Exception) -> None:
        self.pattern = pattern
        self.error = error
        super().__init__(f"invalid pattern {pattern!r}: {error}", state)
