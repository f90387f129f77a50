"""Rule actions: what happens when a rule's pattern matches.

Actions form a closed set so the scanner can handle every kind explicitly:

- Emit: one token of a fixed type for the whole match
- EmitGroups: one token per capture group
- EmitDynamic: one token whose type is computed from the matched text
- Control: an optional emitter plus state-stack operations

Every action is immutable and can be shared between grammars.

Example:
    >>> Control((push("value"),), emit=Emit(TokenType.KEYWORD))
    >>> bygroups(TokenType.KEYWORD, TokenType.TEXT, TokenType.NAME_FUNCTION)

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from strata.tokens import TokenType

if TYPE_CHECKING:
    import re


class StackOp(Enum):
    """State-stack operations a Control action can perform."""

    PUSH = auto()  # append a state
    POP = auto()  # drop the top state
    REPLACE = auto()  # pop, then push
    RESET = auto()  # drop everything above the base


@dataclass(frozen=True, slots=True)
class StackCommand:
    """One stack operation, with its target state for PUSH and REPLACE."""

    op: StackOp
    target: str | None = None


def push(name: str) -> StackCommand:
    """Push ``name`` on top of the stack."""
    return StackCommand(StackOp.PUSH, name)


def pop() -> StackCommand:
    """Pop the top state."""
    return StackCommand(StackOp.POP)


def replace(name: str) -> StackCommand:
    """Replace the top state with ``name``."""
    return StackCommand(StackOp.REPLACE, name)


def reset() -> StackCommand:
    """Discard every state above the base of the stack."""
    return StackCommand(StackOp.RESET)


@dataclass(frozen=True, slots=True)
class Emit:
    """Emit the whole match as a single token."""

    type: TokenType

    def spans(self, match: re.Match[str]) -> Iterator[tuple[TokenType, int, int]]:
        yield self.type, match.start(), match.end()


@dataclass(frozen=True, slots=True)
class EmitGroups:
    """Emit one token per capture group, in group order.

    Matched text that belongs to no group (between or around the groups)
    is emitted as TEXT so the stream still covers the whole match. Groups
    that matched nothing emit nothing.
    """

    types: tuple[TokenType, ...]

    def spans(self, match: re.Match[str]) -> Iterator[tuple[TokenType, int, int]]:
        pos = match.start()
        for index, token_type in enumerate(self.types, start=1):
            start, end = match.span(index)
            if start < pos or end > match.end():
                # Unmatched, nested in an earlier group, or inside a lookahead
                continue
            if start > pos:
                yield TokenType.TEXT, pos, start
            yield token_type, start, end
            pos = end
        if pos < match.end():
            yield TokenType.TEXT, pos, match.end()


@dataclass(frozen=True, slots=True)
class EmitDynamic:
    """Emit the whole match with a type chosen by ``classify``.

    ``classify`` must be a pure function of the matched text.
    """

    classify: Callable[[str], TokenType]

    def spans(self, match: re.Match[str]) -> Iterator[tuple[TokenType, int, int]]:
        yield self.classify(match.group(0)), match.start(), match.end()


Emitter = Emit | EmitGroups | EmitDynamic


@dataclass(frozen=True, slots=True)
class Control:
    """Emit (optionally), then apply stack operations in order.

    Attributes:
        ops: Stack operations, applied left to right after emitting
        emit: Optional emitter for the matched text
        starts_block: State the next, more indented, block enters instead
            of the grammar's default block state (indentation grammars only)

    """

    ops: tuple[StackCommand, ...] = ()
    emit: Emitter | None = None
    starts_block: str | None = None

    def spans(self, match: re.Match[str]) -> Iterator[tuple[TokenType, int, int]]:
        if self.emit is not None:
            yield from self.emit.spans(match)


Action = Emit | EmitGroups | EmitDynamic | Control


def bygroups(*types: TokenType) -> EmitGroups:
    """Shorthand for EmitGroups."""
    return EmitGroups(tuple(types))


def dynamic(classify: Callable[[str], TokenType]) -> EmitDynamic:
    """Shorthand for EmitDynamic."""
    return EmitDynamic(classify)


def then(emit: Emitter | TokenType | None, *ops: StackCommand, starts_block: str | None = None) -> Control:
    """Build a Control action from an emitter and stack operations.

    Example:
        >>> then(TokenType.KEYWORD, push("value"))
        >>> then(None, pop(), push("value"))

    """
    if isinstance(emit, TokenType):
        emit = Emit(emit)
    return Control(tuple(ops), emit, starts_block)


def as_action(action: Action | TokenType) -> Action:
    """Normalize a bare TokenType into an Emit action."""
    if isinstance(action, TokenType):
        return Emit(action)
    if not isinstance(action, (Emit, EmitGroups, EmitDynamic, Control)):
        msg = f"not a rule action: {action!r}"
        raise TypeError(msg)
    return action


def action_targets(action: Action) -> Iterator[str]:
    """State names an action can transition to."""
    if isinstance(action, Control):
        for command in action.ops:
            if command.target is not None:
                yield command.target
        if action.starts_block is not None:
            yield action.starts_block


# Consume one character as an ERROR token; the default State fallback.
ERROR_FALLBACK: Emit = Emit(TokenType.ERROR)
