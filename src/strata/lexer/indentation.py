"""Indentation tracking for block-structured grammars.

A grammar opts in by declaring an Indentation capability. At the start of
every non-blank line, while the state stack is at its base, the lexer
measures the leading whitespace and feeds the width to an IndentTracker:

- wider than the current level: one block opens (``on_indent``)
- same width: nothing changes, the line runs in the current block
- narrower: one block closes per level popped (``on_dedent``)

A dedent that lands between two levels is misaligned. The lexer reports
the whitespace as an ERROR token and the tracker snaps to the enclosing
level, so scanning always continues.

Each opened block is a pinned frame on the state stack, which keeps the
stack exactly as deep as the current nesting at every line start.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strata.lexer.stack import StateStack


class Indentation:
    """Indentation capability a grammar can declare.

    Subclass and override ``on_indent`` / ``on_dedent`` to change what a
    block boundary does to the state stack. Instances are shared by every
    run of the grammar and must not hold run state.

    Attributes:
        tab_width: Tabs advance to the next multiple of this width
        block_state: State a new block enters when no rule asked for a
            specific one; None means the block inherits the enclosing frame

    """

    __slots__ = ("tab_width", "block_state")

    def __init__(self, *, tab_width: int = 4, block_state: str | None = None) -> None:
        if tab_width < 1:
            msg = f"tab_width must be positive, got {tab_width}"
            raise ValueError(msg)
        self.tab_width = tab_width
        self.block_state = block_state

    def measure(self, whitespace: str) -> int:
        """Width of a run of spaces and tabs.

        Spaces count as 1, tabs expand to the next multiple of tab_width.
        """
        width = 0
        for char in whitespace:
            if char == "\t":
                width += self.tab_width - (width % self.tab_width)
            else:
                width += 1
        return width

    def on_indent(self, stack: StateStack, state: str) -> None:
        """A block opened: enter ``state`` as a new pinned frame."""
        stack.pin(state)

    def on_dedent(self, stack: StateStack) -> str | None:
        """A block closed: leave its frame.

        Returns:
            The name of the frame that was closed.
        """
        return stack.unpin()

    def __repr__(self) -> str:
        return f"Indentation(tab_width={self.tab_width}, block_state={self.block_state!r})"


@dataclass(frozen=True, slots=True)
class IndentChange:
    """Outcome of feeding one line's indentation to the tracker.

    Attributes:
        width: Measured width of the line
        entered: State of the block opened by this line, if any
        exited: Frames closed by this line, innermost first
        misaligned: The line dedented to a width no enclosing block has

    """

    width: int
    entered: str | None = None
    exited: tuple[str, ...] = ()
    misaligned: bool = False


class IndentTracker:
    """Per-run stack of enclosing indentation widths.

    Thread Safety:
        Single-use, owned by one Lexer.
    """

    __slots__ = ("_capability", "_widths", "pending")

    def __init__(self, capability: Indentation) -> None:
        self._capability = capability
        self._widths: list[int] = []
        # Block state requested by a rule (Control.starts_block) for the
        # next indented block; cleared at every line start
        self.pending: str | None = None

    @property
    def level(self) -> int:
        """Current indentation width (0 when no block is open)."""
        return self._widths[-1] if self._widths else 0

    @property
    def depth(self) -> int:
        """Number of open blocks."""
        return len(self._widths)

    @property
    def widths(self) -> tuple[int, ...]:
        return tuple(self._widths)

    def advance(self, width: int, stack: StateStack) -> IndentChange:
        """Apply one line's indentation, invoking the capability hooks."""
        pending, self.pending = self.pending, None

        if width > self.level:
            self._widths.append(width)
            state = pending or self._capability.block_state or stack.top
            self._capability.on_indent(stack, state)
            return IndentChange(width, entered=state)

        if width == self.level:
            return IndentChange(width)

        exited: list[str] = []
        while self._widths and self._widths[-1] > width:
            self._widths.pop()
            name = self._capability.on_dedent(stack)
            if name is not None:
                exited.append(name)

        # Snap to the enclosing level when the width matches none
        return IndentChange(width, exited=tuple(exited), misaligned=self.level != width)

    def close(self, stack: StateStack) -> tuple[str, ...]:
        """Close every open block (end of input)."""
        self.pending = None
        exited: list[str] = []
        while self._widths:
            self._widths.pop()
            name = self._capability.on_dedent(stack)
            if name is not None:
                exited.append(name)
        return tuple(exited)
