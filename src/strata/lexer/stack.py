"""Run-local state stack.

The stack holds the names of the active states; the top one is consulted
for rules. Its bottom is the grammar's initial state, which is never lost.

Frames come in two kinds:

- pinned frames: the initial state, plus one block frame per open
  indentation level (pinned and unpinned only by the indentation tracker)
- line frames: everything pushed by rule actions

reset() discards line frames and keeps the pinned ones. A grammar without
indentation only ever has the initial state pinned, so reset() brings the
stack back to a single element.

Thread Safety:
StateStack instances are single-use and owned by one Lexer.

"""

from __future__ import annotations


class StateStack:
    """Stack of active state names with a pinned base."""

    __slots__ = ("_frames", "_pinned")

    def __init__(self, initial: str) -> None:
        self._frames: list[str] = [initial]
        self._pinned = 1

    @property
    def top(self) -> str:
        """Name of the state currently consulted."""
        return self._frames[-1]

    @property
    def initial(self) -> str:
        return self._frames[0]

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def pinned_depth(self) -> int:
        """Number of pinned frames (initial state plus open blocks)."""
        return self._pinned

    @property
    def at_base(self) -> bool:
        """True when no line frame is on top of the pinned frames."""
        return len(self._frames) == self._pinned

    def names(self) -> tuple[str, ...]:
        """Frame names, bottom first."""
        return tuple(self._frames)

    def push(self, name: str) -> None:
        self._frames.append(name)

    def pop(self) -> bool:
        """Pop the top line frame.

        Returns:
            False (and leaves the stack untouched) when only pinned frames
            remain, so a stray pop can never lose the base.
        """
        if len(self._frames) <= self._pinned:
            return False
        self._frames.pop()
        return True

    def replace(self, name: str) -> None:
        """Pop then push ``name``.

        At the base there is nothing to pop, so ``name`` is simply pushed.
        """
        self.pop()
        self._frames.append(name)

    def reset(self) -> int:
        """Discard every line frame.

        Returns:
            Number of frames discarded.
        """
        dropped = len(self._frames) - self._pinned
        del self._frames[self._pinned :]
        return dropped

    def pin(self, name: str) -> None:
        """Open a block frame on top of the current base.

        Line frames above the base are discarded first.
        """
        self.reset()
        self._frames.append(name)
        self._pinned += 1

    def unpin(self) -> str | None:
        """Close the innermost block frame.

        Returns:
            The closed frame's name, or None if only the initial state is
            pinned.
        """
        if self._pinned <= 1:
            return None
        self.reset()
        self._pinned -= 1
        return self._frames.pop()

    def __len__(self) -> int:
        return len(self._frames)

    def __repr__(self) -> str:
        base = " ".join(self._frames[: self._pinned])
        rest = " ".join(self._frames[self._pinned :])
        if rest:
            return f"StateStack([{base}] {rest})"
        return f"StateStack([{base}])"
