"""Line-start scanner mixin: indentation handling."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from strata.tokens import Token, TokenType
from strata.utils.logger import get_logger

if TYPE_CHECKING:
    from strata.config import LexConfig
    from strata.lexer.indentation import Indentation, IndentTracker
    from strata.lexer.stack import StateStack
    from strata.profiling import LexAccumulator

_LEADING_WS = re.compile(r"[ \t]*")
_BLANK_REST = re.compile(r"\r?\n|\r|\Z")

logger = get_logger(__name__)


class IndentScannerMixin:
    """Mixin running the indentation step at the start of a line.

    Only used for grammars that declare an Indentation capability, and
    only while the state stack is at its base. Blank and whitespace-only
    lines are emitted as TEXT and never reach the tracker.

    """

    # These will be set by the Lexer class
    _source: str
    _pos: int
    _stack: StateStack
    _indentation: Indentation | None
    _tracker: IndentTracker | None
    _indent_checked: int
    _config: LexConfig
    _acc: LexAccumulator | None

    def _make_token(self, token_type: TokenType, start: int, end: int) -> Token:
        """Create a token for source[start:end]."""
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
        """Move the cursor to end."""
        raise NotImplementedError

    def _at_line_start(self) -> bool:
        """True when the indentation step is due at the cursor."""
        pos = self._pos
        if self._tracker is None or self._indent_checked == pos or not self._stack.at_base:
            return False
        return pos == 0 or self._source[pos - 1] == "\n"

    def _scan_indentation(self) -> Iterator[Token]:
        """Measure this line's indentation and open/close blocks."""
        source = self._source
        start = self._pos
        self._indent_checked = start

        ws_end = _LEADING_WS.match(source, start).end()
        blank = _BLANK_REST.match(source, ws_end)
        if blank is not None:
            # Whitespace-only line: no effect on the tracker
            end = blank.end()
            if end > start:
                yield self._make_token(TokenType.TEXT, start, end)
                self._commit_to(end)
            return

        width = self._indentation.measure(source[start:ws_end])
        change = self._tracker.advance(width, self._stack)
        self._record_indentation(change.entered, change.exited)
        if self._config.trace and (change.entered or change.exited or change.misaligned):
            logger.debug(
                "indent %d at %d: entered=%s exited=%s misaligned=%s -> %r",
                width,
                start,
                change.entered,
                change.exited,
                change.misaligned,
                self._stack,
            )

        if ws_end > start:
            token_type = TokenType.ERROR if change.misaligned else TokenType.TEXT
            yield self._make_token(token_type, start, ws_end)
            self._commit_to(ws_end)

    def _close_blocks(self) -> None:
        """Close every open block at end of input (no tokens)."""
        if self._tracker is None:
            return
        exited = self._tracker.close(self._stack)
        self._record_indentation(None, exited)

    def _record_indentation(self, entered: str | None, exited: tuple[str, ...]) -> None:
        acc = self._acc
        if acc is None:
            return
        if entered is not None:
            acc.indents += 1
            acc.pushes[entered] += 1
        for name in exited:
            acc.dedents += 1
            acc.pops[name] += 1
