"""Stack-based regular-expression lexer.

Drives a compiled Grammar over one source string. Each step asks the
state on top of the stack for the first rule matching at the cursor and
executes its action; grammars with an Indentation capability also get an
indentation step at the start of every line.

Guarantees:
- Coverage: token values concatenate back to the source, exactly
- Termination: every step advances the cursor, or is a zero-width step
  bounded by LexConfig.zero_width_limit at that offset
- Tolerance: malformed input yields ERROR tokens, never exceptions

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; the Grammar is shared read-only.

"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from strata.config import get_lex_config
from strata.lexer.indentation import IndentTracker
from strata.lexer.scanners import IndentScannerMixin, RuleScannerMixin
from strata.lexer.stack import StateStack
from strata.profiling import get_lex_accumulator
from strata.tokens import Token, TokenType

if TYPE_CHECKING:
    from strata.grammar.core import Grammar


class Lexer(
    IndentScannerMixin,
    RuleScannerMixin,
):
    """One tokenization run of a grammar over a source string.

    Usage:
            >>> from strata.languages.sass import SASS
            >>> for token in Lexer(SASS, ".box\\n").tokenize():
            ...     print(token)
        Token(Name.Class, '.', 1:1)
        Token(Name.Class, 'box', 1:2)
        Token(Text, '\\n', 1:5)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_grammar",
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_source_file",
        "_pos",
        "_stack",
        "_indentation",
        "_tracker",
        "_indent_checked",  # Line start already given its indentation step
        "_config",
        "_acc",
        # Location tracking
        "_loc_pos",
        "_lineno",
        "_line_start",
        # Liveness backstop
        "_zero_width_pos",
        "_zero_width_steps",
        "_stalled",
    )

    def __init__(
        self,
        grammar: Grammar,
        source: str,
        *,
        source_file: str | None = None,
    ) -> None:
        """Initialize a run.

        Reads the active LexConfig and profiling accumulator now, so they
        apply to the whole run even if the stream is consumed elsewhere.

        Args:
            grammar: Compiled grammar
            source: Text to tokenize
            source_file: Optional source file path carried on tokens
        """
        self._grammar = grammar
        self._source = source
        self._source_len = len(source)
        self._source_file = source_file
        self._pos = 0
        self._stack = StateStack(grammar.initial)

        self._indentation = grammar.indentation
        self._tracker = IndentTracker(self._indentation) if self._indentation else None
        self._indent_checked = -1

        self._config = get_lex_config()
        self._acc = get_lex_accumulator()

        self._loc_pos = 0
        self._lineno = 1
        self._line_start = 0

        self._zero_width_pos = -1
        self._zero_width_steps = 0
        self._stalled = False

    @property
    def stack(self) -> StateStack:
        """The run's state stack (read it, don't drive it)."""
        return self._stack

    @property
    def tracker(self) -> IndentTracker | None:
        return self._tracker

    @property
    def pos(self) -> int:
        return self._pos

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects one at a time

        Complexity: O(n * r) where n = len(source), r = rules per state
        Memory: O(depth) beyond the tokens themselves (tokens are yielded,
        not accumulated)
        """
        if self._acc is not None:
            self._acc.record_run(self._source_len)

        source_len = self._source_len
        while self._pos < source_len:
            if self._at_line_start():
                yield from self._scan_indentation()
            else:
                yield from self._scan_rules()

        # Unterminated constructs just stop; open blocks close silently
        self._stack.reset()
        self._close_blocks()

    # =========================================================================
    # Position and location tracking
    # =========================================================================

    def _commit_to(self, end: int) -> None:
        """Move the cursor to end (never backwards)."""
        if end > self._pos:
            self._pos = end

    def _locate(self, offset: int) -> tuple[int, int]:
        """Line and column (1-indexed) of offset.

        Offsets are requested in increasing order, so each call only scans
        the text since the previous one.
        """
        if offset > self._loc_pos:
            segment = self._source[self._loc_pos : offset]
            newlines = segment.count("\n")
            if newlines:
                self._lineno += newlines
                self._line_start = self._loc_pos + segment.rfind("\n") + 1
            self._loc_pos = offset
        return self._lineno, offset - self._line_start + 1

    def _make_token(self, token_type: TokenType, start: int, end: int) -> Token:
        """Create a token for source[start:end]."""
        lineno, col = self._locate(start)
        acc = self._acc
        if acc is not None:
            acc.token_count += 1
            if token_type is TokenType.ERROR:
                acc.error_tokens += 1
        return Token(
            type=token_type,
            value=self._source[start:end],
            offset=start,
            lineno=lineno,
            col=col,
            source_file=self._source_file,
        )


def tokenize(grammar: Grammar, text: str, *, source_file: str | None = None) -> Iterator[Token]:
    """Tokenize text with grammar.

    The run is created immediately (config and profiling are bound now);
    tokens are produced lazily as the iterator is consumed. Stopping early
    needs no cleanup.

    Example:
        >>> from strata.languages.sass import SASS
        >>> [t.value for t in tokenize(SASS, "a")]
        ['a']
    """
    return Lexer(grammar, text, source_file=source_file).tokenize()
