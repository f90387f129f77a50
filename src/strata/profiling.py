"""strata LexAccumulator: opt-in profiling for tokenization.

This module provides accumulated metrics during tokenizing:
- Tokenize calls, source length, tokens emitted
- ERROR tokens emitted
- State-stack traffic (pushes and pops per state, resets)
- Indentation blocks entered and exited
- Liveness backstop hits

Zero overhead when disabled (get_lex_accumulator() returns None).

Example:
    from strata import tokenize
    from strata.languages.sass import SASS
    from strata.profiling import profiled_tokenize

    with profiled_tokenize() as metrics:
        tokens = list(tokenize(SASS, '"a#{1+#{2}}b"'))

    metrics.pushes["interpolation"]
    # 2

"""

from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class LexAccumulator:
    """Accumulated metrics during tokenization.

    Attributes:
        start_time: Profiling start timestamp.
        tokenize_calls: Number of lexer runs started.
        source_length: Total length of sources tokenized.
        token_count: Tokens emitted.
        error_tokens: ERROR tokens emitted.
        pushes: Pushes per state name (block frames included).
        pops: Pops per state name (block frames included).
        resets: reset() calls.
        indents: Indentation blocks entered.
        dedents: Indentation blocks exited.
        zero_width_fallbacks: Times the zero-width cap forced progress.

    """

    start_time: float = field(default_factory=perf_counter)
    tokenize_calls: int = 0
    source_length: int = 0
    token_count: int = 0
    error_tokens: int = 0
    pushes: Counter[str] = field(default_factory=Counter)
    pops: Counter[str] = field(default_factory=Counter)
    resets: int = 0
    indents: int = 0
    dedents: int = 0
    zero_width_fallbacks: int = 0

    def record_run(self, source_length: int) -> None:
        """Record the start of a lexer run."""
        self.tokenize_calls += 1
        self.source_length += source_length

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of lexer metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "tokenize_calls": self.tokenize_calls,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "error_tokens": self.error_tokens,
            "pushes": sum(self.pushes.values()),
            "pops": sum(self.pops.values()),
            "resets": self.resets,
            "indents": self.indents,
            "dedents": self.dedents,
            "zero_width_fallbacks": self.zero_width_fallbacks,
        }


# Module-level ContextVar
_accumulator: ContextVar[LexAccumulator | None] = ContextVar(
    "lex_accumulator",
    default=None,
)


def get_lex_accumulator() -> LexAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_tokenize() -> Iterator[LexAccumulator]:
    """Context manager for profiled tokenizing.

    Creates a LexAccumulator and makes it available via
    get_lex_accumulator() for the duration of the with block. A lexer
    binds the accumulator when it is created, so consume the token stream
    (or at least create the Lexer) inside the block.

    Example:
        with profiled_tokenize() as metrics:
            tokens = list(tokenize(grammar, source))
        print(metrics.summary())

    """
    acc = LexAccumulator()
    token: Token[LexAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
