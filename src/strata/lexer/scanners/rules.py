"""Rule scanner mixin: ordered-choice matching and action execution."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from strata.grammar.actions import Control, StackOp
from strata.tokens import Token, TokenType
from strata.utils.logger import get_logger

if TYPE_CHECKING:
    import re

    from strata.config import LexConfig
    from strata.grammar.actions import Action
    from strata.grammar.core import Grammar
    from strata.grammar.rules import State
    from strata.lexer.indentation import IndentTracker
    from strata.lexer.stack import StateStack
    from strata.profiling import LexAccumulator

logger = get_logger(__name__)


class RuleScannerMixin:
    """Mixin providing one scanning step in the top state.

    A step tries the top state's rules in declared order at the cursor.
    The first rule that matches wins, even with an empty match. When none
    matches, the state's fallback runs.

    Liveness: every zero-width step is counted per offset. Once the count
    passes the configured limit, the next zero-width step is replaced by
    consuming one character as ERROR.

    """

    # These will be set by the Lexer class
    _grammar: Grammar
    _source: str
    _pos: int
    _stack: StateStack
    _tracker: IndentTracker | None
    _config: LexConfig
    _acc: LexAccumulator | None
    _zero_width_pos: int
    _zero_width_steps: int
    _stalled: bool

    def _make_token(self, token_type: TokenType, start: int, end: int) -> Token:
        """Create a token for source[start:end]."""
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
        """Move the cursor to end."""
        raise NotImplementedError

    def _scan_rules(self) -> Iterator[Token]:
        """Run one matching step in the top state."""
        state = self._grammar[self._stack.top]
        source = self._source
        pos = self._pos

        for rule in state.rules:
            match = rule.regex.match(source, pos)
            if match is not None:
                yield from self._apply(rule.action, match)
                return

        yield from self._fallback(state)

    def _apply(self, action: Action, match: re.Match[str]) -> Iterator[Token]:
        """Emit the action's tokens, advance, then mutate the stack."""
        if match.end() == match.start() and not self._count_zero_width():
            yield self._force_progress()
            return

        for token_type, start, end in action.spans(match):
            if end > start:
                yield self._make_token(token_type, start, end)
        self._commit_to(match.end())

        if isinstance(action, Control):
            self._run_control(action)

    def _fallback(self, state: State) -> Iterator[Token]:
        fallback = state.fallback
        if isinstance(fallback, Control):
            if not self._count_zero_width():
                yield self._force_progress()
                return
            self._run_control(fallback)
            return

        # Emit fallback: one character of the fallback's type
        start = self._pos
        yield self._make_token(fallback.type, start, start + 1)
        self._commit_to(start + 1)

    def _run_control(self, action: Control) -> None:
        stack = self._stack
        acc = self._acc

        for command in action.ops:
            op = command.op
            if op is StackOp.PUSH:
                stack.push(command.target)
                if acc is not None:
                    acc.pushes[command.target] += 1
            elif op is StackOp.POP:
                name = stack.top
                if stack.pop():
                    if acc is not None:
                        acc.pops[name] += 1
                else:
                    logger.debug("pop ignored at %d: stack is at its base %r", self._pos, stack)
            elif op is StackOp.REPLACE:
                name = stack.top
                popped = not stack.at_base
                stack.replace(command.target)
                if acc is not None:
                    if popped:
                        acc.pops[name] += 1
                    acc.pushes[command.target] += 1
            elif op is StackOp.RESET:
                stack.reset()
                if acc is not None:
                    acc.resets += 1

            if self._config.trace:
                logger.debug("%s %s at %d -> %r", op.name, command.target or "", self._pos, stack)

        if action.starts_block is not None and self._tracker is not None:
            self._tracker.pending = action.starts_block

    def _count_zero_width(self) -> bool:
        """Record a zero-width step; False once the limit is exceeded."""
        if self._zero_width_pos != self._pos:
            self._zero_width_pos = self._pos
            self._zero_width_steps = 0
        self._zero_width_steps += 1
        return self._zero_width_steps <= self._config.zero_width_limit

    def _force_progress(self) -> Token:
        """Consume one character as ERROR to break a zero-width loop."""
        start = self._pos
        if not self._stalled:
            self._stalled = True
            logger.warning(
                "grammar %r made no progress at offset %d in state %r; "
                "consuming one character as an error",
                self._grammar.name or self._grammar.initial,
                start,
                self._stack.top,
            )
        if self._acc is not None:
            self._acc.zero_width_fallbacks += 1
        token = self._make_token(TokenType.ERROR, start, start + 1)
        self._commit_to(start + 1)
        return token
