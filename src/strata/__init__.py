"""
strata: declarative, stack-based regular-expression lexers

Grammars are tables of named states, each an ordered list of anchored
regex rules. Rule actions emit tokens and push, pop, replace or reset
states on a run-local stack. Grammars can opt into indentation tracking,
which turns each indentation level into a block on the stack.

Tokenizing never fails: input no rule understands comes back as ERROR
tokens, and the token values always concatenate back to the input.

Quick Start:
    >>> from strata import lex
    >>> [(t.type.value, t.value) for t in lex("$pad: 4px")]
    [('Name.Variable', '$pad'), ('Punctuation', ':'), ('Text', ' '), ('Literal.Number', '4px')]

Custom Grammars:
    >>> from strata import GrammarBuilder, Rule, TokenType, tokenize
    >>> builder = GrammarBuilder("root")
    >>> builder.state("root", [
    ...     Rule(r"[0-9]+", TokenType.NUMBER),
    ...     Rule(r"[ ]+", TokenType.TEXT),
    ... ])
    >>> grammar = builder.build()
    >>> [t.type.value for t in tokenize(grammar, "1 x")]
    ['Literal.Number', 'Text', 'Error']
"""

from collections.abc import Iterator

from strata.config import (
    LexConfig,
    get_lex_config,
    lex_config_context,
    reset_lex_config,
    set_lex_config,
)
from strata.errors import (
    DuplicateStateError,
    FragmentCycleError,
    GrammarError,
    InvalidPatternError,
    StrataError,
    UndefinedFragmentError,
    UndefinedStateError,
)
from strata.grammar import (
    ERROR_FALLBACK,
    Control,
    Emit,
    EmitDynamic,
    EmitGroups,
    Grammar,
    GrammarBuilder,
    GrammarInfo,
    Rule,
    State,
    StackOp,
    bygroups,
    dynamic,
    include,
    pop,
    push,
    replace,
    reset,
    then,
)
from strata.lexer import Indentation, IndentTracker, Lexer, StateStack, tokenize
from strata.location import SourceLocation
from strata.profiling import LexAccumulator, get_lex_accumulator, profiled_tokenize
from strata.tokens import Token, TokenType

__version__ = "0.1.0"


def lex(text: str, *, source_file: str | None = None) -> Iterator[Token]:
    """Tokenize Sass (indented syntax) source.

    Args:
        text: Stylesheet source
        source_file: Optional source file path carried on tokens

    Returns:
        Lazy token iterator
    """
    from strata.languages.sass import SASS

    return tokenize(SASS, text, source_file=source_file)


__all__ = [
    # Main API
    "lex",
    "tokenize",
    "Lexer",
    # Grammar definition
    "GrammarBuilder",
    "Grammar",
    "GrammarInfo",
    "State",
    "Rule",
    "include",
    # Actions
    "ERROR_FALLBACK",
    "Emit",
    "EmitGroups",
    "EmitDynamic",
    "Control",
    "StackOp",
    "bygroups",
    "dynamic",
    "then",
    "push",
    "pop",
    "replace",
    "reset",
    # Runtime
    "StateStack",
    "Indentation",
    "IndentTracker",
    # Tokens
    "Token",
    "TokenType",
    "SourceLocation",
    # Configuration
    "LexConfig",
    "get_lex_config",
    "set_lex_config",
    "reset_lex_config",
    "lex_config_context",
    # Profiling
    "LexAccumulator",
    "get_lex_accumulator",
    "profiled_tokenize",
    # Errors
    "StrataError",
    "GrammarError",
    "UndefinedStateError",
    "UndefinedFragmentError",
    "FragmentCycleError",
    "DuplicateStateError",
    "InvalidPatternError",
    # Version
    "__version__",
]
