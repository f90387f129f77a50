"""Stack-based lexer runtime for strata grammars.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, tokenize, StateStack, Indentation
├── core.py              # Lexer class (mixin composition + location tracking)
├── stack.py             # StateStack (push/pop/replace/reset, pinned frames)
├── indentation.py       # Indentation capability, IndentTracker
└── scanners/            # Scanning steps
    ├── indent.py        # Line-start indentation step
    └── rules.py         # Ordered-choice matching, action execution

Usage:
    >>> from strata.lexer import tokenize
    >>> from strata.languages.sass import SASS
    >>> for token in tokenize(SASS, "$x: 1"):
    ...     print(token)
Token(Name.Variable, '$x', 1:1)
Token(Punctuation, ':', 1:3)
Token(Text, ' ', 1:4)
Token(Literal.Number, '1', 1:5)

"""

from strata.lexer.core import Lexer, tokenize
from strata.lexer.indentation import IndentChange, Indentation, IndentTracker
from strata.lexer.stack import StateStack

__all__ = [
    "IndentChange",
    "IndentTracker",
    "Indentation",
    "Lexer",
    "StateStack",
    "tokenize",
]
