"""Scanner mixins for the Lexer.

- indent.py: line-start indentation step (indentation grammars only)
- rules.py: ordered-choice rule matching and action execution
"""

from strata.lexer.scanners.indent import IndentScannerMixin
from strata.lexer.scanners.rules import RuleScannerMixin

__all__ = [
    "IndentScannerMixin",
    "RuleScannerMixin",
]
