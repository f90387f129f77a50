"""Token and TokenType definitions for the strata lexer.

The lexer produces a flat stream of Token objects. Each Token has a type,
the exact text it covers, and its position in the source.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.
Highlighters usually only need type and value, so most tokens never
allocate a location.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strata.location import SourceLocation


class TokenType(Enum):
    """Closed taxonomy of token kinds.

    Values are dotted qualified names. A kind whose name extends another
    kind's name is a sub-kind of it (``Name.Class`` is a ``Name``).

    """

    TEXT = "Text"
    ERROR = "Error"

    COMMENT = "Comment"
    COMMENT_SINGLE = "Comment.Single"
    COMMENT_MULTILINE = "Comment.Multiline"

    KEYWORD = "Keyword"

    NAME = "Name"
    NAME_ATTRIBUTE = "Name.Attribute"
    NAME_BUILTIN = "Name.Builtin"
    NAME_CLASS = "Name.Class"
    NAME_CONSTANT = "Name.Constant"
    NAME_DECORATOR = "Name.Decorator"
    NAME_FUNCTION = "Name.Function"
    NAME_LABEL = "Name.Label"
    NAME_NAMESPACE = "Name.Namespace"
    NAME_PSEUDO = "Name.Pseudo"
    NAME_TAG = "Name.Tag"
    NAME_VARIABLE = "Name.Variable"

    STRING = "Literal.String"
    STRING_DOUBLE = "Literal.String.Double"
    STRING_SINGLE = "Literal.String.Single"
    STRING_OTHER = "Literal.String.Other"
    STRING_INTERPOL = "Literal.String.Interpol"

    NUMBER = "Literal.Number"
    NUMBER_HEX = "Literal.Number.Hex"
    NUMBER_FLOAT = "Literal.Number.Float"

    OPERATOR = "Operator"
    OPERATOR_WORD = "Operator.Word"

    PUNCTUATION = "Punctuation"

    @property
    def qualname(self) -> str:
        """Dotted name, e.g. ``Literal.String.Double``."""
        return self.value

    @property
    def parent(self) -> TokenType | None:
        """The closest enclosing kind, or None for a top-level kind."""
        name = self.value
        while "." in name:
            name = name.rsplit(".", 1)[0]
            try:
                return TokenType(name)
            except ValueError:
                continue
        return None

    def is_a(self, other: TokenType) -> bool:
        """Check whether this kind is ``other`` or one of its sub-kinds."""
        return self.value == other.value or self.value.startswith(other.value + ".")


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token kind (from TokenType)
        value: The exact source text covered by the token
        offset: Absolute start position in source
        lineno: Start line number (1-indexed)
        col: Start column (1-indexed)
        source_file: Optional source file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy cache uses idempotent write (safe for concurrent access).

    """

    type: TokenType
    value: str
    offset: int
    lineno: int = 1
    col: int = 1
    source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def end_offset(self) -> int:
        """Absolute position just past the token."""
        return self.offset + len(self.value)

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached).

        Returns:
            SourceLocation object for this token.
        """
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from strata.location import SourceLocation

        newlines = self.value.count("\n")
        if newlines:
            end_lineno = self.lineno + newlines
            end_col = len(self.value) - self.value.rfind("\n")
        else:
            end_lineno = self.lineno
            end_col = self.col + len(self.value)

        loc = SourceLocation(
            lineno=self.lineno,
            col_offset=self.col,
            offset=self.offset,
            end_offset=self.end_offset,
            end_lineno=end_lineno,
            end_col_offset=end_col,
            source_file=self.source_file,
        )
        # Safe mutation of frozen dataclass cache field (idempotent write)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.value}, {val!r}, {self.lineno}:{self.col})"
