"""Tokenize a Sass stylesheet and print the token stream, zero config, zero deps."""

from strata import lex

SOURCE = """\
// Theme
  colors used throughout
$accent: #c0ffee

.card
  border: 1px solid $accent
  &:hover
    color: darken($accent, 10%)
"""

for token in lex(SOURCE, source_file="theme.sass"):
    print(f"{token.location!s:>16}  {token.type.value:<26} {token.value!r}")
