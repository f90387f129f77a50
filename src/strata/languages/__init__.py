"""Grammars shipped with strata.

- sass: the indented Sass stylesheet syntax
- css_names: CSS vocabulary consulted by stylesheet grammars
"""

from strata.languages.sass import SASS, build_sass_grammar

__all__ = [
    "SASS",
    "build_sass_grammar",
]
