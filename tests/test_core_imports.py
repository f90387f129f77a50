"""Verify core module imports work correctly."""

from __future__ import annotations


def test_import_location() -> None:
    """Test SourceLocation import and instantiation."""
    from strata.location import SourceLocation

    loc = SourceLocation(lineno=1, col_offset=1)
    assert loc.lineno == 1
    assert loc.col_offset == 1
    assert str(loc) == "1:1"


def test_import_tokens() -> None:
    """Test Token and TokenType imports with lazy SourceLocation."""
    from strata.tokens import Token, TokenType

    tok = Token(type=TokenType.NAME_CLASS, value="box", offset=1, lineno=1, col=2)
    assert tok.type == TokenType.NAME_CLASS
    assert tok.end_offset == 4
    # Test lazy location creation
    assert tok.location.col_offset == 2
    assert tok.location.end_col_offset == 5
    # Test caching - same object returned
    assert tok.location is tok.location


def test_import_grammar() -> None:
    """Test grammar construction imports."""
    from strata.grammar import GrammarBuilder, Rule
    from strata.tokens import TokenType

    grammar = GrammarBuilder().state("root", [Rule("a", TokenType.NAME)]).build()
    assert grammar["root"].patterns == ("a",)


def test_import_lexer() -> None:
    """Test Lexer import and basic tokenization."""
    from strata.languages.sass import SASS
    from strata.lexer import Lexer

    tokens = list(Lexer(SASS, "a").tokenize())
    assert [t.value for t in tokens] == ["a"]


def test_import_languages() -> None:
    """Test shipped grammars import."""
    from strata.languages import SASS, build_sass_grammar

    assert SASS.name == "Sass"
    assert callable(build_sass_grammar)
