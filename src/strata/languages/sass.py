"""Grammar for the indented Sass stylesheet syntax (``*.sass``).

Line structure:
- Each line starts in ``root`` (or an indented block frame), which hands
  the line to ``content``.
- ``content`` decides what the line is: an @-directive, a variable or
  mixin definition, an attribute (``name: value``) or a selector.
- End of line resets the stack to the current block frame.

Indentation opens a block frame per level. A comment line (``//`` or
``/*``) starts a block whose more-indented lines are all comment.

Values may contain ``#{...}`` interpolation, which re-enters the value
states; strings may contain interpolation too, to any depth.

Example:
    >>> from strata import tokenize
    >>> from strata.languages.sass import SASS
    >>> for token in tokenize(SASS, "a\\n  b: c"):
    ...     print(token)
    Token(Name.Tag, 'a', 1:1)
    Token(Text, '\\n', 1:2)
    Token(Text, '  ', 2:1)
    Token(Name.Label, 'b', 2:3)
    Token(Punctuation, ':', 2:4)
    Token(Text, ' ', 2:5)
    Token(Name, 'c', 2:6)

"""

from __future__ import annotations

from strata.grammar import (
    GrammarBuilder,
    Rule,
    bygroups,
    dynamic,
    include,
    pop,
    push,
    replace,
    reset,
    then,
)
from strata.languages.css_names import is_builtin, is_constant, is_property
from strata.lexer.indentation import Indentation
from strata.tokens import TokenType as T

ID = r"[\w-]+"


def classify_value_name(name: str) -> T:
    """Identifier in value context: CSS keyword, named color, or plain name."""
    if is_builtin(name):
        return T.NAME_BUILTIN
    if is_constant(name):
        return T.NAME_CONSTANT
    return T.NAME


def classify_attribute(name: str) -> T:
    """Attribute name: known CSS property, or a custom one."""
    if is_property(name):
        return T.NAME_ATTRIBUTE
    return T.NAME_LABEL


def _define_common(builder: GrammarBuilder) -> None:
    """States shared by stylesheet dialects built on the Sass value syntax."""
    builder.fragment(
        "content_common",
        [
            Rule(r"@for\b", then(T.KEYWORD, push("for"))),
            Rule(r"@(?:debug|warn|if|while)\b", then(T.KEYWORD, push("value"))),
            Rule(
                rf"(@mixin)([ \t]+)({ID})",
                then(bygroups(T.KEYWORD, T.TEXT, T.NAME_FUNCTION), push("value")),
            ),
            Rule(
                rf"(@include)([ \t]+)({ID})",
                then(bygroups(T.KEYWORD, T.TEXT, T.NAME_DECORATOR), push("value")),
            ),
            Rule(rf"@{ID}", then(T.KEYWORD, push("selector"))),
            # $variable: assignment
            Rule(
                rf"([$]{ID})([ \t]*)(:)",
                then(bygroups(T.NAME_VARIABLE, T.TEXT, T.PUNCTUATION), push("value")),
            ),
        ],
    )

    builder.state(
        "value",
        [
            include("end_section"),
            Rule(r"[ \t]+", T.TEXT),
            Rule(rf"[$]{ID}", T.NAME_VARIABLE),
            Rule(r"url[(]", then(T.STRING_OTHER, push("string_url"))),
            Rule(rf"{ID}(?=[ \t]*[(])", T.NAME_FUNCTION),
            # named literals
            Rule(r"(?:true|false)\b", T.NAME_PSEUDO),
            Rule(r"(?:and|or|not)\b", T.OPERATOR_WORD),
            # colors and numbers
            Rule(r"(?i:#[a-z0-9]{1,6})", T.NUMBER_HEX),
            Rule(r"-?\d*\.\d+(?:%|[a-z]+)?", T.NUMBER_FLOAT),
            Rule(r"-?\d+(?:%|[a-z]+)?", T.NUMBER),
            include("has_strings"),
            include("has_interp"),
            Rule(r"/[*]", then(T.COMMENT_MULTILINE, push("inline_comment"))),
            Rule(r"//[^\n]*", T.COMMENT_SINGLE),
            Rule(r"[~^*!&%<>|+=@:,./?-]+", T.OPERATOR),
            Rule(r"[\[\]()]+", T.PUNCTUATION),
            Rule(ID, dynamic(classify_value_name)),
        ],
    )

    builder.fragment("has_interp", [Rule(r"#[{]", then(T.STRING_INTERPOL, push("interpolation")))])

    builder.fragment(
        "has_strings",
        [
            Rule(r'"', then(T.STRING_DOUBLE, push("dq"))),
            Rule(r"'", then(T.STRING_SINGLE, push("sq"))),
        ],
    )

    builder.state(
        "interpolation",
        [
            Rule(r"[}]", then(T.STRING_INTERPOL, pop())),
            include("value"),
        ],
    )

    builder.state(
        "selector",
        [
            include("end_section"),
            include("has_strings"),
            include("has_interp"),
            Rule(r"[ \t]+", T.TEXT),
            Rule(r":", then(T.NAME_DECORATOR, push("pseudo_class"))),
            Rule(r"[.]", then(T.NAME_CLASS, push("class"))),
            Rule(r"#", then(T.NAME_NAMESPACE, push("id"))),
            Rule(ID, T.NAME_TAG),
            Rule(r"&", T.KEYWORD),
            Rule(r"[~^*!\[\]()<>|+=@:;,./?-]", T.OPERATOR),
        ],
    )

    # A newline inside a string is an error; recover at the block frame
    builder.fragment("unterminated", [Rule(r"\n", then(T.ERROR, reset()))])

    builder.state(
        "dq",
        [
            Rule(r'"', then(T.STRING_DOUBLE, pop())),
            include("has_interp"),
            Rule(r'(?:\\.|#(?![{])|[^\n"#])+', T.STRING_DOUBLE),
            include("unterminated"),
        ],
    )

    builder.state(
        "sq",
        [
            Rule(r"'", then(T.STRING_SINGLE, pop())),
            include("has_interp"),
            Rule(r"(?:\\.|#(?![{])|[^\n'#])+", T.STRING_SINGLE),
            include("unterminated"),
        ],
    )

    builder.state(
        "string_url",
        [
            Rule(r"[)]", then(T.STRING_OTHER, pop())),
            Rule(r"(?:\\.|#(?![{])|[^\n)#])+", T.STRING_OTHER),
            include("has_interp"),
            include("unterminated"),
        ],
    )

    # Pieces of a selector (.class, #id, :pseudo) end wherever the name does
    builder.fragment("selector_piece", [include("has_interp")])
    end_piece = then(None, pop())

    builder.state(
        "pseudo_class",
        [Rule(ID, T.NAME_DECORATOR), include("selector_piece")],
        fallback=end_piece,
    )
    builder.state(
        "class",
        [Rule(ID, T.NAME_CLASS), include("selector_piece")],
        fallback=end_piece,
    )
    builder.state(
        "id",
        [Rule(ID, T.NAME_NAMESPACE), include("selector_piece")],
        fallback=end_piece,
    )

    builder.state(
        "for",
        [
            Rule(r"(?:from|to|through)\b", T.OPERATOR_WORD),
            include("value"),
        ],
    )

    builder.fragment(
        "attr_common",
        [
            include("has_interp"),
            Rule(ID, dynamic(classify_attribute)),
        ],
    )

    builder.state(
        "attribute",
        [
            include("attr_common"),
            Rule(r"([ \t]*)(:)", then(bygroups(T.TEXT, T.PUNCTUATION), push("value"))),
            include("end_section"),
        ],
    )

    builder.state(
        "inline_comment",
        [
            Rule(r"(?:\\#|#(?=[^\n{])|[*](?=[^\n/])|[^\n#*])+", T.COMMENT_MULTILINE),
            include("has_interp"),
            Rule(r"[*]/", then(T.COMMENT_MULTILINE, pop())),
            include("end_section"),
        ],
    )


def build_sass_grammar() -> GrammarBuilder:
    """Declare the Sass grammar.

    Returns:
        A builder, so callers can add states before building.
    """
    builder = GrammarBuilder("root")
    builder.metadata(
        "Sass",
        aliases=("sass",),
        filenames=("*.sass",),
        mimetypes=("text/x-sass",),
        description="The Sass stylesheet language, indented syntax (sass-lang.com)",
    )
    builder.indentation(Indentation())

    builder.state(
        "root",
        [Rule(r"[ \t]*\r?\n", T.TEXT)],
        fallback=then(None, push("content")),
    )

    builder.state(
        "content",
        [
            # block comments: more-indented lines that follow are comment
            Rule(
                r"//[^\n]*\n?",
                then(T.COMMENT_SINGLE, reset(), starts_block="single_comment"),
            ),
            Rule(
                r"/[*][^\n]*\n?",
                then(T.COMMENT_MULTILINE, reset(), starts_block="multi_comment"),
            ),
            Rule(r"@import\b", then(T.KEYWORD, push("import"))),
            include("content_common"),
            Rule(rf"={ID}", then(T.NAME_FUNCTION, push("value"))),
            Rule(rf"[+]{ID}", then(T.NAME_DECORATOR, push("value"))),
            Rule(r":", then(T.NAME_ATTRIBUTE, push("old_style_attr"))),
            Rule(r"(?=[^\n]+?:(?:[^a-z]|\Z))", then(None, push("attribute"))),
        ],
        fallback=then(None, push("selector")),
    )

    builder.state("single_comment", [Rule(r"[^\n]*\n?", T.COMMENT_SINGLE)])
    builder.state("multi_comment", [Rule(r"[^\n]*\n?", T.COMMENT_MULTILINE)])

    builder.state(
        "import",
        [
            Rule(r"[ \t]+", T.TEXT),
            Rule(r"[^\s]+", T.STRING),
            Rule(r"\r?\n", then(T.TEXT, reset())),
        ],
    )

    builder.state(
        "old_style_attr",
        [include("attr_common")],
        fallback=then(None, replace("value")),
    )

    builder.fragment("end_section", [Rule(r"\r?\n", then(T.TEXT, reset()))])

    _define_common(builder)
    return builder


# Built once at import; immutable and shared by every run
SASS = build_sass_grammar().build()

__all__ = [
    "SASS",
    "build_sass_grammar",
    "classify_attribute",
    "classify_value_name",
]
