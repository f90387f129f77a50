"""Tests for GrammarBuilder and the compiled Grammar.

Every reference mistake must surface from build(), before any input is
tokenized.
"""

from __future__ import annotations

import re

import pytest

from strata import (
    DuplicateStateError,
    FragmentCycleError,
    Grammar,
    GrammarBuilder,
    GrammarError,
    Indentation,
    InvalidPatternError,
    Rule,
    TokenType,
    UndefinedFragmentError,
    UndefinedStateError,
    bygroups,
    include,
    pop,
    push,
    then,
    tokenize,
)
from strata.grammar import Control, Emit


class TestBuild:
    """Successful builds."""

    def test_minimal_grammar(self) -> None:
        grammar = GrammarBuilder().state("root", [Rule("a", TokenType.NAME)]).build()
        assert isinstance(grammar, Grammar)
        assert grammar.initial == "root"
        assert "root" in grammar
        assert len(grammar) == 1

    def test_custom_initial_state(self) -> None:
        builder = GrammarBuilder("start")
        builder.state("start", [Rule("a", TokenType.NAME)])
        assert builder.build().initial == "start"

    def test_methods_chain(self) -> None:
        builder = GrammarBuilder()
        assert builder.state("root", []) is builder
        assert builder.fragment("f", []) is builder
        assert builder.indentation(Indentation()) is builder
        assert builder.metadata("Demo") is builder

    def test_bare_token_type_normalized(self) -> None:
        grammar = GrammarBuilder().state("root", [Rule("a", TokenType.NAME)]).build()
        assert grammar["root"].rules[0].action == Emit(TokenType.NAME)

    def test_flags_apply_to_every_pattern(self) -> None:
        builder = GrammarBuilder(flags=re.IGNORECASE)
        builder.state("root", [Rule("abc", TokenType.KEYWORD)])
        tokens = list(tokenize(builder.build(), "ABC"))
        assert [t.type for t in tokens] == [TokenType.KEYWORD]

    def test_metadata(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [])
        builder.metadata("Demo", aliases=["demo"], filenames=["*.demo"], mimetypes=["text/x-demo"])
        grammar = builder.build()
        assert grammar.name == "Demo"
        assert grammar.info.aliases == ("demo",)
        assert grammar.info.filenames == ("*.demo",)
        assert grammar.info.mimetypes == ("text/x-demo",)
        assert repr(grammar) == "<Grammar 'Demo' states=1 initial='root'>"

    def test_indentation_carried(self) -> None:
        capability = Indentation(tab_width=2)
        grammar = GrammarBuilder().indentation(capability).state("root", []).build()
        assert grammar.indentation is capability

    def test_no_indentation_by_default(self) -> None:
        assert GrammarBuilder().state("root", []).build().indentation is None


class TestFragments:
    """Fragment inclusion is flattened at build time."""

    def test_include_spliced_in_place(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("x", TokenType.NAME), include("mid"), Rule("z", TokenType.NAME)])
        builder.fragment("mid", [Rule("y", TokenType.NAME)])
        assert builder.build()["root"].patterns == ("x", "y", "z")

    def test_fragment_declared_after_use(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [include("later")])
        builder.fragment("later", [Rule("a", TokenType.NAME)])
        assert builder.build()["root"].patterns == ("a",)

    def test_nested_fragments(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("inner", [Rule("b", TokenType.NAME)])
        builder.fragment("outer", [Rule("a", TokenType.NAME), include("inner")])
        builder.state("root", [include("outer"), Rule("c", TokenType.NAME)])
        assert builder.build()["root"].patterns == ("a", "b", "c")

    def test_shared_fragment_is_not_a_cycle(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("common", [Rule("c", TokenType.NAME)])
        builder.fragment("left", [include("common")])
        builder.fragment("right", [include("common")])
        builder.state("root", [include("left"), include("right")])
        assert builder.build()["root"].patterns == ("c", "c")

    def test_state_can_be_included(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("a", TokenType.NAME)])
        builder.state("inner", [Rule(r"\)", then(TokenType.PUNCTUATION, pop())), include("root")])
        assert builder.build()["inner"].patterns == (r"\)", "a")

    def test_fragments_are_not_states(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("piece", [Rule("a", TokenType.NAME)])
        builder.state("root", [include("piece")])
        grammar = builder.build()
        assert "piece" not in grammar
        assert grammar.names == frozenset({"root"})


class TestReferenceErrors:
    """Undefined names are rejected by build()."""

    def test_undefined_initial_state(self) -> None:
        with pytest.raises(UndefinedStateError) as exc_info:
            GrammarBuilder("root").build()
        assert exc_info.value.target == "root"

    def test_undefined_push_target(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("a", then(None, push("nowhere")))])
        with pytest.raises(UndefinedStateError) as exc_info:
            builder.build()
        assert exc_info.value.target == "nowhere"
        assert exc_info.value.state == "root"
        assert str(exc_info.value) == "state 'root': undefined state 'nowhere'"

    def test_push_to_fragment_rejected(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("piece", [])
        builder.state("root", [Rule("a", then(None, push("piece")))])
        with pytest.raises(UndefinedStateError):
            builder.build()

    def test_undefined_starts_block(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("a", then(TokenType.COMMENT, starts_block="comment"))])
        with pytest.raises(UndefinedStateError, match="comment"):
            builder.build()

    def test_undefined_fallback_target(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [], fallback=then(None, push("missing")))
        with pytest.raises(UndefinedStateError, match="missing"):
            builder.build()

    def test_undefined_block_state(self) -> None:
        builder = GrammarBuilder()
        builder.indentation(Indentation(block_state="body"))
        builder.state("root", [])
        with pytest.raises(UndefinedStateError, match="body"):
            builder.build()

    def test_undefined_include(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [include("missing")])
        with pytest.raises(UndefinedFragmentError) as exc_info:
            builder.build()
        assert exc_info.value.target == "missing"
        assert exc_info.value.state == "root"

    def test_undefined_include_names_including_fragment(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("piece", [include("missing")])
        builder.state("root", [include("piece")])
        with pytest.raises(UndefinedFragmentError) as exc_info:
            builder.build()
        assert exc_info.value.state == "piece"


class TestCycles:
    def test_two_fragment_cycle(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("a", [include("b")])
        builder.fragment("b", [include("a")])
        builder.state("root", [include("a")])
        with pytest.raises(FragmentCycleError) as exc_info:
            builder.build()
        assert exc_info.value.cycle == ("a", "b", "a")
        assert "a -> b -> a" in str(exc_info.value)

    def test_state_including_itself(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("a", TokenType.NAME), include("root")])
        with pytest.raises(FragmentCycleError) as exc_info:
            builder.build()
        assert exc_info.value.cycle == ("root", "root")

    def test_cycle_is_grammar_error(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("a", [include("a")])
        builder.state("root", [include("a")])
        with pytest.raises(GrammarError):
            builder.build()


class TestUnusedFragments:
    """A fragment no state includes is still checked by build()."""

    def _builder(self) -> GrammarBuilder:
        builder = GrammarBuilder()
        builder.state("root", [Rule("a", TokenType.NAME)])
        return builder

    def test_cycle(self) -> None:
        builder = self._builder()
        builder.fragment("f", [include("g")])
        builder.fragment("g", [include("f")])
        with pytest.raises(FragmentCycleError) as exc_info:
            builder.build()
        assert exc_info.value.cycle == ("f", "g", "f")

    def test_undefined_include(self) -> None:
        builder = self._builder()
        builder.fragment("f", [include("missing")])
        with pytest.raises(UndefinedFragmentError) as exc_info:
            builder.build()
        assert exc_info.value.target == "missing"
        assert exc_info.value.state == "f"

    def test_undefined_push_target(self) -> None:
        builder = self._builder()
        builder.fragment("f", [Rule("x", then(TokenType.TEXT, push("nope")))])
        with pytest.raises(UndefinedStateError) as exc_info:
            builder.build()
        assert exc_info.value.target == "nope"
        assert exc_info.value.state == "f"

    def test_invalid_pattern(self) -> None:
        builder = self._builder()
        builder.fragment("f", [Rule("(", TokenType.TEXT)])
        with pytest.raises(InvalidPatternError) as exc_info:
            builder.build()
        assert exc_info.value.pattern == "("
        assert exc_info.value.state == "f"

    def test_valid_unused_fragment_builds(self) -> None:
        builder = self._builder()
        builder.fragment("f", [Rule("b", then(TokenType.TEXT, push("root")))])
        grammar = builder.build()
        assert grammar.names == frozenset({"root"})


class TestDeclarationErrors:
    def test_duplicate_state(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [])
        with pytest.raises(DuplicateStateError, match="declared more than once"):
            builder.state("root", [])

    def test_state_and_fragment_share_namespace(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("value", [])
        with pytest.raises(DuplicateStateError):
            builder.state("value", [])

    def test_invalid_pattern(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("(", TokenType.NAME)])
        with pytest.raises(InvalidPatternError) as exc_info:
            builder.build()
        assert exc_info.value.pattern == "("
        assert exc_info.value.state == "root"
        assert isinstance(exc_info.value.error, re.error)

    def test_invalid_pattern_in_fragment_reported_for_state(self) -> None:
        builder = GrammarBuilder()
        builder.fragment("piece", [Rule("[", TokenType.NAME)])
        builder.state("user", [include("piece")])
        builder.state("root", [])
        with pytest.raises(InvalidPatternError):
            builder.build()

    def test_emitting_control_fallback_rejected(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [], fallback=then(TokenType.TEXT, pop()))
        with pytest.raises(GrammarError, match="cannot emit"):
            builder.build()

    def test_groups_fallback_rejected(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [], fallback=bygroups(TokenType.NAME))  # type: ignore[arg-type]
        with pytest.raises(GrammarError, match="fallback must be"):
            builder.build()

    def test_not_an_action(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("a", "Name")])  # type: ignore[arg-type]
        with pytest.raises(TypeError, match="not a rule action"):
            builder.build()


class TestGrammarImmutability:
    """Compiled grammars cannot be changed."""

    def test_states_mapping_is_read_only(self) -> None:
        grammar = GrammarBuilder().state("root", []).build()
        with pytest.raises(TypeError):
            grammar.states["other"] = grammar["root"]  # type: ignore[index]

    def test_state_is_frozen(self) -> None:
        grammar = GrammarBuilder().state("root", []).build()
        with pytest.raises(AttributeError):
            grammar["root"].fallback = Control()  # type: ignore[misc]

    def test_builder_changes_after_build_do_not_leak(self) -> None:
        builder = GrammarBuilder()
        builder.state("root", [Rule("a", TokenType.NAME)])
        grammar = builder.build()
        builder.state("extra", [])
        assert "extra" not in grammar
        assert list(grammar) == ["root"]
