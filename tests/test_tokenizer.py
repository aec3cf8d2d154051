"""Tests for the tokenizer and the block data model."""

import pytest

from hanlint.errors import TokenizationError
from hanlint.nodes import Block, DocumentState, Mark
from hanlint.tokenizer import Tokenizer, tokenize
from hanlint.tokens import MarkSide, Token, TokenType


def contents(tokens):
    return [t.content for t in tokens]


class TestClassification:
    """Width and punctuation classification of plain text."""

    def test_mixed_content_runs(self) -> None:
        """Full-width and half-width runs become separate tokens."""
        tokens = tokenize("中文english混排")
        assert contents(tokens) == ["中文", "english", "混排"]
        assert [t.type for t in tokens] == [
            TokenType.CONTENT_FULL,
            TokenType.CONTENT_HALF,
            TokenType.CONTENT_FULL,
        ]

    def test_digits_are_half_width_content(self) -> None:
        tokens = tokenize("2024年")
        assert contents(tokens) == ["2024", "年"]
        assert tokens[0].type is TokenType.CONTENT_HALF

    def test_each_punctuation_is_own_token(self) -> None:
        """Punctuation is never grouped, even when repeated."""
        tokens = tokenize("a...b")
        assert contents(tokens) == ["a", ".", ".", ".", "b"]
        assert tokens[1].type is TokenType.PUNCTUATION_HALF

    def test_full_width_punctuation(self) -> None:
        tokens = tokenize("中文，english")
        assert tokens[1].type is TokenType.PUNCTUATION_FULL

    def test_curly_quotes_are_full_width(self) -> None:
        """Ambiguous-width quotes count as full-width punctuation."""
        tokens = tokenize("“中文”")
        assert tokens[0].type is TokenType.PUNCTUATION_FULL
        assert tokens[2].type is TokenType.PUNCTUATION_FULL


class TestWhitespace:
    """Whitespace attaches to the preceding token."""

    def test_space_after(self) -> None:
        tokens = tokenize("a, b")
        assert contents(tokens) == ["a", ",", "b"]
        assert tokens[1].raw_space_after == " "
        assert tokens[1].space_after == " "

    def test_leading_whitespace_becomes_space_token(self) -> None:
        tokens = tokenize("  foo")
        assert tokens[0].type is TokenType.SPACE
        assert tokens[0].content == "  "
        assert tokens[1].index == 2

    def test_line_break_in_gap(self) -> None:
        tokens = tokenize("中文\nenglish")
        assert tokens[0].raw_space_after == "\n"
        assert tokens[0].has_linebreak


class TestMarks:
    """Raw and hyper marks in the token stream."""

    def test_raw_mark_is_one_token(self) -> None:
        tokens = tokenize("a `b` c", [Mark.raw(2, 5, "code")])
        assert contents(tokens) == ["a", "`b`", "c"]
        assert tokens[1].type is TokenType.RAW
        assert tokens[1].is_raw

    def test_hyper_mark_boundaries(self) -> None:
        """A hyper mark yields OPEN and CLOSE boundary tokens around its content."""
        mark = Mark.hyper(1, 3, 4, 6, "strong")
        tokens = tokenize("x**y**z", [mark])
        assert contents(tokens) == ["x", "**", "y", "**", "z"]
        assert tokens[1].type is TokenType.MARK_BOUNDARY
        assert tokens[1].side is MarkSide.OPEN
        assert tokens[3].side is MarkSide.CLOSE
        assert tokens[2].mark is mark
        assert tokens[0].mark is None
        assert tokens[4].mark is None

    def test_crossing_marks_raise(self) -> None:
        with pytest.raises(TokenizationError):
            tokenize("abcdef", [Mark.raw(0, 3), Mark.raw(2, 5)])

    def test_mark_outside_block_raises(self) -> None:
        with pytest.raises(TokenizationError):
            Tokenizer("abc", [Mark.raw(1, 10)]).tokenize()


class TestPartition:
    """Token spans cover the block exactly."""

    @pytest.mark.parametrize(
        "text",
        ["", " ", "中文 english ,  混排\n\n", "  leading", "a\tb\r\nc", "“引号”……"],
    )
    def test_partition(self, text: str) -> None:
        tokens = tokenize(text)
        assert "".join(t.raw_content + t.raw_space_after for t in tokens) == text
        expected = 0
        for token in tokens:
            assert token.index == expected
            expected = token.span_end
        assert expected == len(text)


class TestMarkConflicts:
    """Nesting rules between marks."""

    def test_disjoint_marks_do_not_conflict(self) -> None:
        assert not Mark.raw(0, 2).conflicts_with(Mark.raw(2, 4))

    def test_mark_inside_hyper_content(self) -> None:
        outer = Mark.hyper(0, 2, 8, 10, "strong")
        assert not outer.conflicts_with(Mark.raw(3, 6, "code"))

    def test_mark_on_hyper_delimiter_conflicts(self) -> None:
        outer = Mark.hyper(0, 2, 8, 10, "strong")
        assert outer.conflicts_with(Mark.raw(1, 4))

    def test_anything_inside_raw_conflicts(self) -> None:
        assert Mark.raw(0, 10).conflicts_with(Mark.raw(2, 4))


class TestBlock:
    """Block slicing and mark bookkeeping."""

    def test_slice_rebases_marks(self) -> None:
        block = Block("ab `c` de", 10, 19, (Mark.raw(3, 6, "code"),))
        piece = block.slice(3, 9)
        assert piece.value == "`c` de"
        assert piece.start == 13
        assert piece.marks == (Mark.raw(0, 3, "code"),)

    def test_slice_drops_straddling_marks(self) -> None:
        block = Block("ab `c` de", 0, 9, (Mark.raw(3, 6, "code"),))
        assert block.slice(4, 9).marks == ()

    def test_with_marks_rejects_conflicts(self) -> None:
        """The first mark to claim a span wins."""
        block = Block("abcdef", 0, 6).with_marks([Mark.raw(0, 3), Mark.raw(2, 5), Mark.raw(4, 6)])
        assert block.marks == (Mark.raw(0, 3), Mark.raw(4, 6))

    def test_initial_state(self) -> None:
        state = DocumentState.initial("中文", ("x",))
        assert state.blocks == (Block("中文", 0, 2),)
        assert state.ignored_by_rules == ("x",)
        assert state.ignored_by_parsers == ()


class TestToken:
    """The mutable token type."""

    def test_mark_annotation_is_deferred(self) -> None:
        """Annotations stay strings, so Mark is never evaluated at import time."""
        assert Token.__dataclass_fields__["mark"].type == "Mark | None"

    def test_mark_on_token(self) -> None:
        mark = Mark.raw(0, 3, "code")
        token = Token(TokenType.RAW, "`a`", 0, mark=mark)
        assert token.is_raw
        assert token.raw_content == "`a`"
