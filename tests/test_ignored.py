"""Tests for ignore patterns and the IgnoredCase text form."""

import re

import pytest

from hanlint.errors import ConfigurationError
from hanlint.ignored import IgnoredCase, describe, find_ignored_marks
from hanlint.nodes import IgnoredMark


class TestIgnoredCaseParse:
    """The ``prefix-,textStart,textEnd,-suffix`` form."""

    def test_start_only(self) -> None:
        assert IgnoredCase.parse("english") == IgnoredCase("english")

    def test_prefix(self) -> None:
        assert IgnoredCase.parse("中文-,english") == IgnoredCase("english", prefix="中文")

    def test_all_parts(self) -> None:
        case = IgnoredCase.parse(" a-,b,c,-d ")
        assert case == IgnoredCase("b", text_end="c", prefix="a", suffix="d")

    @pytest.mark.parametrize("text", ["a-,b,c,-d", "b,-d", "a-,b", "b,c"])
    def test_str_round_trip(self, text: str) -> None:
        assert str(IgnoredCase.parse(text)) == text

    @pytest.mark.parametrize("text", ["", ",,", "a-,-d", "a,b,c"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ConfigurationError):
            IgnoredCase.parse(text)

    def test_empty_start_rejected(self) -> None:
        """Constructing a case without start text fails."""
        with pytest.raises(ConfigurationError):
            IgnoredCase("")


class TestFinditer:
    """Spans matched by a single IgnoredCase."""

    def test_every_occurrence(self) -> None:
        assert IgnoredCase("ab").finditer("ab ab") == [(0, 2), (3, 5)]

    def test_prefix_must_precede(self) -> None:
        case = IgnoredCase("english", prefix="中文")
        assert case.finditer("english中文english") == [(9, 16)]

    def test_suffix_must_follow(self) -> None:
        assert IgnoredCase("a", suffix="b").finditer("acab") == [(2, 3)]

    def test_text_end_extends_span(self) -> None:
        assert IgnoredCase("<", text_end="/>").finditer("x<a/>y<b/>") == [(1, 5), (6, 10)]

    def test_missing_text_end(self) -> None:
        assert IgnoredCase("a", text_end="z").finditer("abc") == []


class TestFindIgnoredMarks:
    """Marks collected from all patterns of a block."""

    def test_marks_are_absolute_and_sorted(self) -> None:
        marks, matched = find_ignored_marks("中文english", ["english", re.compile("中"), "xyz"], offset=10)
        assert marks == [IgnoredMark(10, 11), IgnoredMark(12, 19)]
        assert matched == {0, 1}

    def test_empty_matches_skipped(self) -> None:
        marks, matched = find_ignored_marks("ab", ["", re.compile("x*")])
        assert marks == []
        assert matched == set()

    def test_covers_is_end_inclusive(self) -> None:
        mark = IgnoredMark(2, 5)
        assert mark.covers(2)
        assert mark.covers(5)
        assert not mark.covers(6)


class TestDescribe:
    """Pattern names used in log messages."""

    def test_describe(self) -> None:
        assert describe("xyz") == "xyz"
        assert describe(re.compile(r"a+")) == "/a+/"
        assert describe(IgnoredCase("b", prefix="a")) == "a-,b"
