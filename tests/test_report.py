"""Tests for location lookup and human-readable reports."""

import hanlint.report
from hanlint import run
from hanlint.location import LineIndex, SourceLocation, locate
from hanlint.report import format_report, format_validation
from hanlint.validation import ValidationIssue, ValidationTarget


class TestLocate:
    """Offsets to line and column."""

    def test_first_line(self) -> None:
        assert locate("abc", 0) == SourceLocation(1, 1, 0)

    def test_later_line(self) -> None:
        assert locate("ab\ncd", 4) == SourceLocation(2, 2, 4)

    def test_offset_clamped(self) -> None:
        assert locate("ab", 10).col_offset == 3

    def test_str_with_file(self) -> None:
        assert str(locate("ab\ncd", 3, "a.md")) == "a.md:2:1"

    def test_line_text_strips_carriage_return(self) -> None:
        index = LineIndex("ab\r\ncd")
        assert index.line_text(1) == "ab"
        assert index.line_text(2) == "cd"


class TestFormatValidation:
    """One rendered validation."""

    def test_location_line_and_caret(self) -> None:
        text = "中文english混排"
        issue = run(text).validations[0]
        lines = format_validation(text, issue, "a.md").splitlines()
        assert lines == [
            "a.md:1:3 space-full-width-content: "
            "Full-width and half-width content should be separated by one space",
            "    中文english混排",
            "      ^",
        ]

    def test_note_marker(self) -> None:
        issue = ValidationIssue(0, "space-quotes", "Unmatched quote", ValidationTarget.NOTE)
        assert format_validation('"a', issue).splitlines()[0] == "1:1 space-quotes (note): Unmatched quote"

    def test_caret_keeps_tabs(self) -> None:
        issue = ValidationIssue(2, "rule", "message")
        assert format_validation("\tab", issue).splitlines()[2] == "    \t ^"

    def test_second_line(self) -> None:
        text = "第一行\n中文english"
        issue = run(text).validations[0]
        assert format_validation(text, issue).startswith("2:3 ")


class TestFormatReport:
    """All validations of a result."""

    def test_every_validation_rendered(self) -> None:
        report = format_report(run("中文english混排"), "a.md")
        assert report.count("a.md:1:") == 2
        assert len(report.splitlines()) == 6

    def test_nothing_to_report(self) -> None:
        assert format_report(run("中文 english")) == ""

    def test_disabled_document(self) -> None:
        assert format_report(run("<!-- hanlint disabled -->中文english")) == ""

    def test_public_names(self) -> None:
        """Location lookup is exported from hanlint.location, not here."""
        assert hanlint.report.__all__ == ["format_report", "format_validation"]
