"""Human-readable rendering of validations.

Example output::

    README.md:3:5 space-full-width-content: Full-width and half-width content should be separated by one space
        中文english混排
            ^

"""

from __future__ import annotations

from hanlint.location import LineIndex, SourceLocation
from hanlint.pipeline import LintResult
from hanlint.validation import ValidationIssue, ValidationTarget


def _caret_line(line: str, col_offset: int) -> str:
    # Keep tabs so the caret lines up with the source line
    prefix = "".join("\t" if char == "\t" else " " for char in line[: col_offset - 1])
    return f"{prefix}^"


def format_validation(
    text: str,
    issue: ValidationIssue,
    source_file: str | None = None,
    *,
    index: LineIndex | None = None,
) -> str:
    """Render one validation with its location, source line and a caret.

    Args:
        text: The original document the issue points into
        issue: Validation with an absolute index
        source_file: File name shown in the location
        index: Pre-built line index for the document (optional)
    """
    index = index or LineIndex(text, source_file)
    location = index.locate(issue.index)
    if source_file and location.source_file != source_file:
        location = SourceLocation(location.lineno, location.col_offset, location.offset, source_file)
    kind = " (note)" if issue.target is ValidationTarget.NOTE else ""
    line = index.line_text(location.lineno)
    return "\n".join(
        (
            f"{location} {issue.name}{kind}: {issue.message}",
            f"    {line}",
            f"    {_caret_line(line, location.col_offset)}",
        )
    )


def format_report(result: LintResult, source_file: str | None = None) -> str:
    """Render every validation of a lint result, one after another.

    Returns an empty string when there is nothing to report.
    """
    if result.disabled or not result.validations:
        return ""
    index = LineIndex(result.origin, source_file)
    return "\n".join(
        format_validation(result.origin, issue, source_file, index=index) for issue in result.validations
    )


__all__ = ["format_report", "format_validation"]
