"""Source location tracking for diagnostics.

Provides SourceLocation for turning absolute document offsets (as carried
by validations) into line/column positions for human-readable reports.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

import bisect
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for diagnostics.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute offset in the document
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(lineno=1, col_offset=3, offset=2)
        >>> str(loc)
        '1:3'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for diagnostics.

        Returns:
            Formatted string like "file.md:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"


class LineIndex:
    """Offset to line/column lookup for one document.

    Line starts are computed once, so locating many validations in the same
    document is O(log n) each.
    """

    __slots__ = ("_text", "_line_starts", "_source_file")

    def __init__(self, text: str, source_file: str | None = None) -> None:
        self._text = text
        self._source_file = source_file
        starts = [0]
        pos = text.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        self._line_starts = starts

    def locate(self, offset: int) -> SourceLocation:
        """Get the location of an absolute offset (clamped to the text)."""
        offset = max(0, min(offset, len(self._text)))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return SourceLocation(
            lineno=line + 1,
            col_offset=offset - self._line_starts[line] + 1,
            offset=offset,
            source_file=self._source_file,
        )

    def line_text(self, lineno: int) -> str:
        """Get the text of a 1-indexed line, without its line break."""
        start = self._line_starts[lineno - 1]
        end = self._text.find("\n", start)
        if end == -1:
            end = len(self._text)
        return self._text[start:end].rstrip("\r")


def locate(text: str, offset: int, source_file: str | None = None) -> SourceLocation:
    """Get the line/column location of an offset in text.

    Example:
        >>> locate("ab\\ncd", 4)
        SourceLocation(lineno=2, col_offset=2, offset=4, source_file=None)
    """
    return LineIndex(text, source_file).locate(offset)
