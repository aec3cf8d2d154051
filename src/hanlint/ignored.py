"""User-supplied ignore patterns.

An ignore pattern names text whose validations should be filtered out
(or, under IgnorePolicy.ONLY, kept exclusively). Three forms are accepted:

- a literal string, matched verbatim
- a compiled regular expression
- an IgnoredCase: ``text_start`` ... ``text_end`` with optional ``prefix``
  and ``suffix`` that anchor the match but are not part of the span

IgnoredCase also has a compact text form used in inline comments::

    prefix-,textStart,textEnd,-suffix

where every part but ``textStart`` is optional. ``中文-,english`` ignores
``english`` only where it follows ``中文``.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from hanlint.errors import ConfigurationError
from hanlint.nodes import IgnoredMark


@dataclass(frozen=True, slots=True)
class IgnoredCase:
    """A structured ignore pattern.

    Attributes:
        text_start: Text the ignored span starts with (required)
        text_end: Text the ignored span ends with; empty means the span
            is just text_start
        prefix: Text that must directly precede the span
        suffix: Text that must directly follow the span

    """

    text_start: str
    text_end: str = ""
    prefix: str = ""
    suffix: str = ""

    def __post_init__(self) -> None:
        if not self.text_start:
            raise ConfigurationError("Ignored case needs a start text", name=str(self))

    @classmethod
    def parse(cls, text: str) -> IgnoredCase:
        """Parse the ``prefix-,textStart,textEnd,-suffix`` form.

        Raises:
            ConfigurationError: If the text has no start part or too many parts
        """
        parts = text.strip().split(",")
        prefix = suffix = ""
        if parts and parts[0].endswith("-"):
            prefix = parts.pop(0)[:-1]
        if parts and parts[-1].startswith("-"):
            suffix = parts.pop()[1:]
        if not 1 <= len(parts) <= 2 or not parts[0]:
            raise ConfigurationError("Invalid ignored case", name=text)
        text_end = parts[1] if len(parts) == 2 else ""
        return cls(text_start=parts[0], text_end=text_end, prefix=prefix, suffix=suffix)

    def __str__(self) -> str:
        parts = [self.text_start]
        if self.text_end:
            parts.append(self.text_end)
        if self.prefix:
            parts.insert(0, f"{self.prefix}-")
        if self.suffix:
            parts.append(f"-{self.suffix}")
        return ",".join(parts)

    def finditer(self, content: str) -> list[tuple[int, int]]:
        """Find every span this case matches, as block-relative offsets."""
        spans: list[tuple[int, int]] = []
        pos = 0
        while True:
            start = content.find(self.text_start, pos)
            if start < 0:
                return spans
            pos = start + 1
            if self.prefix and not content.endswith(self.prefix, 0, start):
                continue
            end = start + len(self.text_start)
            if self.text_end:
                end_at = content.find(self.text_end, end)
                if end_at < 0:
                    return spans
                end = end_at + len(self.text_end)
            if self.suffix and not content.startswith(self.suffix, end):
                continue
            spans.append((start, end))
            pos = end


IgnorePattern = str | re.Pattern[str] | IgnoredCase


def _spans(content: str, pattern: IgnorePattern) -> list[tuple[int, int]]:
    if isinstance(pattern, IgnoredCase):
        return pattern.finditer(content)
    if isinstance(pattern, re.Pattern):
        return [match.span() for match in pattern.finditer(content) if match.end() > match.start()]
    if not pattern:
        return []
    spans: list[tuple[int, int]] = []
    start = content.find(pattern)
    while start >= 0:
        spans.append((start, start + len(pattern)))
        start = content.find(pattern, start + len(pattern))
    return spans


def find_ignored_marks(
    content: str, cases: Sequence[IgnorePattern], offset: int = 0
) -> tuple[list[IgnoredMark], set[int]]:
    """Find the spans of a block matched by ignore patterns.

    Args:
        content: Block text
        cases: Ignore patterns
        offset: Absolute offset of the block in the document

    Returns:
        (ignored marks in absolute offsets, indexes of the patterns that matched)
    """
    marks: list[IgnoredMark] = []
    matched: set[int] = set()
    for i, pattern in enumerate(cases):
        for start, end in _spans(content, pattern):
            marks.append(IgnoredMark(start + offset, end + offset))
            matched.add(i)
    marks.sort(key=lambda mark: (mark.start, mark.end))
    return marks, matched


def describe(pattern: IgnorePattern) -> str:
    """Short text naming a pattern in log messages."""
    if isinstance(pattern, re.Pattern):
        return f"/{pattern.pattern}/"
    return str(pattern)
