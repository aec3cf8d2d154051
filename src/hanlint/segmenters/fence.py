"""Fenced code classification shared by the markdown and container segmenters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Fence:
    """An opening code fence.

    Attributes:
        char: "`" or "~"
        count: Number of fence characters (3 or more)
        indent: Leading spaces before the fence
        info: Info string (language hint)

    """

    char: str
    count: int
    indent: int
    info: str = ""

    def is_closed_by(self, line: str) -> bool:
        """Check if line is a closing fence for this block.

        Closing fences may be indented 0-3 spaces and must be at least as
        long as the opening fence, with nothing but whitespace after.
        """
        indent = len(line) - len(line.lstrip(" "))
        if indent >= 4:
            return False
        content = line[indent:]
        count = len(content) - len(content.lstrip(self.char))
        if count < self.count:
            return False
        return content[count:].strip() == ""


def classify_fence(line: str) -> Fence | None:
    """Try to classify a line as the start of fenced code.

    Fenced code blocks start with 3+ backticks or tildes.
    Backtick fences cannot have backticks in the info string.

    Args:
        line: Full line, leading whitespace included

    Returns:
        Fence if valid, None otherwise.
    """
    indent = len(line) - len(line.lstrip(" "))
    if indent >= 4:
        return None
    content = line[indent:]
    if not content or content[0] not in "`~":
        return None
    char = content[0]
    count = len(content) - len(content.lstrip(char))
    if count < 3:
        return None
    info = content[count:].strip()
    if char == "`" and "`" in info:
        return None
    return Fence(char=char, count=count, indent=indent, info=info.split()[0] if info else "")
