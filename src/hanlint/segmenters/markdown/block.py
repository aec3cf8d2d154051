"""Line-based block scanner for markdown.

Walks a block line by line, in the manner of a CommonMark lexer, and
sorts every line into text to lint or markup to drop:

Dropped (recorded with a reason):
- fenced code (an unclosed fence runs to the end of the block)
- indented code
- HTML blocks of types 1-7 (an unclosed one runs to the end of the block)
- front matter at the start of the document
- thematic breaks, setext underlines, table delimiter rows
- link reference definitions

Kept:
- paragraph text, over as many lines as the paragraph spans
- heading text without its markers
- block quote and list item content, without the container prefix or
  task marker (one paragraph per container line plus its lazy continuation)
- table cells, each on its own
- footnote definition text

"""

from __future__ import annotations

import re
from dataclasses import dataclass

from hanlint.segmenters.blocks import Dropped, Span, iter_lines
from hanlint.segmenters.fence import classify_fence
from hanlint.segmenters.markdown.html import classify_html_block, html_block_ends

_ATX = re.compile(r"#{1,6}(?:[ \t]+|$)")
_SETEXT = re.compile(r"^ {0,3}(?:=+|-+)[ \t]*$")
_THEMATIC = re.compile(r"^ {0,3}(?:(?:\*[ \t]*){3,}|(?:-[ \t]*){3,}|(?:_[ \t]*){3,})$")
_LIST_MARKER = re.compile(r"[ \t]*(?:[-+*]|\d{1,9}[.)])(?:[ \t]+|$)")
_QUOTE_MARKER = re.compile(r"[ \t]{0,3}>[ \t]?")
_TASK_MARKER = re.compile(r"\[[ xX]\][ \t]+")
_LINK_REF = re.compile(r"\[(?!\^)[^\]]+\]:[ \t]*\S+")
_FOOTNOTE_DEF = re.compile(r"\[\^[^\]\s]+\]:[ \t]*")
_TABLE_DELIMITER = re.compile(r"^[ \t]*\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)*\|?[ \t]*$")

# Offset past the opening marker, so an opener never satisfies its own end condition
_HTML_OPENER_LENGTH = {1: 0, 2: 4, 3: 2, 4: 2, 5: 9}


def _indent(line: str) -> int:
    width = 0
    for char in line:
        if char == " ":
            width += 1
        elif char == "\t":
            width += 4 - width % 4
        else:
            break
    return width


@dataclass(frozen=True, slots=True)
class BlockScan:
    """Result of scanning one block (block-relative offsets)."""

    keep: tuple[Span, ...]
    drop: tuple[Dropped, ...]


class BlockScanner:
    """Single-use scanner for one block.

    Usage:
        >>> scan = BlockScanner("# 标题\\n\\n正文").scan()
        >>> scan.keep
        ((2, 4), (6, 8))

    """

    __slots__ = ("_text", "_lines", "_keep", "_drop", "_paragraph", "_at_document_start", "_in_list")

    def __init__(self, text: str, at_document_start: bool = False) -> None:
        """Initialize scanner.

        Args:
            text: Block text
            at_document_start: The block starts at offset 0 of the document
                (front matter is only recognized there)
        """
        self._text = text
        self._lines = list(iter_lines(text))
        self._keep: list[Span] = []
        self._drop: list[Dropped] = []
        self._paragraph: list[int] | None = None
        self._at_document_start = at_document_start
        self._in_list = False

    def scan(self) -> BlockScan:
        i = 0
        if self._at_document_start:
            i = self._try_front_matter()
        while i < len(self._lines):
            i = self._scan_line(i)
        self._close_paragraph()
        return BlockScan(keep=tuple(self._keep), drop=tuple(self._drop))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _close_paragraph(self) -> None:
        if self._paragraph is not None:
            self._keep.append((self._paragraph[0], self._paragraph[1]))
            self._paragraph = None

    def _drop_lines(self, first: int, last: int, reason: str) -> None:
        """Drop lines first..last inclusive (newline of the last one kept)."""
        self._drop.append((self._lines[first][0], self._lines[last][1], reason))

    def _strip_container(self, line: str) -> tuple[int, bool]:
        """Offset past block quote, list and task markers; whether any was found."""
        pos = 0
        found = False
        while True:
            quote = _QUOTE_MARKER.match(line, pos)
            if quote is not None:
                pos = quote.end()
                found = True
                continue
            marker = _LIST_MARKER.match(line, pos)
            if marker is not None and not _THEMATIC.match(line[pos:]):
                pos = marker.end()
                found = True
                self._in_list = True
                task = _TASK_MARKER.match(line, pos)
                if task is not None:
                    pos = task.end()
                continue
            return pos, found

    # =========================================================================
    # Classifiers
    # =========================================================================

    def _try_front_matter(self) -> int:
        """Drop front matter at the start of the document; return next line index."""
        if not self._lines or self._lines[0][2].rstrip() != "---":
            return 0
        for j in range(1, len(self._lines)):
            if self._lines[j][2].rstrip() in ("---", "..."):
                self._drop_lines(0, j, "front-matter")
                return j + 1
        return 0

    def _scan_line(self, i: int) -> int:
        """Classify line i and return the index of the next unclassified line."""
        start, end, line = self._lines[i]
        if not line.strip():
            self._close_paragraph()
            return i + 1

        indent = _indent(line)
        if indent >= 4 and self._paragraph is None and not self._in_list:
            return self._indented_code(i)

        if self._paragraph is not None and _SETEXT.match(line):
            self._close_paragraph()
            self._drop_lines(i, i, "setext-underline")
            return i + 1

        if _THEMATIC.match(line):
            self._close_paragraph()
            self._drop_lines(i, i, "thematic-break")
            return i + 1

        offset, container = self._strip_container(line)
        if container:
            self._close_paragraph()
        elif indent == 0 and self._paragraph is None:
            self._in_list = False
        inner = line[offset:]
        content_start = offset + len(inner) - len(inner.lstrip())
        content = line[content_start:]
        if not content.strip():
            return i + 1

        fence = classify_fence(inner)
        if fence is not None:
            self._close_paragraph()
            for j in range(i + 1, len(self._lines)):
                candidate = self._lines[j][2]
                candidate_offset, _ = self._strip_container(candidate)
                if fence.is_closed_by(candidate[candidate_offset:]):
                    self._drop_lines(i, j, "code-fence")
                    return j + 1
            self._drop.append((start, len(self._text), "code-fence"))
            return len(self._lines)

        html_type = classify_html_block(content, self._paragraph is not None and not container)
        if html_type:
            self._close_paragraph()
            return self._html_block(i, html_type, content)

        heading = _ATX.match(content)
        if heading is not None:
            self._close_paragraph()
            self._heading(start + content_start, heading.end(), content)
            return i + 1

        if self._paragraph is None and _LINK_REF.match(content):
            self._drop_lines(i, i, "link-reference")
            return i + 1

        footnote = _FOOTNOTE_DEF.match(content)
        if footnote is not None:
            self._close_paragraph()
            self._paragraph = [start + content_start + footnote.end(), end]
            return i + 1

        if (
            self._paragraph is None
            and "|" in content
            and i + 1 < len(self._lines)
            and "|" in self._lines[i + 1][2]
            and _TABLE_DELIMITER.match(self._lines[i + 1][2])
        ):
            return self._table(i)

        if self._paragraph is None:
            self._paragraph = [start + content_start, end]
        else:
            self._paragraph[1] = end
        return i + 1

    def _indented_code(self, i: int) -> int:
        last = i
        j = i
        while j < len(self._lines):
            line = self._lines[j][2]
            if line.strip():
                if _indent(line) < 4:
                    break
                last = j
            j += 1
        self._drop_lines(i, last, "indented-code")
        return last + 1

    def _html_block(self, i: int, html_type: int, content: str) -> int:
        if html_type >= 6:
            j = i
            while j + 1 < len(self._lines) and self._lines[j + 1][2].strip():
                j += 1
            self._drop_lines(i, j, "html")
            return j + 1
        if html_block_ends(html_type, content, content[_HTML_OPENER_LENGTH[html_type] :]):
            self._drop_lines(i, i, "html")
            return i + 1
        for j in range(i + 1, len(self._lines)):
            if html_block_ends(html_type, self._lines[j][2]):
                self._drop_lines(i, j, "html")
                return j + 1
        self._drop.append((self._lines[i][0], len(self._text), "html"))
        return len(self._lines)

    def _heading(self, content_at: int, marker_end: int, content: str) -> None:
        text = content.rstrip()
        stripped = text.rstrip("#")
        if len(stripped) < len(text) and (not stripped or stripped[-1] in " \t"):
            text = stripped.rstrip()
        if len(text) > marker_end:
            self._keep.append((content_at + marker_end, content_at + len(text)))

    def _table(self, i: int) -> int:
        self._table_row(i)
        self._drop_lines(i + 1, i + 1, "table-delimiter")
        j = i + 2
        while j < len(self._lines) and self._lines[j][2].strip() and "|" in self._lines[j][2]:
            self._table_row(j)
            j += 1
        return j

    def _table_row(self, i: int) -> None:
        """Keep every non-empty cell of row i."""
        start, _, line = self._lines[i]
        bounds = [-1]
        escaped = False
        for pos, char in enumerate(line):
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == "|":
                bounds.append(pos)
        bounds.append(len(line))
        for left, right in zip(bounds, bounds[1:]):
            cell = line[left + 1 : right]
            if cell.strip():
                lead = len(cell) - len(cell.lstrip())
                self._keep.append((start + left + 1 + lead, start + left + 1 + len(cell.rstrip())))
