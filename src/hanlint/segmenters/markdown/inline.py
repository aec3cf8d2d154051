"""Inline mark scanner for markdown.

Finds inline constructs in a kept block and turns them into marks:

RAW (opaque):
- code spans, autolinks, HTML comments
- HTML tags that have no matching partner, void elements
- footnote references ``[^id]``

HYPER (delimiters opaque, content linted):
- paired HTML tags ``<b>...</b>``
- links and images; the close delimiter runs from ``]`` through the
  destination ``(url)`` or reference ``[ref]``
- emphasis, strong and strikethrough

Scanning happens in three passes, from tightest binding to loosest:
opaque constructs first (a ``*`` inside a code span is not emphasis),
then links, then emphasis inside every region the earlier passes left
lintable.

Thread Safety:
InlineScanner instances are single-use. Create one per block.

"""

from __future__ import annotations

import re
from collections.abc import Sequence

from hanlint.nodes import Mark

_AUTOLINK = re.compile(
    r"<(?:[A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*"
    r"|[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*)>"
)
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_OPEN_TAG = re.compile(
    r"""<([A-Za-z][A-Za-z0-9-]*)"""
    r"""(?:\s+[A-Za-z_:][\w.:-]*(?:\s*=\s*(?:[^\s"'=<>`]+|'[^']*'|"[^"]*"))?)*\s*(/?)>"""
)
_CLOSE_TAG = re.compile(r"</([A-Za-z][A-Za-z0-9-]*)\s*>")
_FOOTNOTE_REF = re.compile(r"\[\^[^\]\s]+\]")

VOID_ELEMENTS = frozenset(
    {"area", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

_EMPHASIS_META = {1: "emphasis", 2: "strong"}


class InlineScanner:
    """Single-use inline scanner for one block.

    Usage:
        >>> marks = InlineScanner("用 `code` 和 **强调**").scan()
        >>> [(m.meta, m.start, m.end) for m in marks]
        [('code', 2, 8), ('strong', 11, 17)]

    """

    __slots__ = ("_text", "_marks", "_taken", "_hyper_at")

    def __init__(self, text: str, existing: Sequence[Mark] = ()) -> None:
        """Initialize scanner.

        Args:
            text: Block text
            existing: Marks already in the block; they are skipped over
        """
        self._text = text
        self._marks: list[Mark] = []
        # Opaque spans by start offset: raw marks and hyper delimiters
        self._taken: dict[int, int] = {}
        # Hyper marks by start offset, so emphasis can descend into them
        self._hyper_at: dict[int, Mark] = {}
        for mark in existing:
            self._register(mark)

    def scan(self) -> list[Mark]:
        """Find all inline marks, in discovery order."""
        end = len(self._text)
        self._scan_opaque(0, end)
        self._scan_links(0, end)
        self._scan_emphasis(0, end)
        return self._marks

    # =========================================================================
    # Bookkeeping
    # =========================================================================

    def _register(self, mark: Mark) -> None:
        for start, end in mark.delimiters():
            if end > start:
                self._taken.setdefault(start, end)
        if not mark.is_raw:
            self._hyper_at.setdefault(mark.start, mark)

    def _add(self, mark: Mark) -> None:
        self._marks.append(mark)
        self._register(mark)

    # =========================================================================
    # Pass 1: code spans, autolinks, comments, HTML tags
    # =========================================================================

    def _code_span_end(self, pos: int, end: int) -> tuple[int, int]:
        """(run length, end of code span or -1) for a backtick run at pos."""
        text = self._text
        run = 0
        while pos + run < end and text[pos + run] == "`":
            run += 1
        search = pos + run
        while search < end:
            close = text.find("`" * run, search, end)
            if close < 0:
                break
            close_run = 0
            while close + close_run < end and text[close + close_run] == "`":
                close_run += 1
            if close_run == run:
                return run, close + run
            search = close + close_run
        return run, -1

    def _scan_opaque(self, start: int, end: int) -> None:
        text = self._text
        tags: list[tuple[str, int, int, bool]] = []
        pos = start
        while pos < end:
            if pos in self._taken:
                pos = self._taken[pos]
                continue
            char = text[pos]
            if char == "\\":
                pos += 2
                continue
            if char == "`":
                run, close = self._code_span_end(pos, end)
                if close > 0:
                    self._add(Mark.raw(pos, close, meta="code"))
                    pos = close
                else:
                    pos += run
                continue
            if char == "<":
                found = False
                for pattern, meta in ((_COMMENT, "comment"), (_AUTOLINK, "autolink")):
                    match = pattern.match(text, pos, end)
                    if match is not None:
                        self._add(Mark.raw(pos, match.end(), meta=meta))
                        pos = match.end()
                        found = True
                        break
                if found:
                    continue
                match = _CLOSE_TAG.match(text, pos, end)
                if match is not None:
                    tags.append((match.group(1).lower(), pos, match.end(), True))
                    pos = match.end()
                    continue
                match = _OPEN_TAG.match(text, pos, end)
                if match is not None:
                    name = match.group(1).lower()
                    if match.group(2) or name in VOID_ELEMENTS:
                        self._add(Mark.raw(pos, match.end(), meta="html"))
                    else:
                        tags.append((name, pos, match.end(), False))
                    pos = match.end()
                    continue
            pos += 1
        self._pair_tags(tags)

    def _pair_tags(self, tags: list[tuple[str, int, int, bool]]) -> None:
        """Pair open and close tags by name; unpaired tags become raw."""
        stack: list[tuple[str, int, int, bool]] = []
        for tag in tags:
            name, start, end, closing = tag
            if not closing:
                stack.append(tag)
                continue
            for depth in range(len(stack) - 1, -1, -1):
                if stack[depth][0] == name:
                    for orphan in stack[depth + 1 :]:
                        self._add(Mark.raw(orphan[1], orphan[2], meta="html"))
                    opener = stack[depth]
                    del stack[depth:]
                    self._add(Mark.hyper(opener[1], opener[2], start, end, "html"))
                    break
            else:
                self._add(Mark.raw(start, end, meta="html"))
        for orphan in stack:
            self._add(Mark.raw(orphan[1], orphan[2], meta="html"))

    # =========================================================================
    # Pass 2: links, images, footnote references
    # =========================================================================

    def _matching(self, pos: int, opener: str, closer: str, stop_at_newline: bool = False) -> int:
        """Index of the closer balancing the opener at pos, or -1."""
        text = self._text
        depth = 0
        i = pos
        while i < len(text):
            if i in self._taken and i != pos:
                i = self._taken[i]
                continue
            char = text[i]
            if char == "\\":
                i += 2
                continue
            if char == "\n" and stop_at_newline:
                return -1
            if char == opener:
                depth += 1
            elif char == closer:
                depth -= 1
                if depth == 0:
                    return i
            i += 1
        return -1

    def _scan_links(self, start: int, end: int) -> None:
        text = self._text
        pos = start
        while pos < end:
            if pos in self._taken:
                pos = self._taken[pos]
                continue
            char = text[pos]
            if char == "\\":
                pos += 2
                continue
            footnote = _FOOTNOTE_REF.match(text, pos, end) if char == "[" else None
            if footnote is not None:
                self._add(Mark.raw(pos, footnote.end(), meta="footnote"))
                pos = footnote.end()
                continue
            image = char == "!" and text.startswith("[", pos + 1)
            if char != "[" and not image:
                pos += 1
                continue
            open_end = pos + (2 if image else 1)
            close = self._matching(open_end - 1, "[", "]")
            if close < 0 or close >= end:
                pos = open_end
                continue
            after = close + 1
            if text.startswith("(", after):
                dest = self._matching(after, "(", ")", stop_at_newline=True)
            elif text.startswith("[", after):
                dest = text.find("]", after + 1, end)
                if dest >= 0 and "\n" in text[after:dest]:
                    dest = -1
            else:
                dest = -1
            if dest < 0 or dest >= end:
                pos = open_end
                continue
            self._add(Mark.hyper(pos, open_end, close, dest + 1, "image" if image else "link"))
            self._scan_links(open_end, close)
            pos = dest + 1

    # =========================================================================
    # Pass 3: emphasis, strong, strikethrough
    # =========================================================================

    def _can_open(self, start: int, end: int, char: str) -> bool:
        text = self._text
        if end >= len(text) or text[end].isspace():
            return False
        if char == "_" and start > 0 and text[start - 1].isascii() and text[start - 1].isalnum():
            return False
        return True

    def _can_close(self, start: int, end: int, char: str) -> bool:
        text = self._text
        if start == 0 or text[start - 1].isspace():
            return False
        if char == "_" and end < len(text) and text[end].isascii() and text[end].isalnum():
            return False
        return True

    def _run_end(self, pos: int, end: int) -> int:
        char = self._text[pos]
        run_end = pos
        while run_end < end and self._text[run_end] == char:
            run_end += 1
        return run_end

    def _find_closer(self, pos: int, end: int, char: str, length: int) -> int:
        text = self._text
        while pos < end:
            if pos in self._hyper_at:
                pos = self._hyper_at[pos].end
                continue
            if pos in self._taken:
                pos = self._taken[pos]
                continue
            current = text[pos]
            if current == "\\":
                pos += 2
                continue
            if current == char:
                run_end = self._run_end(pos, end)
                if run_end - pos == length and self._can_close(pos, run_end, char):
                    return pos
                pos = run_end
                continue
            pos += 1
        return -1

    def _scan_emphasis(self, start: int, end: int) -> None:
        text = self._text
        pos = start
        while pos < end:
            hyper = self._hyper_at.get(pos)
            if hyper is not None:
                assert hyper.inner_start is not None and hyper.inner_end is not None
                self._scan_emphasis(hyper.inner_start, hyper.inner_end)
                pos = hyper.end
                continue
            if pos in self._taken:
                pos = self._taken[pos]
                continue
            char = text[pos]
            if char == "\\":
                pos += 2
                continue
            if char not in "*_~":
                pos += 1
                continue
            run_end = self._run_end(pos, end)
            length = run_end - pos
            if (char == "~" and length != 2) or not self._can_open(pos, run_end, char):
                pos = run_end
                continue
            close = self._find_closer(run_end, end, char, length)
            if close <= run_end:
                pos = run_end
                continue
            if char == "~":
                meta = "delete"
            else:
                meta = _EMPHASIS_META.get(length, "strong-emphasis")
            self._add(Mark.hyper(pos, run_end, close, close + length, meta))
            self._scan_emphasis(run_end, close)
            pos = close + length
