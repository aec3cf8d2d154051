"""Blog engine dialect: front matter and tag plugins.

- Front matter at the start of the document, fenced by ``---`` (YAML) or
  ``;;;`` (JSON), is removed. Without a closing fence it is not front
  matter and stays plain content.
- Tags with a raw body (``{% codeblock %}...{% endcodeblock %}`` and
  friends) are removed whole. Without an end tag the rest of the block
  is removed.
- Other ``{% tag %}`` tags, ``{{ expressions }}`` and ``{# comments #}``
  become raw marks. An unclosed ``{%`` is plain content.

"""

from __future__ import annotations

import re

from hanlint.nodes import Block, DocumentState, Mark
from hanlint.segmenters.blocks import BlockSplit, Dropped, exclude, iter_lines, line_end_with_newline, map_blocks

NAME = "hexo"

RAW_BODY_TAGS = frozenset(
    {
        "codeblock",
        "code",
        "raw",
        "verbatim",
        "include_code",
        "jsfiddle",
        "gist",
        "blockquote",
        "pullquote",
    }
)

FRONT_MATTER_FENCES = ("---", ";;;")

_TAG = re.compile(r"\{%-?\s*(end)?([A-Za-z_][\w-]*)(.*?)-?%\}", re.DOTALL)
_EXPRESSION = re.compile(r"\{\{.*?\}\}|\{#.*?#\}", re.DOTALL)


def find_front_matter(text: str) -> int | None:
    """End offset of front matter at the start of text, None if absent."""
    lines = iter_lines(text)
    _, _, first = next(lines)
    fence = first.rstrip()
    if fence not in FRONT_MATTER_FENCES:
        return None
    for _, end, line in lines:
        if line.rstrip() == fence:
            return line_end_with_newline(text, end)
    return None


def scan_tags(text: str, start: int = 0) -> tuple[list[Dropped], list[Mark]]:
    """Find raw-bodied tag pairs (to drop) and other tags (to mark raw)."""
    drop: list[Dropped] = []
    marks: list[Mark] = []
    pos = start
    while True:
        tag = _TAG.search(text, pos)
        expr = _EXPRESSION.search(text, pos)
        if expr is not None and (tag is None or expr.start() < tag.start()):
            meta = "interpolation" if expr.group().startswith("{{") else "comment"
            marks.append(Mark.raw(expr.start(), expr.end(), meta=meta))
            pos = expr.end()
            continue
        if tag is None:
            return drop, marks
        name = tag.group(2)
        if tag.group(1) is None and name in RAW_BODY_TAGS:
            end_tag = re.compile(r"\{%-?\s*end" + re.escape(name) + r"\s*-?%\}")
            closing = end_tag.search(text, tag.end())
            end = closing.end() if closing is not None else len(text)
            drop.append((tag.start(), end, f"tag:{name}"))
            pos = end
            continue
        marks.append(Mark.raw(tag.start(), tag.end(), meta="tag"))
        pos = tag.end()


def parse_hexo(state: DocumentState) -> DocumentState:
    def split(block: Block) -> BlockSplit:
        drop: list[Dropped] = []
        start = 0
        if block.start == 0:
            front = find_front_matter(block.value)
            if front is not None:
                drop.append((0, front, "front-matter"))
                start = front
        tag_drop, marks = scan_tags(block.value, start)
        return exclude(block.with_marks(marks), drop + tag_drop)

    return map_blocks(state, split)
