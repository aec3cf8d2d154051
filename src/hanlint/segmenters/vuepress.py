"""Docs generator dialect: custom containers and template syntax.

Containers are fenced by colon runs and nest by colon count::

    ::: tip 提示
    body
    :::

Fence lines are removed; the container title becomes a block of its
own, while body lines stay where they are. Code fences are skipped.
A container that is never closed runs to the end of the block and its
body stays plain content.

``{{ expressions }}`` and ``[[toc]]`` become raw marks.

"""

from __future__ import annotations

import re

from hanlint.nodes import Block, DocumentState, Mark
from hanlint.segmenters.blocks import BlockSplit, Dropped, exclude, iter_lines, line_end_with_newline, map_blocks
from hanlint.segmenters.fence import Fence, classify_fence

NAME = "vuepress"

_CONTAINER_OPEN = re.compile(r"^(?P<indent>\s*)(?P<colons>:{3,})\s*(?P<name>[\w-]+)(?P<gap>\s*)(?P<title>.*?)\s*$")
_CONTAINER_CLOSE = re.compile(r"^\s*(?P<colons>:{3,})\s*$")
_RAW = re.compile(r"\{\{.*?\}\}|\[\[toc\]\]", re.DOTALL)


def scan_containers(text: str) -> tuple[list[Dropped], list[tuple[int, int]]]:
    """Find container fence lines.

    Returns:
        (spans to drop, raw-mark candidates outside code fences as (start, end))
    """
    drop: list[Dropped] = []
    outside_code: list[tuple[int, int]] = []
    stack: list[int] = []
    fence: Fence | None = None
    for start, end, line in iter_lines(text):
        if fence is not None:
            if fence.is_closed_by(line):
                fence = None
            continue
        fence = classify_fence(line)
        if fence is not None:
            continue
        close = _CONTAINER_CLOSE.match(line)
        if close is not None and stack:
            count = len(close.group("colons"))
            if count in stack:
                while stack.pop() != count:
                    pass
                drop.append((start, line_end_with_newline(text, end), "container"))
                continue
        opened = _CONTAINER_OPEN.match(line)
        if opened is not None:
            stack.append(len(opened.group("colons")))
            if opened.group("title"):
                title_start = start + opened.start("title")
                title_end = start + opened.end("title")
                drop.append((start, title_start, "container"))
                drop.append((title_end, line_end_with_newline(text, end), "container"))
            else:
                drop.append((start, line_end_with_newline(text, end), "container"))
            continue
        outside_code.append((start, end))
    return drop, outside_code


def parse_vuepress(state: DocumentState) -> DocumentState:
    def split(block: Block) -> BlockSplit:
        drop, lines = scan_containers(block.value)
        marks = [
            Mark.raw(start + m.start(), start + m.end(), meta="interpolation")
            for start, end in lines
            for m in _RAW.finditer(block.value, start, end)
        ]
        return exclude(block.with_marks(marks), drop)

    return map_blocks(state, split)
