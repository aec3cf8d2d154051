"""Helpers segmenters use to narrow blocks.

Every segmenter works block by block: it looks at one block's text,
decides which spans to drop and which marks to add, and hands the rest
back as one or more smaller blocks. Offsets passed to these helpers are
block-relative.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import replace

from hanlint.nodes import Block, DocumentState, ParserIgnoredSpan

Span = tuple[int, int]
Dropped = tuple[int, int, str]
BlockSplit = tuple[list[Block], list[ParserIgnoredSpan]]


def iter_lines(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield (start, end, line) for every line; end excludes the newline."""
    pos = 0
    length = len(text)
    while pos <= length:
        nl = text.find("\n", pos)
        end = length if nl < 0 else nl
        yield pos, end, text[pos:end]
        if nl < 0:
            return
        pos = nl + 1


def line_end_with_newline(text: str, end: int) -> int:
    """Offset just past the newline that ends a line (or end of text)."""
    return end + 1 if end < len(text) and text[end] == "\n" else end


def carve(block: Block, keep: Iterable[Span]) -> list[Block]:
    """Cut the kept spans out of a block.

    Empty and whitespace-only spans hold nothing to lint and are skipped.
    """
    pieces: list[Block] = []
    for start, end in sorted(keep):
        if end > start and block.value[start:end].strip():
            pieces.append(block.slice(start, end))
    return pieces


def exclude(block: Block, drop: Iterable[Dropped]) -> BlockSplit:
    """Remove spans from a block and return what remains.

    Overlapping drops are merged. Each drop is recorded, in absolute
    offsets, as a ParserIgnoredSpan.

    Returns:
        (remaining pieces, ignored spans)
    """
    spans = sorted(d for d in drop if d[1] > d[0])
    if not spans:
        return [block], []
    keep: list[Span] = []
    ignored: list[ParserIgnoredSpan] = []
    pos = 0
    for start, end, reason in spans:
        if end <= pos:
            continue
        start = max(start, pos)
        keep.append((pos, start))
        ignored.append(ParserIgnoredSpan(block.start + start, block.start + end, reason))
        pos = end
    keep.append((pos, len(block.value)))
    return carve(block, keep), ignored


def map_blocks(state: DocumentState, split: Callable[[Block], BlockSplit]) -> DocumentState:
    """Apply split to every block and collect the results into a new state."""
    blocks: list[Block] = []
    ignored = list(state.ignored_by_parsers)
    for block in state.blocks:
        pieces, spans = split(block)
        blocks.extend(pieces)
        ignored.extend(spans)
    ignored.sort(key=lambda span: (span.start, span.end))
    return replace(state, blocks=tuple(blocks), ignored_by_parsers=tuple(ignored))
