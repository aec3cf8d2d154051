"""Markdown segmenter.

Splits each block into the pieces of prose markdown actually contains
(paragraphs, heading text, list and quote content, table cells) and
marks inline constructs inside them. See BlockScanner and InlineScanner
for exactly what is kept, dropped and marked.

"""

from __future__ import annotations

from hanlint.nodes import Block, DocumentState, ParserIgnoredSpan
from hanlint.segmenters.blocks import BlockSplit, carve, map_blocks
from hanlint.segmenters.markdown.block import BlockScan, BlockScanner
from hanlint.segmenters.markdown.inline import InlineScanner

NAME = "markdown"


def split_markdown(block: Block) -> BlockSplit:
    """Split one block into its lintable markdown pieces."""
    scan = BlockScanner(block.value, at_document_start=block.start == 0).scan()
    ignored = [ParserIgnoredSpan(block.start + start, block.start + end, reason) for start, end, reason in scan.drop]
    pieces = [piece.with_marks(InlineScanner(piece.value, piece.marks).scan()) for piece in carve(block, scan.keep)]
    return pieces, ignored


def parse_markdown(state: DocumentState) -> DocumentState:
    return map_blocks(state, split_markdown)


__all__ = ["BlockScan", "BlockScanner", "InlineScanner", "NAME", "parse_markdown", "split_markdown"]
