"""Disabled regions and inline ignore cases.

Two kinds of HTML comment control linting from inside a document::

    <!-- hanlint disable -->
    text that is never linted
    <!-- hanlint enable -->

    <!-- hanlint ignore: 中文-,english -->

A disable comment without a matching enable disables the rest of the
block. Ignore comments are parsed as IgnoredCase text and added to the
document's ignore patterns. Both kinds of comment are removed from
linting. The older ``zhlint`` keyword is accepted in place of
``hanlint``.

"""

from __future__ import annotations

import re
from dataclasses import replace

from hanlint.config import get_lint_config
from hanlint.errors import ConfigurationError
from hanlint.ignored import IgnoredCase
from hanlint.nodes import Block, DocumentState
from hanlint.segmenters.blocks import BlockSplit, Dropped, exclude, map_blocks
from hanlint.utils.logger import get_logger

NAME = "ignore"

logger = get_logger(__name__)

_DISABLE = re.compile(r"<!--\s*(?:hanlint|zhlint)\s+disable\s*-->")
_ENABLE = re.compile(r"<!--\s*(?:hanlint|zhlint)\s+enable\s*-->")
_IGNORE = re.compile(r"<!--\s*(?:hanlint|zhlint)\s+ignore\s*:\s*(.*?)\s*-->", re.DOTALL)


def find_disabled_regions(text: str) -> list[Dropped]:
    """Spans from each disable comment through its enable comment."""
    regions: list[Dropped] = []
    pos = 0
    while True:
        start = _DISABLE.search(text, pos)
        if start is None:
            return regions
        end = _ENABLE.search(text, start.end())
        if end is None:
            regions.append((start.start(), len(text), "disabled"))
            return regions
        regions.append((start.start(), end.end(), "disabled"))
        pos = end.end()


def find_ignore_comments(text: str) -> list[tuple[int, int, str]]:
    """(start, end, case text) for every ignore comment."""
    return [(m.start(), m.end(), m.group(1)) for m in _IGNORE.finditer(text)]


def parse_ignore(state: DocumentState) -> DocumentState:
    """Drop disabled regions and collect inline ignore cases."""
    config = get_lint_config()
    cases: list[IgnoredCase] = []

    def split(block: Block) -> BlockSplit:
        drop = find_disabled_regions(block.value)
        for start, end, text in find_ignore_comments(block.value):
            if any(d_start <= start < d_end for d_start, d_end, _ in drop):
                continue
            drop.append((start, end, "ignore-comment"))
            try:
                cases.append(IgnoredCase.parse(text))
            except ConfigurationError:
                if config.strict:
                    raise
                (config.logger or logger).warning("Skipping invalid ignore comment %r", text)
        return exclude(block, drop)

    state = map_blocks(state, split)
    if cases:
        state = replace(state, ignored_by_rules=state.ignored_by_rules + tuple(cases))
    return state
