"""Dialect segmenters for hanlint.

A segmenter is a pure callable ``(DocumentState) -> DocumentState``. It
may drop blocks, split them into smaller blocks, or add marks inside
them, but never widens a block an earlier segmenter produced. Every span
it removes is recorded in ``ignored_by_parsers`` with a reason.

Each dialect documents what it does with unterminated constructs; none
of them raises on malformed markup.
"""

from __future__ import annotations

from collections.abc import Callable

from hanlint.nodes import DocumentState
from hanlint.segmenters.hexo import parse_hexo
from hanlint.segmenters.ignore import parse_ignore
from hanlint.segmenters.markdown import parse_markdown
from hanlint.segmenters.registry import (
    DEFAULT_SEGMENTERS,
    create_default_segmenter_catalog,
    create_segmenter_catalog_with_defaults,
)
from hanlint.segmenters.vuepress import parse_vuepress

Segmenter = Callable[[DocumentState], DocumentState]

__all__ = [
    "DEFAULT_SEGMENTERS",
    "Segmenter",
    "create_default_segmenter_catalog",
    "create_segmenter_catalog_with_defaults",
    "parse_hexo",
    "parse_ignore",
    "parse_markdown",
    "parse_vuepress",
]
