"""Default segmenter catalog.

Segmenters run in catalog order so that specific syntaxes are carved out
before generic markdown sees the remainder: disabled regions first, then
the blog and docs dialects, then markdown.
"""

from __future__ import annotations

from hanlint.registry import Catalog, CatalogBuilder
from hanlint.segmenters.hexo import NAME as HEXO, parse_hexo
from hanlint.segmenters.ignore import NAME as IGNORE, parse_ignore
from hanlint.segmenters.markdown import NAME as MARKDOWN, parse_markdown
from hanlint.segmenters.vuepress import NAME as VUEPRESS, parse_vuepress

DEFAULT_SEGMENTERS = (
    (IGNORE, parse_ignore),
    (HEXO, parse_hexo),
    (VUEPRESS, parse_vuepress),
    (MARKDOWN, parse_markdown),
)

# Cached singleton, thread-safe since Catalog is immutable
_DEFAULT_CATALOG: Catalog | None = None


def create_segmenter_catalog_with_defaults() -> CatalogBuilder:
    """Create a builder pre-populated with the default segmenters."""
    return CatalogBuilder("segmenter").register_all(DEFAULT_SEGMENTERS)


def create_default_segmenter_catalog() -> Catalog:
    """Get the default segmenter catalog (cached singleton)."""
    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = create_segmenter_catalog_with_defaults().build()
    return _DEFAULT_CATALOG
