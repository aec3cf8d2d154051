"""Default rule catalog.

Rules run strictly in catalog order: each rule's decisions are inputs to
the ones after it, and later rules win at the same boundary.
"""

from __future__ import annotations

from hanlint.registry import Catalog, CatalogBuilder
from hanlint.rules.case_abbr import NAME as CASE_ABBR, case_abbr
from hanlint.rules.case_backslash import NAME as CASE_BACKSLASH, case_backslash
from hanlint.rules.case_datetime import NAME as CASE_DATETIME, case_datetime
from hanlint.rules.case_datetime_zh import NAME as CASE_DATETIME_ZH, case_datetime_zh
from hanlint.rules.case_ellipsis import NAME as CASE_ELLIPSIS, case_ellipsis
from hanlint.rules.case_html_entity import NAME as CASE_HTML_ENTITY, case_html_entity
from hanlint.rules.case_linebreak import NAME as CASE_LINEBREAK, case_linebreak
from hanlint.rules.case_math_exp import NAME as CASE_MATH_EXP, case_math_exp
from hanlint.rules.case_raw import NAME as CASE_RAW, case_raw
from hanlint.rules.case_traditional import NAME as CASE_TRADITIONAL, case_traditional
from hanlint.rules.mark_hyper import NAME as MARK_HYPER, mark_hyper
from hanlint.rules.mark_raw import NAME as MARK_RAW, mark_raw
from hanlint.rules.space_brackets import NAME as SPACE_BRACKETS, space_brackets
from hanlint.rules.space_full_width_content import (
    NAME as SPACE_FULL_WIDTH_CONTENT,
    space_full_width_content,
)
from hanlint.rules.space_punctuation import NAME as SPACE_PUNCTUATION, space_punctuation
from hanlint.rules.space_quotes import NAME as SPACE_QUOTES, space_quotes
from hanlint.rules.unify_punctuation import NAME as UNIFY_PUNCTUATION, unify_punctuation

DEFAULT_RULES = (
    (MARK_RAW, mark_raw),
    (MARK_HYPER, mark_hyper),
    (UNIFY_PUNCTUATION, unify_punctuation),
    (CASE_ABBR, case_abbr),
    (SPACE_FULL_WIDTH_CONTENT, space_full_width_content),
    (SPACE_PUNCTUATION, space_punctuation),
    (CASE_MATH_EXP, case_math_exp),
    (CASE_BACKSLASH, case_backslash),
    (SPACE_BRACKETS, space_brackets),
    (SPACE_QUOTES, space_quotes),
    (CASE_TRADITIONAL, case_traditional),
    (CASE_DATETIME, case_datetime),
    (CASE_DATETIME_ZH, case_datetime_zh),
    (CASE_ELLIPSIS, case_ellipsis),
    (CASE_HTML_ENTITY, case_html_entity),
    (CASE_RAW, case_raw),
    (CASE_LINEBREAK, case_linebreak),
)

# Cached singleton, thread-safe since Catalog is immutable
_DEFAULT_CATALOG: Catalog | None = None


def create_rule_catalog_with_defaults() -> CatalogBuilder:
    """Create a builder pre-populated with the default rules.

    Use this to append custom rules to the default set:

        >>> builder = create_rule_catalog_with_defaults()
        >>> builder.register("my-rule", my_rule)
        >>> catalog = builder.build()
    """
    return CatalogBuilder("rule").register_all(DEFAULT_RULES)


def create_default_rule_catalog() -> Catalog:
    """Get the default rule catalog (cached singleton)."""
    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = create_rule_catalog_with_defaults().build()
    return _DEFAULT_CATALOG
