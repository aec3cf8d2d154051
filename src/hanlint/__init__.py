"""hanlint: spacing, punctuation and case linter for mixed Chinese/Latin text.

Checks and corrects text that mixes full-width (CJK) and half-width
(Latin, digits) content, in plain prose and in markdown with blog or
docs dialect extensions.

Usage:
    >>> from hanlint import run
    >>> result = run("中文english混排")
    >>> result.result
    '中文 english 混排'
    >>> [v.name for v in result.validations]
    ['space-full-width-content', 'space-full-width-content']

    >>> # Reuse a configured linter
    >>> from hanlint import Linter, LintConfig
    >>> linter = Linter(LintConfig(rules=("space-full-width-content",)))
    >>> linter("中文english").result
    '中文 english'

Thread Safety:
    Configuration is held in a ContextVar while a document is linted, and
    nothing is shared between documents. Safe to lint concurrently.

"""

from __future__ import annotations

from hanlint.config import IgnorePolicy, LintConfig, lint_config_context
from hanlint.errors import ConfigurationError, HanlintError, SegmentationError, TokenizationError
from hanlint.ignored import IgnoredCase, find_ignored_marks
from hanlint.location import SourceLocation, locate
from hanlint.nodes import Block, DocumentState, IgnoredMark, Mark, MarkKind, ParserIgnoredSpan
from hanlint.pipeline import Linter, LintResult, run
from hanlint.registry import Catalog, CatalogBuilder, Custom, Named
from hanlint.report import format_report, format_validation
from hanlint.rules import create_default_rule_catalog, create_rule_catalog_with_defaults
from hanlint.segmenters import create_default_segmenter_catalog, create_segmenter_catalog_with_defaults
from hanlint.tokenizer import Tokenizer, tokenize
from hanlint.tokens import MarkSide, Token, TokenType
from hanlint.validation import ValidationIssue, ValidationTarget

__version__ = "0.1.0"

__all__ = [
    "Block",
    "Catalog",
    "CatalogBuilder",
    "ConfigurationError",
    "Custom",
    "DocumentState",
    "HanlintError",
    "IgnorePolicy",
    "IgnoredCase",
    "IgnoredMark",
    "LintConfig",
    "LintResult",
    "Linter",
    "Mark",
    "MarkKind",
    "MarkSide",
    "Named",
    "ParserIgnoredSpan",
    "SegmentationError",
    "SourceLocation",
    "Token",
    "TokenType",
    "TokenizationError",
    "Tokenizer",
    "ValidationIssue",
    "ValidationTarget",
    "__version__",
    "create_default_rule_catalog",
    "create_default_segmenter_catalog",
    "create_rule_catalog_with_defaults",
    "create_segmenter_catalog_with_defaults",
    "find_ignored_marks",
    "format_report",
    "format_validation",
    "lint_config_context",
    "locate",
    "run",
    "tokenize",
]
