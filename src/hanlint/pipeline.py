"""Lint pipeline: segment, tokenize, apply rules, reconstruct.

Control flow per document::

    text -> segmenters (fixed order) -> for each block:
        ignored marks -> tokenize -> rules (catalog order) -> join
    -> splice blocks back -> filter validations by ignored marks

Thread Safety:
    Linter is immutable after construction. lint() sets the config via
    ContextVar for the duration of the call, so one Linter may be used
    from several threads at once.

"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, fields
from typing import Any

from hanlint.config import IgnorePolicy, LintConfig, lint_config_context
from hanlint.errors import SegmentationError
from hanlint.ignored import describe, find_ignored_marks
from hanlint.join import join, replace_blocks
from hanlint.nodes import Block, DocumentState, IgnoredMark, ParserIgnoredSpan
from hanlint.registry import Entry, resolve
from hanlint.rules.registry import create_default_rule_catalog
from hanlint.segmenters.registry import create_default_segmenter_catalog
from hanlint.tokenizer import tokenize
from hanlint.utils.logger import get_logger
from hanlint.validation import PendingValidation, ValidationIssue

logger = get_logger(__name__)

DISABLED = re.compile(r"<!--\s*(?:hanlint|zhlint)\s*disabled\s*-->")


@dataclass(frozen=True, slots=True)
class LintResult:
    """Outcome of linting one document.

    Attributes:
        origin: The input text
        result: The corrected text
        validations: Issues sorted by absolute index
        disabled: The document carried the disabled comment; nothing ran
        ignored_by_parsers: Spans segmenters removed from linting

    """

    origin: str
    result: str
    validations: tuple[ValidationIssue, ...] = ()
    disabled: bool = False
    ignored_by_parsers: tuple[ParserIgnoredSpan, ...] = ()

    @property
    def changed(self) -> bool:
        return self.result != self.origin


def check_blocks(state: DocumentState) -> tuple[Block, ...]:
    """Verify the blocks a segmenter chain produced.

    Raises:
        SegmentationError: If blocks are out of range, unsorted, overlapping,
            or their value does not match the document
    """
    pos = 0
    for block in state.blocks:
        if block.start < pos or block.end < block.start or block.end > len(state.content):
            raise SegmentationError(f"Block [{block.start}, {block.end}) overlaps or is out of order")
        if state.content[block.start : block.end] != block.value:
            raise SegmentationError(f"Block [{block.start}, {block.end}) does not match the document")
        pos = block.end
    return state.blocks


def filter_validations(
    issues: Sequence[ValidationIssue], ignored: Sequence[IgnoredMark], policy: IgnorePolicy
) -> list[ValidationIssue]:
    """Apply the ignore policy to the final validations.

    EXCLUDE drops issues inside ignored marks. ONLY keeps just the issues
    inside them, when there are any ignored marks at all.
    """
    if not ignored:
        return list(issues)
    if policy is IgnorePolicy.ONLY:
        return [issue for issue in issues if any(mark.covers(issue.index) for mark in ignored)]
    return [issue for issue in issues if not any(mark.covers(issue.index) for mark in ignored)]


class Linter:
    """Reusable linter with its rules and segmenters resolved up front.

    Usage:
        >>> linter = Linter(LintConfig(hyper_parse=("markdown",)))
        >>> linter("中文english混排").result
        '中文 english 混排'

    """

    __slots__ = ("_config", "_rules", "_segmenters", "_logger")

    def __init__(self, config: LintConfig | None = None) -> None:
        """Resolve the configured selections against their catalogs.

        Raises:
            ConfigurationError: Unknown rule or segmenter name in strict mode
        """
        self._config = config or LintConfig()
        self._logger = self._config.logger or logger
        self._rules: tuple[Entry, ...] = resolve(
            self._config.rules,
            self._config.rule_catalog or create_default_rule_catalog(),
            strict=self._config.strict,
            logger=self._logger,
        )
        self._segmenters: tuple[Entry, ...] = resolve(
            self._config.hyper_parse,
            self._config.segmenter_catalog or create_default_segmenter_catalog(),
            strict=self._config.strict,
            logger=self._logger,
        )

    @property
    def config(self) -> LintConfig:
        return self._config

    @property
    def rules(self) -> tuple[Entry, ...]:
        """Resolved rules, in the order they run."""
        return self._rules

    @property
    def segmenters(self) -> tuple[Entry, ...]:
        """Resolved segmenters, in the order they run."""
        return self._segmenters

    def __call__(self, text: str) -> LintResult:
        return self.lint(text)

    def lint(self, text: str) -> LintResult:
        """Lint one document.

        Returns:
            LintResult with the corrected text and sorted validations
        """
        if DISABLED.search(text):
            return LintResult(origin=text, result=text, disabled=True)

        with lint_config_context(self._config):
            state = DocumentState.initial(text, self._config.ignored_cases)
            for segmenter in self._segmenters:
                state = segmenter.fn(state)
            blocks = check_blocks(state)

            rendered: list[tuple[Block, str]] = []
            issues: list[ValidationIssue] = []
            ignored: list[IgnoredMark] = []
            matched: set[int] = set()
            for block in blocks:
                block_ignored, block_matched = find_ignored_marks(
                    block.value, state.ignored_by_rules, block.start
                )
                ignored.extend(block_ignored)
                matched |= block_matched
                output, block_issues = self._lint_block(block, block_ignored)
                rendered.append((block, output))
                issues.extend(block_issues)

        for i, pattern in enumerate(state.ignored_by_rules):
            if i not in matched:
                self._logger.warning("Ignored case %s matched nothing", describe(pattern))

        validations = filter_validations(issues, ignored, self._config.ignore_policy)
        validations.sort(key=lambda issue: issue.index)
        return LintResult(
            origin=text,
            result=replace_blocks(text, rendered),
            validations=tuple(validations),
            ignored_by_parsers=state.ignored_by_parsers,
        )

    def _lint_block(self, block: Block, ignored: Sequence[IgnoredMark]) -> tuple[str, list[ValidationIssue]]:
        tokens = tokenize(block.value, block.marks)
        marks = list(block.marks)
        pending: list[PendingValidation] = []
        for rule in self._rules:
            found = rule.fn(tokens, marks)
            if found:
                pending.extend(found)
        return join(tokens, pending, block.start, ignored, self._config.preserve_ignored)


def run(text: str, config: LintConfig | dict[str, Any] | None = None, **overrides: Any) -> LintResult:
    """Lint a document.

    Args:
        text: Document text
        config: LintConfig, or a dict of options (camelCase keys accepted)
        **overrides: LintConfig fields that replace those in config

    Returns:
        LintResult

    Raises:
        TypeError: Unknown keyword override
        ConfigurationError: Unknown rule or segmenter name in strict mode

    Example:
        >>> run("中文english混排").result
        '中文 english 混排'
        >>> run("<!-- hanlint disabled -->中文english").disabled
        True

    """
    if isinstance(config, dict):
        config = LintConfig.from_dict(config)
    if overrides:
        valid = {f.name for f in fields(LintConfig)}
        unknown = sorted(set(overrides) - valid)
        if unknown:
            msg = f"Unknown lint option(s): {', '.join(unknown)}"
            raise TypeError(msg)
        base = config or LintConfig()
        values = {f.name: getattr(base, f.name) for f in fields(LintConfig)}
        values.update(overrides)
        config = LintConfig(**values)
    return Linter(config).lint(text)
