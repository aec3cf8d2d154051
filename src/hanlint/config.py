"""ContextVar-based lint configuration for hanlint.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The Linter sets the config for the duration of a run; rules read their
data tables (abbreviations, raw compounds) from it.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Through the entry point
    result = run(text, rules=["space-full-width-content"])

    # Direct rule usage (advanced)
    from hanlint.config import lint_config_context, LintConfig

    with lint_config_context(LintConfig(abbreviations=("Mr.",))):
        case_abbr(tokens, marks)

"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hanlint.ignored import IgnorePattern
    from hanlint.registry import Catalog, Selection


class IgnorePolicy(Enum):
    """How ignored marks filter the final validations."""

    EXCLUDE = "exclude"  # Drop validations inside ignored marks
    ONLY = "only"  # Keep only validations inside ignored marks, when any exist


DEFAULT_ABBREVIATIONS: tuple[str, ...] = (
    "Mr.",
    "Mrs.",
    "Ms.",
    "Dr.",
    "Prof.",
    "Jr.",
    "Sr.",
    "St.",
    "vs.",
    "etc.",
    "e.g.",
    "i.e.",
    "a.m.",
    "p.m.",
    "Inc.",
    "Ltd.",
    "Co.",
    "No.",
    "Fig.",
    "Vol.",
    "approx.",
)

DEFAULT_RAW_COMPOUNDS: tuple[str, ...] = ("AC/DC",)

# camelCase option names accepted by from_dict
_ALIASES = {
    "hyperParse": "hyper_parse",
    "ignoredCases": "ignored_cases",
    "ignorePolicy": "ignore_policy",
    "preserveIgnored": "preserve_ignored",
    "rawCompounds": "raw_compounds",
}


@dataclass(frozen=True, slots=True)
class LintConfig:
    """Immutable lint configuration.

    Attributes:
        rules: Rule names or callables; None selects the full catalog
        hyper_parse: Segmenter names or callables; None selects all four
        ignored_cases: Ignore patterns (strings, regexes, IgnoredCase)
        logger: Receives unmatched-pattern warnings and debug records
        rule_catalog: Catalog rule names resolve against (default catalog if None)
        segmenter_catalog: Catalog segmenter names resolve against
        strict: Raise ConfigurationError on unknown names instead of dropping them
        ignore_policy: How ignored marks filter validations
        preserve_ignored: Leave text inside ignored marks unfixed
        abbreviations: Abbreviations protected by case-abbr
        raw_compounds: Compounds protected by case-raw

    """

    rules: tuple[Selection, ...] | None = None
    hyper_parse: tuple[Selection, ...] | None = None
    ignored_cases: tuple[IgnorePattern, ...] = ()
    logger: logging.Logger | None = None
    rule_catalog: Catalog | None = None
    segmenter_catalog: Catalog | None = None
    strict: bool = False
    ignore_policy: IgnorePolicy = IgnorePolicy.EXCLUDE
    preserve_ignored: bool = False
    abbreviations: tuple[str, ...] = DEFAULT_ABBREVIATIONS
    raw_compounds: tuple[str, ...] = DEFAULT_RAW_COMPOUNDS

    def __post_init__(self) -> None:
        # Accept lists from callers; store tuples so the config stays hashable
        for name in ("rules", "hyper_parse"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        for name in ("ignored_cases", "abbreviations", "raw_compounds"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        if not isinstance(self.ignore_policy, IgnorePolicy):
            object.__setattr__(self, "ignore_policy", IgnorePolicy(self.ignore_policy))

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> LintConfig:
        """Create LintConfig from dictionary.

        Useful when options come from JSON or YAML files. camelCase keys
        (``hyperParse``, ``ignoredCases``) are accepted; unknown keys are
        silently ignored.

        Example:
            >>> config = LintConfig.from_dict({
            ...     "rules": ["space-full-width-content"],
            ...     "hyperParse": ["markdown"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.hyper_parse
            ('markdown',)

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            key = _ALIASES.get(key, key)
            if key in valid_fields:
                filtered[key] = value
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LintConfig = LintConfig()

# Thread-local configuration via ContextVar
_lint_config: ContextVar[LintConfig] = ContextVar(
    "lint_config",
    default=_DEFAULT_CONFIG,
)


def get_lint_config() -> LintConfig:
    """Get current lint configuration (thread-local)."""
    return _lint_config.get()


def set_lint_config(config: LintConfig) -> None:
    """Set lint configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _lint_config.set(config)


def reset_lint_config() -> None:
    """Reset to default configuration."""
    _lint_config.set(_DEFAULT_CONFIG)


@contextmanager
def lint_config_context(config: LintConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.
    """
    previous = _lint_config.get()
    _lint_config.set(config)
    try:
        yield
    finally:
        _lint_config.set(previous)


__all__ = [
    "DEFAULT_ABBREVIATIONS",
    "DEFAULT_RAW_COMPOUNDS",
    "IgnorePolicy",
    "LintConfig",
    "get_lint_config",
    "lint_config_context",
    "reset_lint_config",
    "set_lint_config",
]
