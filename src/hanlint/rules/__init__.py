"""Rule engine for hanlint.

A rule is a callable ``(tokens, marks) -> list[PendingValidation]``. It
mutates the block's tokens in place (spacing, punctuation character,
lock flag) and returns the validations for the changes it made. Rules
never reorder tokens and never touch the text of a raw mark.

Rules see tokens through the unit view in hanlint.rules.units: mark
delimiters are transparent, a raw span is one unit, and a space between
two units is placed outside any enclosing mark.

Custom rules follow the same signature and may return None when they
have nothing to report.
"""

from __future__ import annotations

from collections.abc import Callable

from hanlint.nodes import Mark
from hanlint.rules.registry import (
    DEFAULT_RULES,
    create_default_rule_catalog,
    create_rule_catalog_with_defaults,
)
from hanlint.tokens import Token
from hanlint.validation import PendingValidation

Rule = Callable[[list[Token], list[Mark]], list[PendingValidation] | None]

__all__ = [
    "DEFAULT_RULES",
    "Rule",
    "create_default_rule_catalog",
    "create_rule_catalog_with_defaults",
]
