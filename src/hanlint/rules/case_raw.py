"""Configured raw compounds (``AC/DC``) keep their text."""

from __future__ import annotations

from hanlint.config import get_lint_config
from hanlint.nodes import Mark
from hanlint.rules.case_abbr import lock_literals
from hanlint.tokens import Token
from hanlint.validation import PendingValidation

NAME = "case-raw"


def case_raw(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    lock_literals(tokens, get_lint_config().raw_compounds)
    return []
