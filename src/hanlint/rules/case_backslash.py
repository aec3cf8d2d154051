"""Backslash spacing.

No space is added after a backslash written without one (``\\n``,
``C:\\dir``); a backslash after full-width content is spaced from it.

"""

from __future__ import annotations

from hanlint.nodes import Mark
from hanlint.rules.units import build_units, is_tight, neighbours, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "case-backslash"


def case_backslash(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for i, unit in enumerate(units):
        if unit.type is not TokenType.PUNCTUATION_HALF or unit.text != "\\":
            continue
        prev, nxt = neighbours(units, i)
        if nxt is not None and is_tight(tokens, unit, nxt):
            validations += set_gap(
                tokens, unit, nxt, "", NAME, "There should be no space after a backslash", force=True
            )
        if prev is not None and prev.type is TokenType.CONTENT_FULL:
            validations += set_gap(
                tokens, prev, unit, " ", NAME, "A backslash after full-width content should be preceded by one space"
            )
    return validations
