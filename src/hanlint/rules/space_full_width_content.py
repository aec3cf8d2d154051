"""One space between full-width and half-width content."""

from __future__ import annotations

from hanlint.nodes import Mark
from hanlint.rules.units import build_units, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "space-full-width-content"

_MIXED = frozenset({TokenType.CONTENT_FULL, TokenType.CONTENT_HALF})


def space_full_width_content(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for a, b in zip(units, units[1:]):
        if {a.type, b.type} == _MIXED:
            validations += set_gap(
                tokens,
                a,
                b,
                " ",
                NAME,
                "Full-width and half-width content should be separated by one space",
            )
    return validations
