"""General punctuation spacing.

- No space before sentence punctuation that follows content
- No space on either side of full-width punctuation
- One space after half-width sentence punctuation when either neighbour
  is full-width content

"""

from __future__ import annotations

from hanlint.charsets import HALF_CLOSING_BRACKETS, HALF_SENTENCE_PUNCTUATION
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, neighbours, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "space-punctuation"


def _takes_space_before(unit: Unit) -> bool:
    """Whether a unit following sentence punctuation is spaced from it."""
    if unit.type is TokenType.PUNCTUATION_FULL:
        return False
    if unit.type is TokenType.PUNCTUATION_HALF:
        return unit.text not in HALF_SENTENCE_PUNCTUATION and unit.text not in HALF_CLOSING_BRACKETS
    return True


def space_punctuation(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for i, unit in enumerate(units):
        prev, nxt = neighbours(units, i)

        if unit.type is TokenType.PUNCTUATION_FULL:
            if prev is not None:
                validations += set_gap(
                    tokens, prev, unit, "", NAME, "There should be no space before full-width punctuation"
                )
            if nxt is not None:
                validations += set_gap(
                    tokens, unit, nxt, "", NAME, "There should be no space after full-width punctuation"
                )
            continue

        if unit.type is not TokenType.PUNCTUATION_HALF or unit.text not in HALF_SENTENCE_PUNCTUATION:
            continue
        if prev is not None and prev.is_content:
            validations += set_gap(
                tokens, prev, unit, "", NAME, "There should be no space before punctuation"
            )
        if nxt is None or not _takes_space_before(nxt):
            continue
        full_neighbour = (prev is not None and prev.type is TokenType.CONTENT_FULL) or (
            nxt.type is TokenType.CONTENT_FULL
        )
        if full_neighbour:
            validations += set_gap(
                tokens,
                unit,
                nxt,
                " ",
                NAME,
                "Half-width punctuation next to full-width content should be followed by one space",
            )
    return validations
