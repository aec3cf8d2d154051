"""Use full-width sentence punctuation after full-width content."""

from __future__ import annotations

from hanlint.charsets import HALF_QUOTES, HALF_SENTENCE_PUNCTUATION, HALF_TO_FULL
from hanlint.nodes import Mark
from hanlint.rules.units import build_units, neighbours, set_content
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "unify-punctuation"

_FULL = (TokenType.CONTENT_FULL, TokenType.PUNCTUATION_FULL)


def unify_punctuation(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for i, unit in enumerate(units):
        if unit.type is not TokenType.PUNCTUATION_HALF or unit.text not in HALF_SENTENCE_PUNCTUATION:
            continue
        token = tokens[unit.first]
        if token.locked:
            continue
        prev, nxt = neighbours(units, i)
        if prev is not None:
            # A mark converted earlier in this pass counts as full-width
            prev_type = tokens[prev.last].type if prev.is_punctuation else prev.type
            if prev_type not in _FULL:
                continue
        elif nxt is None or nxt.type is not TokenType.CONTENT_FULL:
            continue
        if unit.text == "." and (
            (prev is not None and prev.raw_text.endswith("."))
            or (nxt is not None and nxt.raw_text.startswith("."))
        ):
            continue
        if nxt is not None and nxt.type is TokenType.PUNCTUATION_HALF and nxt.text in HALF_QUOTES:
            continue
        validations += set_content(
            token,
            HALF_TO_FULL[unit.text],
            TokenType.PUNCTUATION_FULL,
            NAME,
            f"'{unit.text}' should be full-width after full-width content",
        )
    return validations
