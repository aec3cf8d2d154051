"""One space around mathematical operators.

``1+1`` and ``a  =  b`` become ``1 + 1`` and ``a = b``. Left alone:

- dates, fractions and compounds (``2024-01-01``, ``1/2``, ``e-mail``)
- standalone symbols and version suffixes (``Chrome 53+``, ``C++``)
- signs and prefixes written against one side only (``a -b``)
- anything that looks like part of a URL

"""

from __future__ import annotations

from hanlint.charsets import MATH_OPERATORS, is_ascii_digits
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, has_linebreak, is_tight, neighbours, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "case-math-exp"

_TIGHT_EXEMPT = frozenset("-/")
_URL_HINTS = ("://", "www.", "@")


def _is_operand(unit: Unit) -> bool:
    text = unit.raw_text
    return is_ascii_digits(text) or (len(text) == 1 and text.isascii() and text.isalpha())


def _in_url(tokens: list[Token], units: list[Unit], i: int) -> bool:
    """Check the tightly written run ending at units[i] for URL markers."""
    parts = [units[i].raw_text]
    j = i
    while j > 0 and is_tight(tokens, units[j - 1], units[j]):
        j -= 1
        parts.append(units[j].raw_text)
    text = "".join(reversed(parts))
    return any(hint in text for hint in _URL_HINTS)


def case_math_exp(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for i, unit in enumerate(units):
        if unit.type is not TokenType.PUNCTUATION_HALF or unit.text not in MATH_OPERATORS:
            continue
        if tokens[unit.first].locked:
            continue
        prev, nxt = neighbours(units, i)
        if prev is None or nxt is None:
            continue
        if prev.type is not TokenType.CONTENT_HALF or nxt.type is not TokenType.CONTENT_HALF:
            continue
        if has_linebreak(tokens, prev, unit) or has_linebreak(tokens, unit, nxt):
            continue
        tight_before = is_tight(tokens, prev, unit)
        tight_after = is_tight(tokens, unit, nxt)
        if tight_before != tight_after:
            continue
        if tight_before:
            if unit.text in _TIGHT_EXEMPT:
                continue
            if not (_is_operand(prev) and _is_operand(nxt)):
                continue
        if _in_url(tokens, units, i):
            continue
        message = f"Operator '{unit.text}' should be surrounded by one space"
        validations += set_gap(tokens, prev, unit, " ", NAME, message)
        validations += set_gap(tokens, unit, nxt, " ", NAME, message)
    return validations
