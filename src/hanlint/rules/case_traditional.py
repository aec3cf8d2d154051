"""Corner brackets (「『』」) never take a space on either side."""

from __future__ import annotations

from hanlint.charsets import TRADITIONAL_CLOSING_QUOTES, TRADITIONAL_QUOTES
from hanlint.nodes import Mark
from hanlint.rules.units import build_units, neighbours, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation, note_issue

NAME = "case-traditional"


def case_traditional(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    stack: list[int] = []
    unmatched: list[int] = []
    for i, unit in enumerate(units):
        if unit.type is not TokenType.PUNCTUATION_FULL:
            continue
        if unit.text in TRADITIONAL_QUOTES:
            stack.append(i)
        elif unit.text in TRADITIONAL_CLOSING_QUOTES:
            if stack and TRADITIONAL_QUOTES[units[stack[-1]].text] == unit.text:
                stack.pop()
            else:
                unmatched.append(i)
        else:
            continue
        prev, nxt = neighbours(units, i)
        if prev is not None:
            validations += set_gap(tokens, prev, unit, "", NAME, f"There should be no space before '{unit.text}'")
        if nxt is not None:
            validations += set_gap(tokens, unit, nxt, "", NAME, f"There should be no space after '{unit.text}'")
    for i in sorted(unmatched + stack):
        validations.append(note_issue(tokens[units[i].first], NAME, f"Unmatched quote '{units[i].text}'"))
    return validations
