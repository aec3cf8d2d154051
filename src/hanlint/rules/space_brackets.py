"""Spacing around half-width bracket pairs.

No space just inside a pair, one space outside it next to content.
A pair written tight against half-width content (``f(x)``, ``a[0]``)
stays tight. Unmatched brackets are reported without a fix.

"""

from __future__ import annotations

from hanlint.charsets import HALF_BRACKETS, HALF_CLOSING_BRACKETS
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, is_tight, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation, note_issue

NAME = "space-brackets"


def match_brackets(tokens: list[Token], units: list[Unit]) -> tuple[list[tuple[int, int]], list[int]]:
    """Pair brackets by nesting.

    Returns:
        (pairs of unit indexes, indexes of unmatched brackets)
    """
    pairs: list[tuple[int, int]] = []
    unmatched: list[int] = []
    stack: list[int] = []
    for i, unit in enumerate(units):
        if unit.type is not TokenType.PUNCTUATION_HALF:
            continue
        if unit.text in HALF_BRACKETS:
            stack.append(i)
        elif unit.text in HALF_CLOSING_BRACKETS:
            if stack and HALF_BRACKETS[units[stack[-1]].text] == unit.text:
                pairs.append((stack.pop(), i))
            else:
                unmatched.append(i)
    unmatched.extend(stack)
    return pairs, sorted(unmatched)


def _outside(tokens: list[Token], a: Unit, b: Unit, other: Unit) -> bool:
    """Whether the outside gap a..b needs one space."""
    if not other.is_content:
        return False
    return not (other.type is TokenType.CONTENT_HALF and is_tight(tokens, a, b))


def space_brackets(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    pairs, unmatched = match_brackets(tokens, units)
    for open_i, close_i in pairs:
        opener, closer = units[open_i], units[close_i]
        inside = "There should be no space inside brackets"
        outside = "Brackets should be separated from content by one space"
        if close_i == open_i + 1:
            validations += set_gap(tokens, opener, closer, "", NAME, inside)
        else:
            validations += set_gap(tokens, opener, units[open_i + 1], "", NAME, inside)
            validations += set_gap(tokens, units[close_i - 1], closer, "", NAME, inside)
        if open_i > 0:
            prev = units[open_i - 1]
            if _outside(tokens, prev, opener, prev):
                validations += set_gap(tokens, prev, opener, " ", NAME, outside)
        if close_i + 1 < len(units):
            nxt = units[close_i + 1]
            if _outside(tokens, closer, nxt, nxt):
                validations += set_gap(tokens, closer, nxt, " ", NAME, outside)
    for i in unmatched:
        validations.append(note_issue(tokens[units[i].first], NAME, f"Unmatched bracket '{units[i].text}'"))
    return validations
