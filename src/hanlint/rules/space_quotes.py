"""Spacing around half-width quote pairs.

No space just inside a pair, one space outside it next to content.
A single quote between two tightly written words is an apostrophe
(``don't``) and does not take part in pairing.

"""

from __future__ import annotations

from hanlint.charsets import HALF_QUOTES
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, is_tight, neighbours, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation, note_issue

NAME = "space-quotes"


def _is_apostrophe(tokens: list[Token], units: list[Unit], i: int) -> bool:
    prev, nxt = neighbours(units, i)
    return (
        prev is not None
        and nxt is not None
        and prev.type is TokenType.CONTENT_HALF
        and nxt.type is TokenType.CONTENT_HALF
        and is_tight(tokens, prev, units[i])
        and is_tight(tokens, units[i], nxt)
    )


def match_quotes(tokens: list[Token], units: list[Unit]) -> tuple[list[tuple[int, int]], list[int]]:
    """Pair quotes of the same character in order of appearance."""
    pairs: list[tuple[int, int]] = []
    open_at: dict[str, int] = {}
    for i, unit in enumerate(units):
        if unit.type is not TokenType.PUNCTUATION_HALF or unit.text not in HALF_QUOTES:
            continue
        if unit.text == "'" and _is_apostrophe(tokens, units, i):
            continue
        if unit.text in open_at:
            pairs.append((open_at.pop(unit.text), i))
        else:
            open_at[unit.text] = i
    return pairs, sorted(open_at.values())


def space_quotes(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    pairs, unmatched = match_quotes(tokens, units)
    inside = "There should be no space inside quotes"
    outside = "Quotes should be separated from content by one space"
    for open_i, close_i in pairs:
        opener, closer = units[open_i], units[close_i]
        if close_i == open_i + 1:
            validations += set_gap(tokens, opener, closer, "", NAME, inside)
        else:
            validations += set_gap(tokens, opener, units[open_i + 1], "", NAME, inside)
            validations += set_gap(tokens, units[close_i - 1], closer, "", NAME, inside)
        if open_i > 0 and units[open_i - 1].is_content:
            validations += set_gap(tokens, units[open_i - 1], opener, " ", NAME, outside)
        if close_i + 1 < len(units) and units[close_i + 1].is_content:
            validations += set_gap(tokens, closer, units[close_i + 1], " ", NAME, outside)
    for i in unmatched:
        validations.append(note_issue(tokens[units[i].first], NAME, f"Unmatched quote {units[i].text}"))
    return validations
