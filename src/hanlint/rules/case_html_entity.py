"""HTML entities (``&nbsp;``, ``&#123;``) keep their text and surroundings."""

from __future__ import annotations

from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, is_tight, lock_units, neighbours, restore_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "case-html-entity"


def _entity_length(tokens: list[Token], units: list[Unit], i: int) -> int:
    """Number of units in the entity starting at units[i], 0 if none."""
    if units[i].raw_text != "&":
        return 0
    j = i + 1
    if j < len(units) and units[j].raw_text == "#":
        j += 1
    if j + 1 >= len(units):
        return 0
    name = units[j]
    if name.type is not TokenType.CONTENT_HALF or not (name.raw_text.isascii() and name.raw_text.isalnum()):
        return 0
    if units[j + 1].raw_text not in (";", "；"):
        return 0
    run = units[i : j + 2]
    if not all(is_tight(tokens, a, b) for a, b in zip(run, run[1:])):
        return 0
    return len(run)


def case_html_entity(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    units = build_units(tokens)
    i = 0
    while i < len(units):
        length = _entity_length(tokens, units, i)
        if not length:
            i += 1
            continue
        run = units[i : i + length]
        lock_units(tokens, run)
        prev, _ = neighbours(units, i)
        _, nxt = neighbours(units, i + length - 1)
        if prev is not None:
            restore_gap(tokens, prev, run[0])
        if nxt is not None:
            restore_gap(tokens, run[-1], nxt)
        i += length
    return []
