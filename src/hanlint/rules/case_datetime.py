"""Keep ``hh:mm`` and ``hh:mm:ss`` times as written."""

from __future__ import annotations

from hanlint.charsets import is_ascii_digits
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, is_tight, lock_units
from hanlint.tokens import Token
from hanlint.validation import PendingValidation

NAME = "case-datetime"


def _time_length(tokens: list[Token], units: list[Unit], i: int) -> int:
    """Number of units in the time starting at units[i], 0 if none."""
    first = units[i].raw_text
    if not (is_ascii_digits(first) and len(first) <= 2):
        return 0
    length = 1
    for _ in range(2):
        colon, digits = i + length, i + length + 1
        if digits >= len(units):
            break
        if units[colon].raw_text != ":" or not is_ascii_digits(units[digits].raw_text):
            break
        if len(units[digits].raw_text) != 2:
            break
        if not (is_tight(tokens, units[colon - 1], units[colon]) and is_tight(tokens, units[colon], units[digits])):
            break
        length += 2
    return length if length > 1 else 0


def case_datetime(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    units = build_units(tokens)
    i = 0
    while i < len(units):
        length = _time_length(tokens, units, i)
        if length:
            lock_units(tokens, units[i : i + length])
            i += length
        else:
            i += 1
    return []
