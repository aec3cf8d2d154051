"""Ellipses keep their characters and lose inner spacing.

A run of at least three of ``.``, ``。`` and ``…`` (or any run made only
of ``…``) is an ellipsis: ``. . .`` becomes ``...`` and no other rule
touches it afterwards.

"""

from __future__ import annotations

from hanlint.charsets import ELLIPSIS_CHARS
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, has_linebreak, lock_units, set_gap
from hanlint.tokens import Token
from hanlint.validation import PendingValidation

NAME = "case-ellipsis"


def _is_dot(unit: Unit) -> bool:
    return unit.is_punctuation and len(unit.raw_text) == 1 and unit.raw_text in ELLIPSIS_CHARS


def case_ellipsis(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    i = 0
    while i < len(units):
        if not _is_dot(units[i]):
            i += 1
            continue
        j = i
        while j + 1 < len(units) and _is_dot(units[j + 1]) and not has_linebreak(tokens, units[j], units[j + 1]):
            j += 1
        run = units[i : j + 1]
        text = "".join(unit.raw_text for unit in run)
        if len(text) >= 3 or set(text) == {"…"}:
            lock_units(tokens, run)
            for a, b in zip(run, run[1:]):
                validations += set_gap(
                    tokens, a, b, "", NAME, "There should be no space inside an ellipsis", force=True
                )
        i = j + 1
    return validations
