"""Numbers attached to Chinese date and time units take no space.

``2024 年 1 月`` becomes ``2024年1月``.

"""

from __future__ import annotations

from hanlint.charsets import DATE_UNITS, is_ascii_digits
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "case-datetime-zh"
MESSAGE = "There should be no space between a number and a date unit"


def _is_number(unit: Unit) -> bool:
    return unit.type is TokenType.CONTENT_HALF and is_ascii_digits(unit.text)


def _starts_with_unit(unit: Unit) -> bool:
    return unit.type is TokenType.CONTENT_FULL and unit.text[0] in DATE_UNITS


def case_datetime_zh(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for i in range(len(units) - 1):
        a, b = units[i], units[i + 1]
        if _is_number(a) and _starts_with_unit(b):
            validations += set_gap(tokens, a, b, "", NAME, MESSAGE)
        elif (
            a.type is TokenType.CONTENT_FULL
            and a.text[-1] in DATE_UNITS
            and _is_number(b)
            and i + 2 < len(units)
            and _starts_with_unit(units[i + 2])
        ):
            validations += set_gap(tokens, a, b, "", NAME, MESSAGE)
    return validations
