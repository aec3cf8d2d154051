"""Move whitespace from inside hyper marks to outside them.

``中文** english**`` becomes ``中文 **english**``: the delimiters hug
their content and the space sits outside the span.

"""

from __future__ import annotations

from hanlint.nodes import Mark
from hanlint.rules.units import build_units, gap_chain, gap_owner, get_gap, has_linebreak, set_chain
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "mark-hyper"
MESSAGE = "Spaces should be outside of the mark"


def mark_hyper(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for a, b in zip(units, units[1:]):
        chain = gap_chain(a, b)
        if not any(tokens[i].type is TokenType.MARK_BOUNDARY for i in chain[1:]):
            continue
        if has_linebreak(tokens, a, b):
            continue
        space = get_gap(tokens, a, b)
        if space:
            validations += set_chain(tokens, chain, gap_owner(tokens, a, b), space, NAME, MESSAGE)

    # Trailing close delimiters: the space goes after the last one
    if units:
        last = units[-1].last
        chain = range(last, len(tokens))
        if len(chain) > 1 and not any(tokens[i].has_linebreak for i in chain):
            space = "".join(tokens[i].space_after for i in chain)
            if space:
                validations += set_chain(tokens, chain, chain[-1], space, NAME, MESSAGE)
    return validations
