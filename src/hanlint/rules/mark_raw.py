"""Promote backtick-delimited spans to raw marks.

Blocks that never went through the markdown segmenter still contain
inline code written with backticks. This rule finds them in the token
stream, turns each into a RAW mark that every later rule treats as
opaque, and spaces code apart from adjacent full-width content.

"""

from __future__ import annotations

from hanlint.nodes import Mark
from hanlint.rules.units import build_units, set_gap
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "mark-raw"

_OPAQUE = (TokenType.MARK_BOUNDARY, TokenType.RAW)


def _backtick_run(tokens: list[Token], i: int) -> int:
    """Length of the tight backtick run starting at tokens[i]."""
    length = 0
    while i + length < len(tokens):
        token = tokens[i + length]
        if token.content != "`" or token.mark is not None and token.mark.is_raw:
            break
        length += 1
        if token.raw_space_after:
            break
    return length


def discover_code_spans(tokens: list[Token], marks: list[Mark]) -> None:
    """Mark every matched backtick span as RAW code.

    An opener is closed by the next run of the same length. A span that
    would swallow a mark delimiter or existing raw content is left as
    plain text.
    """
    i = 0
    count = len(tokens)
    while i < count:
        run = _backtick_run(tokens, i)
        if not run:
            i += 1
            continue
        j = i + run
        close = -1
        while j < count:
            if tokens[j].type in _OPAQUE:
                break
            length = _backtick_run(tokens, j)
            if length == run:
                close = j
                break
            j += max(length, 1)
        if close < 0:
            i += run
            continue
        last = close + run - 1
        mark = Mark.raw(tokens[i].index, tokens[last].end, meta="code")
        for token in tokens[i : last + 1]:
            token.mark = mark
        marks.append(mark)
        i = last + 1


def mark_raw(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    discover_code_spans(tokens, marks)
    validations: list[PendingValidation] = []
    units = build_units(tokens)
    for a, b in zip(units, units[1:]):
        code = next(
            (u for u in (a, b) if u.type is TokenType.RAW and u.mark is not None and u.mark.meta == "code"),
            None,
        )
        other = b if code is a else a
        if code is not None and other.type is TokenType.CONTENT_FULL:
            validations += set_gap(
                tokens, a, b, " ", NAME, "Inline code should be separated from full-width content by one space"
            )
    return validations
