"""Every original line break is put back verbatim."""

from __future__ import annotations

from hanlint.nodes import Mark
from hanlint.tokens import Token
from hanlint.validation import PendingValidation

NAME = "case-linebreak"


def case_linebreak(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    for token in tokens:
        if token.has_linebreak:
            token.space_after = token.raw_space_after
    return []
