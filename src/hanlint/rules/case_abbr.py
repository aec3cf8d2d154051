"""Keep known abbreviations intact.

The dots of ``Mr.``, ``e.g.`` and friends are not sentence endings: they
stay half-width (a full-width ``。`` written inside an abbreviation is
turned back into ``.``), nothing is inserted inside the abbreviation, and
the tokens are locked so later rules leave them alone.

"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache

from hanlint.config import get_lint_config
from hanlint.nodes import Mark
from hanlint.rules.units import Unit, build_units, lock_units, match_pieces, set_content
from hanlint.tokenizer import tokenize
from hanlint.tokens import Token, TokenType
from hanlint.validation import PendingValidation

NAME = "case-abbr"

_DOTS = {".": frozenset({"。"})}


@lru_cache(maxsize=256)
def pieces_of(text: str) -> tuple[str, ...]:
    """Split a literal into the token texts the tokenizer would produce."""
    return tuple(token.content for token in tokenize(text) if token.content.strip())


def lock_literals(
    tokens: list[Token],
    literals: tuple[str, ...],
    equivalents: Mapping[str, frozenset[str]] | None = None,
) -> list[list[Unit]]:
    """Lock every tight occurrence of the given literals.

    Returns:
        The locked unit runs, in order
    """
    runs: list[list[Unit]] = []
    if not literals:
        return runs
    patterns = sorted((pieces_of(literal) for literal in literals), key=len, reverse=True)
    units = build_units(tokens)
    i = 0
    while i < len(units):
        for pieces in patterns:
            if pieces and match_pieces(tokens, units, i, pieces, equivalents):
                run = units[i : i + len(pieces)]
                lock_units(tokens, run)
                runs.append(run)
                i += len(pieces)
                break
        else:
            i += 1
    return runs


def case_abbr(tokens: list[Token], marks: list[Mark]) -> list[PendingValidation]:
    validations: list[PendingValidation] = []
    for run in lock_literals(tokens, get_lint_config().abbreviations, _DOTS):
        for unit in run:
            token = tokens[unit.first]
            if token.raw_content == "。":
                validations += set_content(
                    token, ".", TokenType.PUNCTUATION_HALF, NAME, "Abbreviations keep a half-width dot"
                )
    return validations
