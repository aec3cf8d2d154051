"""Unit view over a block's token list.

Rules reason about neighbouring pieces of content, not raw tokens:

- MARK_BOUNDARY tokens are transparent (a word inside ``**...**`` is the
  neighbour of the word before the emphasis)
- Tokens inside one RAW mark form a single unit
- Leading SPACE tokens are skipped

The whitespace between two units is spread over a chain of tokens: the
left unit's last token plus every boundary token up to the right unit.
Spacing helpers put the whole gap on one owner token so that a space
always lands outside enclosing marks.

"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from hanlint.nodes import Mark
from hanlint.tokens import MarkSide, Token, TokenType
from hanlint.validation import PendingValidation, content_issue, space_issue

CONTENT_TYPES = frozenset({TokenType.CONTENT_HALF, TokenType.CONTENT_FULL, TokenType.RAW})
PUNCTUATION_TYPES = frozenset({TokenType.PUNCTUATION_HALF, TokenType.PUNCTUATION_FULL})


@dataclass(frozen=True, slots=True)
class Unit:
    """A run of tokens rules treat as one piece of content.

    Attributes:
        first: Index of the first token in the block's token list
        last: Index of the last token
        type: Token type, RAW for a run inside a raw mark
        text: Current text of the run
        raw_text: Original text of the run
        mark: The raw mark for RAW units

    """

    first: int
    last: int
    type: TokenType
    text: str
    raw_text: str
    mark: Mark | None = None

    @property
    def is_content(self) -> bool:
        return self.type in CONTENT_TYPES

    @property
    def is_punctuation(self) -> bool:
        return self.type in PUNCTUATION_TYPES

    def tokens(self, tokens: Sequence[Token]) -> Sequence[Token]:
        return tokens[self.first : self.last + 1]


def build_units(tokens: Sequence[Token]) -> list[Unit]:
    """Group tokens into units, in document order."""
    units: list[Unit] = []
    i = 0
    count = len(tokens)
    while i < count:
        token = tokens[i]
        if token.type in (TokenType.SPACE, TokenType.MARK_BOUNDARY):
            i += 1
            continue
        if token.is_raw:
            mark = token.mark
            j = i
            while j + 1 < count and tokens[j + 1].mark is mark:
                j += 1
            run = tokens[i : j + 1]
            text = "".join(t.content + t.space_after for t in run[:-1]) + run[-1].content
            raw = "".join(t.raw_content + t.raw_space_after for t in run[:-1]) + run[-1].raw_content
            units.append(Unit(i, j, TokenType.RAW, text, raw, mark))
            i = j + 1
            continue
        units.append(Unit(i, i, token.type, token.content, token.raw_content))
        i += 1
    return units


def neighbours(units: Sequence[Unit], i: int) -> tuple[Unit | None, Unit | None]:
    """Return the units before and after units[i]."""
    prev = units[i - 1] if i > 0 else None
    nxt = units[i + 1] if i + 1 < len(units) else None
    return prev, nxt


# =============================================================================
# Gaps
# =============================================================================


def gap_chain(a: Unit, b: Unit) -> range:
    """Token indexes whose trailing whitespace makes up the gap a..b."""
    return range(a.last, b.first)


def gap_owner(tokens: Sequence[Token], a: Unit, b: Unit) -> int:
    """Token that holds the gap: after every closing delimiter, before any opening one."""
    owner = a.last
    while (
        owner + 1 < b.first
        and tokens[owner + 1].type is TokenType.MARK_BOUNDARY
        and tokens[owner + 1].side is MarkSide.CLOSE
    ):
        owner += 1
    return owner


def get_gap(tokens: Sequence[Token], a: Unit, b: Unit) -> str:
    """Current whitespace between two units."""
    return "".join(tokens[i].space_after for i in gap_chain(a, b))


def raw_gap(tokens: Sequence[Token], a: Unit, b: Unit) -> str:
    """Original whitespace between two units."""
    return "".join(tokens[i].raw_space_after for i in gap_chain(a, b))


def has_linebreak(tokens: Sequence[Token], a: Unit, b: Unit) -> bool:
    return any(tokens[i].has_linebreak for i in gap_chain(a, b))


def is_tight(tokens: Sequence[Token], a: Unit, b: Unit) -> bool:
    """The two units were written with nothing between them."""
    return raw_gap(tokens, a, b) == ""


def set_chain(
    tokens: Sequence[Token],
    chain: range,
    owner: int,
    space: str,
    name: str,
    message: str,
) -> list[PendingValidation]:
    """Put space on the owner token and clear the rest of the chain."""
    validations: list[PendingValidation] = []
    for i in chain:
        token = tokens[i]
        target = space if i == owner else ""
        if token.space_after != target:
            token.space_after = target
            validations.append(space_issue(token, name, message))
    return validations


def set_gap(
    tokens: Sequence[Token],
    a: Unit,
    b: Unit,
    space: str,
    name: str,
    message: str,
    *,
    force: bool = False,
) -> list[PendingValidation]:
    """Set the whitespace between two units.

    A gap containing a line break is never rewritten. The inner gaps of a
    locked run are left alone unless force is set.

    Returns:
        Validations for every token whose gap changed
    """
    if has_linebreak(tokens, a, b):
        return []
    if not force and tokens[a.last].locked and tokens[b.first].locked:
        return []
    return set_chain(tokens, gap_chain(a, b), gap_owner(tokens, a, b), space, name, message)


def restore_gap(tokens: Sequence[Token], a: Unit, b: Unit) -> None:
    """Put the original whitespace back between two units."""
    for i in gap_chain(a, b):
        tokens[i].space_after = tokens[i].raw_space_after


def set_content(
    token: Token, content: str, token_type: TokenType, name: str, message: str
) -> list[PendingValidation]:
    """Replace a token's text (and type), reporting the change."""
    if token.content == content:
        return []
    token.content = content
    token.type = token_type
    return [content_issue(token, name, message)]


def lock_units(tokens: Sequence[Token], run: Sequence[Unit]) -> None:
    """Restore a run's original text and inner gaps, then lock it."""
    for unit in run:
        for token in unit.tokens(tokens):
            token.restore()
            token.locked = True
    for a, b in zip(run, run[1:]):
        restore_gap(tokens, a, b)


def match_pieces(
    tokens: Sequence[Token],
    units: Sequence[Unit],
    start: int,
    pieces: Sequence[str],
    equivalents: Mapping[str, frozenset[str]] | None = None,
) -> bool:
    """Check if units[start:] spell pieces, written tight.

    A piece listed in equivalents also matches any of its alternatives.
    """
    end = start + len(pieces)
    if end > len(units):
        return False
    for offset, piece in enumerate(pieces):
        unit = units[start + offset]
        if unit.type is TokenType.RAW:
            return False
        if unit.raw_text != piece and unit.raw_text not in (equivalents or {}).get(piece, ()):
            return False
        if offset and not is_tight(tokens, units[start + offset - 1], unit):
            return False
    return True
