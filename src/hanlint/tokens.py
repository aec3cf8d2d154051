"""Token and TokenType definitions for the hanlint tokenizer.

The tokenizer produces a list of Token objects per block that the rule
engine mutates in place. Each Token keeps its original text and the
whitespace that followed it, next to the values rules decide on, so the
reconstructor can produce a minimal diff.

Thread Safety:
Tokens are mutable and owned by the single block being linted. They are
never shared across blocks or documents.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hanlint.nodes import Mark


class TokenType(Enum):
    """Token types produced by the tokenizer.

    Organized by category:
    - Content runs (half-width Latin/digits, full-width CJK)
    - Punctuation (one token per character)
    - Structure (leading space, mark delimiters, raw spans)

    """

    # Content runs
    CONTENT_HALF = auto()  # english 123
    CONTENT_FULL = auto()  # 中文

    # Punctuation
    PUNCTUATION_HALF = auto()  # , . ( "
    PUNCTUATION_FULL = auto()  # ，。（“

    # Structure
    SPACE = auto()  # Leading whitespace of a block
    MARK_BOUNDARY = auto()  # ** [ ](url) <b> </b>
    RAW = auto()  # `code`, {% tag %}: text of a RAW mark


class MarkSide(Enum):
    """Which delimiter of a HYPER mark a MARK_BOUNDARY token is."""

    OPEN = auto()
    CLOSE = auto()


@dataclass(slots=True, eq=False)
class Token:
    """A classified unit of block content.

    Attributes:
        type: Current token type (may change when punctuation is unified)
        content: Current text
        index: Offset of the token in its block
        raw_space_after: Whitespace that followed the token in the original
        space_after: Whitespace decided by the rules
        mark: Innermost mark the token belongs to
        side: OPEN/CLOSE for MARK_BOUNDARY tokens
        locked: Set by special-case rules; protects content and inner gaps
        raw_content: Original text
        raw_type: Original token type

    A token's span is [index, index + len(raw_content) + len(raw_space_after)).
    The spans of a block's tokens partition the block.

    """

    type: TokenType
    content: str
    index: int
    raw_space_after: str = ""
    space_after: str = ""
    mark: Mark | None = None
    side: MarkSide | None = None
    locked: bool = False
    raw_content: str = field(init=False)
    raw_type: TokenType = field(init=False)

    def __post_init__(self) -> None:
        self.raw_content = self.content
        self.raw_type = self.type

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.content
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.index}, {self.space_after!r})"

    @property
    def end(self) -> int:
        """Offset just past the original text (where the gap starts)."""
        return self.index + len(self.raw_content)

    @property
    def span_end(self) -> int:
        """Offset just past the original trailing whitespace."""
        return self.end + len(self.raw_space_after)

    @property
    def is_raw(self) -> bool:
        """Token lies inside a RAW mark."""
        return self.mark is not None and self.mark.is_raw

    @property
    def has_linebreak(self) -> bool:
        """The original gap after this token contains a line break."""
        return "\n" in self.raw_space_after

    def restore(self) -> None:
        """Reset content and type to their original values."""
        self.content = self.raw_content
        self.type = self.raw_type
