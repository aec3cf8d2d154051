"""Position-preserving tokenizer with O(n) performance.

Turns a block's text plus its marks into a flat list of classified tokens:
- Maximal runs of half-width or full-width content become one token
- Every punctuation character is its own token
- Whitespace is attached to the preceding token as raw_space_after
  (leading whitespace becomes a SPACE token)
- A RAW mark becomes one RAW token; a HYPER mark becomes two
  MARK_BOUNDARY tokens around its linted content

The output partitions the block exactly. That invariant is checked before
returning because the reconstructor relies on it.

Thread Safety:
Tokenizer instances are single-use. Create one per block.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Sequence

from hanlint.charsets import WHITESPACE, classify_char
from hanlint.errors import TokenizationError
from hanlint.nodes import Mark, MarkKind
from hanlint.tokens import MarkSide, Token, TokenType

_PUNCTUATION = (TokenType.PUNCTUATION_HALF, TokenType.PUNCTUATION_FULL)


class Tokenizer:
    """Single-use tokenizer for one block.

    Usage:
        >>> tokens = Tokenizer("中文english").tokenize()
        >>> [t.content for t in tokens]
        ['中文', 'english']

    """

    __slots__ = ("_source", "_source_len", "_marks", "_tokens")

    def __init__(self, source: str, marks: Sequence[Mark] = ()) -> None:
        """Initialize tokenizer with block text.

        Args:
            source: Block text
            marks: Block-relative marks (must not conflict)
        """
        self._source = source
        self._source_len = len(source)
        self._marks = tuple(marks)
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the block.

        Returns:
            Tokens in document order

        Raises:
            TokenizationError: If marks cross each other or the result does
                not partition the block
        """
        pos = 0
        for start, end, mark, side in self._mark_segments():
            if start < pos:
                raise TokenizationError("Marks overlap", index=start)
            self._scan_text(pos, start)
            text = self._source[start:end]
            if side is None:
                token = Token(TokenType.RAW, text, start, mark=mark)
            else:
                token = Token(TokenType.MARK_BOUNDARY, text, start, mark=mark, side=side)
            self._tokens.append(token)
            pos = end
        self._scan_text(pos, self._source_len)

        self._assign_enclosing_marks()
        for token in self._tokens:
            token.space_after = token.raw_space_after
        self._check_partition()
        return self._tokens

    # =========================================================================
    # Scanning
    # =========================================================================

    def _mark_segments(self) -> list[tuple[int, int, Mark, MarkSide | None]]:
        """Opaque segments of all marks, sorted by start.

        Zero-length segments are skipped: they hold no characters to
        represent.
        """
        segments: list[tuple[int, int, Mark, MarkSide | None]] = []
        for mark in self._marks:
            if not 0 <= mark.start <= mark.end <= self._source_len:
                raise TokenizationError("Mark outside of block", index=mark.start)
            if mark.kind is MarkKind.RAW:
                segments.append((mark.start, mark.end, mark, None))
                continue
            (open_start, open_end), (close_start, close_end) = mark.delimiters()
            segments.append((open_start, open_end, mark, MarkSide.OPEN))
            segments.append((close_start, close_end, mark, MarkSide.CLOSE))
        segments = [segment for segment in segments if segment[1] > segment[0]]
        segments.sort(key=lambda segment: (segment[0], segment[1]))
        return segments

    def _scan_text(self, start: int, end: int) -> None:
        """Tokenize plain text in [start, end)."""
        source = self._source
        tokens = self._tokens
        pos = start
        while pos < end:
            char = source[pos]

            if char in WHITESPACE:
                ws_end = pos + 1
                while ws_end < end and source[ws_end] in WHITESPACE:
                    ws_end += 1
                if tokens:
                    tokens[-1].raw_space_after += source[pos:ws_end]
                else:
                    tokens.append(Token(TokenType.SPACE, source[pos:ws_end], pos))
                pos = ws_end
                continue

            kind = classify_char(char)
            if kind in _PUNCTUATION:
                tokens.append(Token(kind, char, pos))
                pos += 1
                continue

            run_end = pos + 1
            while (
                run_end < end
                and source[run_end] not in WHITESPACE
                and classify_char(source[run_end]) is kind
            ):
                run_end += 1
            tokens.append(Token(kind, source[pos:run_end], pos))
            pos = run_end

    def _assign_enclosing_marks(self) -> None:
        """Point plain tokens at the innermost HYPER mark around them."""
        stack: list[Mark] = []
        for token in self._tokens:
            if token.type is TokenType.MARK_BOUNDARY:
                if token.side is MarkSide.OPEN:
                    assert token.mark is not None
                    stack.append(token.mark)
                elif stack:
                    stack.pop()
                continue
            if token.mark is None and stack:
                token.mark = stack[-1]

    def _check_partition(self) -> None:
        """Verify the token spans cover the block with no gap or overlap."""
        expected = 0
        for token in self._tokens:
            if token.index != expected:
                raise TokenizationError("Tokens do not partition the block", index=token.index)
            expected = token.span_end
        if expected != self._source_len:
            raise TokenizationError("Tokens do not cover the block", index=expected)


def tokenize(content: str, marks: Sequence[Mark] = ()) -> list[Token]:
    """Tokenize block content.

    Convenience wrapper around Tokenizer.

    Args:
        content: Block text
        marks: Block-relative marks

    Returns:
        Tokens partitioning the block
    """
    return Tokenizer(content, marks).tokenize()
