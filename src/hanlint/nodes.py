"""Document segmentation data model.

A document is linted as a set of independently processed blocks. Each
block carries marks: spans that the rule engine must either leave alone
(RAW) or treat as a wrapper whose delimiters need outside spacing (HYPER).

Thread Safety:
All classes here are frozen dataclasses. Segmenters return new
DocumentState values instead of mutating the one they receive.

"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hanlint.ignored import IgnorePattern


class MarkKind(Enum):
    """How the rule engine treats a marked span."""

    RAW = auto()  # Opaque: inline code, raw HTML, template tags
    HYPER = auto()  # Wrapper: emphasis, links; only the delimiters are opaque


@dataclass(frozen=True, slots=True)
class Mark:
    """A marked span inside a block (block-relative offsets).

    For HYPER marks the open delimiter is [start, inner_start) and the
    close delimiter is [inner_end, end); the text between them is linted.
    RAW marks leave inner_start/inner_end unset.

    Attributes:
        start: Span start (inclusive)
        end: Span end (exclusive)
        kind: RAW or HYPER
        meta: Construct name ("code", "html", "emphasis", "link", ...)
        inner_start: End of the open delimiter (HYPER only)
        inner_end: Start of the close delimiter (HYPER only)

    """

    start: int
    end: int
    kind: MarkKind
    meta: str = ""
    inner_start: int | None = None
    inner_end: int | None = None

    @classmethod
    def raw(cls, start: int, end: int, meta: str = "raw") -> Mark:
        """Create a RAW mark."""
        return cls(start=start, end=end, kind=MarkKind.RAW, meta=meta)

    @classmethod
    def hyper(
        cls, start: int, inner_start: int, inner_end: int, end: int, meta: str
    ) -> Mark:
        """Create a HYPER mark from its four delimiter offsets."""
        return cls(
            start=start,
            end=end,
            kind=MarkKind.HYPER,
            meta=meta,
            inner_start=inner_start,
            inner_end=inner_end,
        )

    @property
    def is_raw(self) -> bool:
        return self.kind is MarkKind.RAW

    def shifted(self, delta: int) -> Mark:
        """Return the same mark moved by delta characters."""
        if self.kind is MarkKind.RAW:
            return replace(self, start=self.start + delta, end=self.end + delta)
        assert self.inner_start is not None and self.inner_end is not None
        return replace(
            self,
            start=self.start + delta,
            end=self.end + delta,
            inner_start=self.inner_start + delta,
            inner_end=self.inner_end + delta,
        )

    def delimiters(self) -> tuple[tuple[int, int], ...]:
        """Opaque sub-spans of this mark: the whole span, or both delimiters."""
        if self.kind is MarkKind.RAW:
            return ((self.start, self.end),)
        assert self.inner_start is not None and self.inner_end is not None
        return ((self.start, self.inner_start), (self.inner_end, self.end))

    def conflicts_with(self, other: Mark) -> bool:
        """Check whether two marks cannot coexist in one block.

        Marks may nest only when the inner one lies entirely inside the
        outer one's linted content. Anything else (crossing spans, sharing
        a delimiter, anything inside a RAW span) is a conflict.
        """
        if self.end <= other.start or other.end <= self.start:
            return False
        for outer, inner in ((self, other), (other, self)):
            if outer.kind is MarkKind.HYPER:
                assert outer.inner_start is not None and outer.inner_end is not None
                if outer.inner_start <= inner.start and inner.end <= outer.inner_end:
                    return False
        return True


@dataclass(frozen=True, slots=True)
class Block:
    """A contiguous, independently linted region of the document.

    Attributes:
        value: The block text, always content[start:end]
        start: Absolute start offset (inclusive)
        end: Absolute end offset (exclusive)
        marks: Block-relative marks, sorted by start

    """

    value: str
    start: int
    end: int
    marks: tuple[Mark, ...] = ()

    def slice(self, start: int, end: int) -> Block:
        """Cut out [start, end) (block-relative) as a new block.

        Marks entirely inside the range are kept and rebased; marks that
        straddle the cut are dropped.
        """
        marks = tuple(
            mark.shifted(-start)
            for mark in self.marks
            if mark.start >= start and mark.end <= end
        )
        return Block(
            value=self.value[start:end],
            start=self.start + start,
            end=self.start + end,
            marks=marks,
        )

    def with_marks(self, marks: list[Mark] | tuple[Mark, ...]) -> Block:
        """Return a copy with additional marks.

        Marks that conflict with an existing (or earlier added) mark are
        rejected; the first mark to claim a span wins.
        """
        accepted = list(self.marks)
        for mark in marks:
            if not 0 <= mark.start <= mark.end <= len(self.value):
                continue
            if any(mark.conflicts_with(existing) for existing in accepted):
                continue
            accepted.append(mark)
        accepted.sort(key=lambda m: (m.start, -m.end))
        return replace(self, marks=tuple(accepted))


@dataclass(frozen=True, slots=True)
class ParserIgnoredSpan:
    """A span a segmenter removed from linting (absolute offsets)."""

    start: int
    end: int
    reason: str


@dataclass(frozen=True, slots=True)
class IgnoredMark:
    """A span matched by a user ignore pattern (absolute offsets)."""

    start: int
    end: int

    def covers(self, index: int) -> bool:
        """Check if a validation index falls in this span (end inclusive)."""
        return self.start <= index <= self.end


@dataclass(frozen=True, slots=True)
class DocumentState:
    """The value threaded through the segmenter chain.

    Attributes:
        content: The full original document
        blocks: Blocks still to be linted, sorted and non-overlapping
        ignored_by_rules: Ignore patterns (user supplied plus inline comments)
        ignored_by_parsers: Spans removed from linting by segmenters

    """

    content: str
    blocks: tuple[Block, ...]
    ignored_by_rules: tuple[IgnorePattern, ...] = ()
    ignored_by_parsers: tuple[ParserIgnoredSpan, ...] = field(default=())

    @classmethod
    def initial(
        cls, content: str, ignored_cases: tuple[IgnorePattern, ...] = ()
    ) -> DocumentState:
        """Create the starting state: one block spanning the whole document."""
        return cls(
            content=content,
            blocks=(Block(value=content, start=0, end=len(content)),),
            ignored_by_rules=tuple(ignored_cases),
        )
