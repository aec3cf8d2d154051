"""Reconstruct block text from tokens and splice blocks back together.

Rendering is the concatenation of ``content + space_after`` per token.
Because tokens partition the block, a block whose tokens were never
changed renders to exactly its original text.

"""

from __future__ import annotations

from collections.abc import Sequence

from hanlint.nodes import Block, IgnoredMark
from hanlint.tokens import Token
from hanlint.validation import PendingValidation, ValidationIssue, ValidationTarget


def _preserved(
    tokens: Sequence[Token], offset: int, ignored_marks: Sequence[IgnoredMark]
) -> tuple[set[int], set[int]]:
    """Ids of tokens whose content and whose gap lie inside ignored marks."""
    content_ids: set[int] = set()
    gap_ids: set[int] = set()
    for token in tokens:
        start = offset + token.index
        end = offset + token.end
        for mark in ignored_marks:
            if mark.start <= start and end <= mark.end:
                content_ids.add(id(token))
                if end < mark.end:
                    gap_ids.add(id(token))
                break
    return content_ids, gap_ids


def join(
    tokens: Sequence[Token],
    pending: Sequence[PendingValidation],
    offset: int,
    ignored_marks: Sequence[IgnoredMark] = (),
    preserve_ignored: bool = False,
) -> tuple[str, list[ValidationIssue]]:
    """Render a block and remap its validations.

    A pending validation survives only if its token still differs from
    the original at the validated place (NOTE validations always
    survive). For each token and target only the last validation is kept,
    since a later rule overrides an earlier one.

    Args:
        tokens: The block's tokens after all rules ran
        pending: Validations the rules returned, in rule order
        offset: Absolute start of the block
        ignored_marks: Ignored spans in this block (absolute)
        preserve_ignored: Render tokens inside ignored spans unfixed

    Returns:
        (rendered text, validations with absolute indexes)
    """
    content_ids: set[int] = set()
    gap_ids: set[int] = set()
    if preserve_ignored and ignored_marks:
        content_ids, gap_ids = _preserved(tokens, offset, ignored_marks)

    parts: list[str] = []
    for token in tokens:
        parts.append(token.raw_content if id(token) in content_ids else token.content)
        parts.append(token.raw_space_after if id(token) in gap_ids else token.space_after)

    latest: dict[tuple[int, ValidationTarget], PendingValidation] = {}
    notes: list[PendingValidation] = []
    for item in pending:
        target = item.issue.target
        if target is ValidationTarget.NOTE:
            notes.append(item)
            continue
        preserved = gap_ids if target is ValidationTarget.SPACE_AFTER else content_ids
        if id(item.token) in preserved:
            continue
        latest[(id(item.token), target)] = item

    issues = [
        item.issue.shifted(offset)
        for item in (*latest.values(), *notes)
        if item.still_applies
    ]
    issues.sort(key=lambda issue: issue.index)
    return "".join(parts), issues


def replace_blocks(content: str, rendered: Sequence[tuple[Block, str]]) -> str:
    """Splice rendered blocks back into the document at their original spans.

    Blocks must be sorted and non-overlapping.
    """
    parts: list[str] = []
    pos = 0
    for block, text in rendered:
        parts.append(content[pos : block.start])
        parts.append(text)
        pos = block.end
    parts.append(content[pos:])
    return "".join(parts)
