"""Validation issues emitted by rules.

Rules do not write into a shared list. Each rule returns the
PendingValidation values for the changes it made, the engine collects
them per block, and the reconstructor turns the survivors into
ValidationIssue values with absolute offsets.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from hanlint.tokens import Token


class ValidationTarget(Enum):
    """What part of a token a validation is about."""

    SPACE_AFTER = auto()  # The gap after the token was changed
    CONTENT = auto()  # The token text was changed
    NOTE = auto()  # Advisory, nothing was changed


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A positioned, named diagnostic.

    Attributes:
        index: Offset of the issue; block-relative when emitted by a rule,
            absolute after reconstruction
        name: Name of the rule that raised it
        message: Human readable description
        target: Which part of the token the issue is about
        length: Length of the affected original text

    """

    index: int
    name: str
    message: str
    target: ValidationTarget = ValidationTarget.SPACE_AFTER
    length: int = 0

    def shifted(self, offset: int) -> ValidationIssue:
        """Return the same issue moved by offset characters."""
        return replace(self, index=self.index + offset)


@dataclass(frozen=True, slots=True)
class PendingValidation:
    """A validation still tied to the token it describes."""

    token: Token
    issue: ValidationIssue

    @property
    def still_applies(self) -> bool:
        """Check whether the token still differs from the original.

        Fixes that a later rule reverted (for example a line break restored
        by case-linebreak) leave no validation behind.
        """
        target = self.issue.target
        if target is ValidationTarget.SPACE_AFTER:
            return self.token.space_after != self.token.raw_space_after
        if target is ValidationTarget.CONTENT:
            return self.token.content != self.token.raw_content
        return True


def space_issue(token: Token, name: str, message: str) -> PendingValidation:
    """Build a pending validation for a changed gap after token."""
    return PendingValidation(
        token,
        ValidationIssue(
            index=token.end,
            name=name,
            message=message,
            target=ValidationTarget.SPACE_AFTER,
            length=len(token.raw_space_after),
        ),
    )


def content_issue(token: Token, name: str, message: str) -> PendingValidation:
    """Build a pending validation for changed token text."""
    return PendingValidation(
        token,
        ValidationIssue(
            index=token.index,
            name=name,
            message=message,
            target=ValidationTarget.CONTENT,
            length=len(token.raw_content),
        ),
    )


def note_issue(token: Token, name: str, message: str) -> PendingValidation:
    """Build an advisory validation that is reported without a fix."""
    return PendingValidation(
        token,
        ValidationIssue(
            index=token.index,
            name=name,
            message=message,
            target=ValidationTarget.NOTE,
            length=len(token.raw_content),
        ),
    )
