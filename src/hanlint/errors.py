"""Exception classes for hanlint.

Provides standardized exceptions for error handling throughout hanlint.
Malformed markup never raises: segmenters fall back to their documented
unterminated-region policy instead. Only configuration mistakes (in strict
mode) and internal invariant violations surface as exceptions.
"""

from __future__ import annotations


class HanlintError(Exception):
    """Base exception for all hanlint errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigurationError(HanlintError):
    """Error in lint options.

    Raised for unknown rule or segmenter names when strict mode is on,
    and for ignore cases that cannot be parsed.
    """

    def __init__(self, message: str, name: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error description
            name: The offending rule, segmenter or case text (optional)
        """
        self.name = name
        if name is not None:
            message = f"{message}: {name!r}"
        super().__init__(message)


class TokenizationError(HanlintError):
    """Tokenizer produced tokens that do not partition the block.

    This is an internal defect, not a user input error: the reconstructor
    depends on every character belonging to exactly one token.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize tokenization error.

        Args:
            message: Error description
            index: Block offset where the invariant broke (optional)
        """
        self.index = index
        location = f" (at offset {index})" if index is not None else ""
        super().__init__(f"{message}{location}")


class SegmentationError(HanlintError):
    """Segmenters produced blocks that are unsorted, overlapping or out of range."""

    pass
