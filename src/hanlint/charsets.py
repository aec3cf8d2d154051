"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Width follows Unicode East Asian Width: wide (W) and fullwidth (F)
characters are full-width, everything else is half-width. A handful of
ambiguous-width punctuation marks that Chinese text uses as full-width
(curly quotes, dashes, ellipsis, middle dot) are listed explicitly.

Usage:
    from hanlint.charsets import classify_char

    if classify_char(char) is TokenType.CONTENT_FULL:
        ...
"""

import unicodedata
from functools import lru_cache

from hanlint.tokens import TokenType

# ASCII whitespace; U+3000 is treated as full-width content
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

# Every ASCII punctuation character is a half-width punctuation token
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

# Ambiguous-width marks that behave as full-width punctuation in Chinese text
FULL_WIDTH_PUNCTUATION_EXTRA: frozenset[str] = frozenset("“”‘’—–…·")

# Sentence punctuation handled by unify-punctuation and space-punctuation
HALF_SENTENCE_PUNCTUATION: frozenset[str] = frozenset(",.;:?!")
HALF_TO_FULL: dict[str, str] = {
    ",": "，",
    ".": "。",
    ";": "；",
    ":": "：",
    "?": "？",
    "!": "！",
}

# Bracket pairs (opener -> closer)
HALF_BRACKETS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
HALF_CLOSING_BRACKETS: frozenset[str] = frozenset(HALF_BRACKETS.values())

# Quotation marks
HALF_QUOTES: frozenset[str] = frozenset("\"'")
TRADITIONAL_QUOTES: dict[str, str] = {"「": "」", "『": "』"}
TRADITIONAL_CLOSING_QUOTES: frozenset[str] = frozenset(TRADITIONAL_QUOTES.values())

# Operators recognized by case-math-exp
MATH_OPERATORS: frozenset[str] = frozenset("+-*/%=")

# Characters that make up an ellipsis run
ELLIPSIS_CHARS: frozenset[str] = frozenset(".。…")

# Chinese date/time units that attach to numbers without a space
DATE_UNITS: frozenset[str] = frozenset("年月日天号时分秒")

ASCII_DIGITS: frozenset[str] = frozenset("0123456789")


@lru_cache(maxsize=4096)
def classify_char(char: str) -> TokenType:
    """Classify a single non-whitespace character.

    Returns one of CONTENT_HALF, CONTENT_FULL, PUNCTUATION_HALF or
    PUNCTUATION_FULL.

    """
    if char in ASCII_PUNCTUATION:
        return TokenType.PUNCTUATION_HALF
    if char in FULL_WIDTH_PUNCTUATION_EXTRA:
        return TokenType.PUNCTUATION_FULL
    wide = unicodedata.east_asian_width(char) in ("W", "F")
    if unicodedata.category(char).startswith("P"):
        return TokenType.PUNCTUATION_FULL if wide else TokenType.PUNCTUATION_HALF
    return TokenType.CONTENT_FULL if wide else TokenType.CONTENT_HALF


def is_ascii_digits(text: str) -> bool:
    """Check if text is a non-empty run of ASCII digits."""
    return bool(text) and all(char in ASCII_DIGITS for char in text)
