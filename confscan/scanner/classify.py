"""ASCII character classification for the config scanner.

Classification is locale-independent: only ASCII letters, digits, and the
C-locale whitespace set are recognized. Every other character, including any
non-ASCII letter, is `CharClass.OTHER`.
"""

from __future__ import annotations

from enum import Enum
import string


class CharClass(Enum):
    """Lexical category of one input character."""

    LETTER = "letter"
    DIGIT = "digit"
    UNDERSCORE = "underscore"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    EQUALS = "equals"
    HASH = "hash"
    NEWLINE = "newline"
    SPACE = "space"
    OTHER = "other"


_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_BLANKS = frozenset(" \t\v\f\r")
_PUNCTUATION = {
    "_": CharClass.UNDERSCORE,
    "'": CharClass.SINGLE_QUOTE,
    '"': CharClass.DOUBLE_QUOTE,
    "=": CharClass.EQUALS,
    "#": CharClass.HASH,
    "\n": CharClass.NEWLINE,
}


def classify(char: str) -> CharClass:
    """Return the lexical category of a single character."""

    if char in _LETTERS:
        return CharClass.LETTER
    if char in _DIGITS:
        return CharClass.DIGIT
    if char in _BLANKS:
        return CharClass.SPACE
    return _PUNCTUATION.get(char, CharClass.OTHER)


def is_whitespace(char_class: CharClass) -> bool:
    """Return whether a category counts as whitespace (newline included)."""

    return char_class in (CharClass.SPACE, CharClass.NEWLINE)


def is_name_char(char_class: CharClass) -> bool:
    """Return whether a category may continue a parameter name."""

    return char_class in (CharClass.LETTER, CharClass.DIGIT, CharClass.UNDERSCORE)
