"""
Whitespace tokenizer and input validators.

Words are split on runs of spaces and kept verbatim. Only the space character
separates words, so tabs, newlines and other control characters end up inside
a token where the validators can reject them.
"""
from typing import Iterable, List, Set


# Characters with code points below this value are not allowed in any input
FIRST_PRINTABLE_CODE_POINT = 0x20


class Token:
    """
    A single word taken from a document or a query.

    Preprocessors work on ``processed_form``; an empty ``processed_form``
    means the token was dropped.
    """

    def __init__(self, processed_form: str, position: int = 0, is_minus: bool = False):
        self.original = processed_form
        self.processed_form = processed_form
        self.position = position
        self.is_minus = is_minus

    def __repr__(self):
        prefix = "-" if self.is_minus else ""
        return f"Token({prefix}{self.processed_form!r} @ {self.position})"


def split_into_words(text: str) -> List[str]:
    """
    Split text into words separated by one or more spaces.

    Args:
        text: Raw text

    Returns:
        List of non-empty words in their original order
    """
    return [word for word in text.split(" ") if word]


def tokenize(text: str) -> List[Token]:
    """Split text into ``Token`` objects, remembering each word's position."""
    return [Token(word, position=i) for i, word in enumerate(split_into_words(text))]


def make_unique_non_empty_strings(strings: Iterable[str]) -> Set[str]:
    return {s for s in strings if s}


def has_special_characters(text: str) -> bool:
    """
    Check whether text contains a control character.

    Args:
        text: Word to check

    Returns:
        True if any character has a code point in [0, 0x1F]
    """
    return any(ord(c) < FIRST_PRINTABLE_CODE_POINT for c in text)


def check_minus_usage(text: str) -> bool:
    """
    Validate the placement of minus signs in a raw query.

    The query is rejected when it contains two hyphens in a row, a hyphen
    followed by a space, or ends with a hyphen.

    Args:
        text: Raw query text (before tokenizing)

    Returns:
        True if minus signs are used correctly
    """
    previous = " "
    for c in text:
        if previous == "-" and c in ("-", " "):
            return False
        previous = c

    return previous != "-"
