"""Hebrew script tests."""

# Letters א..ת, final forms included
ALEF = 'א'
TAV = 'ת'

# Trailing marks that may be dropped without changing dictionary identity.
# Typists use the ASCII apostrophe far more often than U+05F3.
GERESH_MARKS = ("'", '׳')


def is_hebrew_letter(c: str) -> bool:
    return ALEF <= c <= TAV


def is_hebrew_word(word: str) -> bool:
    """True if any character of word is a Hebrew letter."""
    return any(is_hebrew_letter(c) for c in word)


def strip_geresh(word: str) -> str:
    """Remove one trailing geresh, or return word unchanged."""
    if word.endswith(GERESH_MARKS):
        return word[:-1]
    return word
