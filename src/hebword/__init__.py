"""
hebword — Hebrew word recognition.

Classifies a word as a dictionary word, a dictionary word behind a
grammatical prefix, a tolerated (defective spelling) match, a custom word,
a non-Hebrew token, or unrecognized.
"""

from hebword.classifier import WordClassifier
from hebword.dictionary import ExactDictionary, UnsupportedCharacterError
from hebword.lingo import PrefixMaskTable, build_prefix_table
from hebword.models import MorphData, WordType
from hebword.script import is_hebrew_word

__version__ = "0.1.0"

__all__ = [
    "WordClassifier",
    "ExactDictionary",
    "UnsupportedCharacterError",
    "PrefixMaskTable",
    "build_prefix_table",
    "MorphData",
    "WordType",
    "is_hebrew_word",
]
