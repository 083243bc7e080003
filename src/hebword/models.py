"""
Data model for Hebrew word recognition.

MorphData is the per-word record stored in a dictionary; WordType is the
result of classifying a word.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class WordType(Enum):
    """Outcome of classifying a single word."""
    HEBREW = 'HEBREW'
    HEBREW_WITH_PREFIX = 'HEBREW_WITH_PREFIX'
    HEBREW_TOLERATED = 'HEBREW_TOLERATED'
    HEBREW_TOLERATED_WITH_PREFIX = 'HEBREW_TOLERATED_WITH_PREFIX'
    NON_HEBREW = 'NON_HEBREW'
    UNRECOGNIZED = 'UNRECOGNIZED'
    CUSTOM = 'CUSTOM'
    CUSTOM_WITH_PREFIX = 'CUSTOM_WITH_PREFIX'

    @property
    def is_recognized(self) -> bool:
        return self not in (WordType.NON_HEBREW, WordType.UNRECOGNIZED)


@dataclass(frozen=True)
class MorphData:
    """
    Morphological record for one word form.

    Attributes:
        lemmas: Lemma readings of the word form, at least one
        descriptor_flags: One descriptor (D_* bits) per lemma, same order
        allowed_prefix_mask: Prefix categories (PS_* bits) the word form
            may follow. Coarse filter; the per-lemma projection of
            descriptor_flags is the authoritative test.
    """
    lemmas: Tuple[str, ...]
    descriptor_flags: Tuple[int, ...]
    allowed_prefix_mask: int

    def __post_init__(self):
        # Accept any sequence, store tuples
        object.__setattr__(self, 'lemmas', tuple(self.lemmas))
        object.__setattr__(self, 'descriptor_flags', tuple(self.descriptor_flags))
        if len(self.lemmas) != len(self.descriptor_flags):
            raise ValueError(
                f"{len(self.lemmas)} lemmas but {len(self.descriptor_flags)} descriptor flags"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the lexicon JSONL record format (without the word)."""
        return {
            'prefixes': self.allowed_prefix_mask,
            'lemmas': [
                {'lemma': lemma, 'desc': desc}
                for lemma, desc in zip(self.lemmas, self.descriptor_flags)
            ],
        }

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> 'MorphData':
        """Inverse of to_dict(). Raises KeyError/TypeError on bad records."""
        readings = record['lemmas']
        return cls(
            lemmas=tuple(r['lemma'] for r in readings),
            descriptor_flags=tuple(int(r['desc']) for r in readings),
            allowed_prefix_mask=int(record['prefixes']),
        )
