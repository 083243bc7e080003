"""
classifier.py — Decide what kind of word a token is.

classify() tries, in order, and stops at the first hit:

  A. custom dictionary, exact             -> CUSTOM
  B. custom dictionary, after a prefix    -> CUSTOM_WITH_PREFIX
  C. no Hebrew letter at all              -> NON_HEBREW
  D. main dictionary, exact (or minus a
     trailing geresh)                     -> HEBREW
  E. main dictionary, after a prefix      -> HEBREW_WITH_PREFIX
  F. tolerant lookup, if requested:
       whole word                         -> HEBREW_TOLERATED
       after a prefix                     -> HEBREW_TOLERATED_WITH_PREFIX
  G.                                      -> UNRECOGNIZED

Prefix matching tries every prefix length in turn: Hebrew prefixes are
stacked single letters (ו + ש + ב + ...), and the table is read by
increasing length until the first unregistered prefix. The prefix only
grows while at least two letters remain (של, שלא), so the last stem tried
can be a single letter.

A prefixed match needs a lemma reading whose projected descriptor mask
intersects the prefix mask. For exact lookups the word-level
allowed_prefix_mask is checked first as a cheap filter.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol

from hebword.dictionary import UnsupportedCharacterError
from hebword.lingo import PrefixMaskTable, dmask_to_prefix_mask
from hebword.models import MorphData, WordType
from hebword.script import is_hebrew_word, strip_geresh
from hebword.tolerators import Tolerator, tolerate_em_kryia_all


logger = logging.getLogger(__name__)

# Longest Hebrew word is 19 letters; longer tokens are not worth a fuzzy search
MAX_TOLERANT_LENGTH = 20

# A longer prefix is tried only while this many letters remain (של, שלא)
MIN_STEM_LENGTH = 2


class Lookup(Protocol):
    def lookup(self, word: str) -> Optional[MorphData]:
        ...


class TolerantLookup(Lookup, Protocol):
    def lookup_tolerant(self, word: str, tolerator: Tolerator) -> list:
        ...


def lemma_accepts_prefix(data: MorphData, prefix_mask: int) -> bool:
    """True if some lemma reading of data may follow a prefix with prefix_mask."""
    return any(dmask_to_prefix_mask(desc) & prefix_mask for desc in data.descriptor_flags)


@dataclass(frozen=True)
class WordClassifier:
    """
    Classifies words against a main dictionary, an optional custom
    dictionary and a prefix table.

    Instances never change. To swap dictionaries (e.g. on a config reload)
    build a new one with with_custom_dictionary() or dataclasses.replace();
    calls already running keep the dictionaries they started with.
    """
    dictionary: TolerantLookup
    prefixes: PrefixMaskTable
    custom: Optional[Lookup] = None
    tolerator: Tolerator = tolerate_em_kryia_all
    max_tolerant_length: int = MAX_TOLERANT_LENGTH

    def with_custom_dictionary(self, custom: Optional[Lookup]) -> 'WordClassifier':
        return dataclasses.replace(self, custom=custom)

    def classify(self, word: str, tolerate: bool = False) -> WordType:
        """Classify one word. Never raises."""
        word_type = self._classify(word, tolerate)
        logger.debug(f"{word!r} -> {word_type.name}")
        return word_type

    def classify_all(self, words: Iterable[str], tolerate: bool = False) -> List[WordType]:
        return [self.classify(word, tolerate) for word in words]

    def _classify(self, word: str, tolerate: bool) -> WordType:
        if self.custom is not None:
            if _safe_lookup(self.custom, word) is not None:
                return WordType.CUSTOM
            if self._match_prefixed(self.custom, word):
                return WordType.CUSTOM_WITH_PREFIX

        if not is_hebrew_word(word):
            return WordType.NON_HEBREW

        if _safe_lookup(self.dictionary, word) is not None:
            return WordType.HEBREW

        # Try omitting a closing geresh
        stripped = strip_geresh(word)
        if stripped != word and _safe_lookup(self.dictionary, stripped) is not None:
            return WordType.HEBREW

        if self._match_prefixed(self.dictionary, word):
            return WordType.HEBREW_WITH_PREFIX

        if tolerate:
            if len(word) > self.max_tolerant_length:
                return WordType.UNRECOGNIZED

            if self._tolerant_lookup(word):
                return WordType.HEBREW_TOLERATED

            if self._match_prefixed_tolerant(word):
                return WordType.HEBREW_TOLERATED_WITH_PREFIX

        return WordType.UNRECOGNIZED

    # -------------------------------------------------------------------------
    # Prefix scans
    # -------------------------------------------------------------------------

    def _prefix_splits(self, word: str):
        """Yield (prefix_mask, stem) for every registered prefix, shortest first."""
        prefix_len = 0
        while len(word) - prefix_len >= MIN_STEM_LENGTH:
            prefix_len += 1
            mask = self.prefixes.lookup_prefix(word[:prefix_len])
            if mask is None:
                return
            yield mask, word[prefix_len:]

    def _match_prefixed(self, dictionary: Lookup, word: str) -> bool:
        for mask, stem in self._prefix_splits(word):
            data = _safe_lookup(dictionary, stem)
            if data is None or not data.allowed_prefix_mask & mask:
                continue
            if lemma_accepts_prefix(data, mask):
                return True
        return False

    def _match_prefixed_tolerant(self, word: str) -> bool:
        for mask, stem in self._prefix_splits(word):
            for match in self._tolerant_lookup(stem):
                if lemma_accepts_prefix(match.data, mask):
                    return True
        return False

    def _tolerant_lookup(self, word: str) -> list:
        try:
            return self.dictionary.lookup_tolerant(word, self.tolerator) or []
        except UnsupportedCharacterError:
            return []


def _safe_lookup(dictionary: Lookup, word: str) -> Optional[MorphData]:
    """Exact lookup; a query the dictionary cannot index counts as not found."""
    try:
        return dictionary.lookup(word)
    except UnsupportedCharacterError:
        return None
