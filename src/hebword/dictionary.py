"""
dictionary.py — Word dictionaries backed by a MARISA trie.

An ExactDictionary maps word forms to MorphData records. Words live in a
marisa_trie.Trie; records live in a parallel list indexed by the trie key
id, so a lookup is one trie query plus one list access.

On disk a dictionary is two files sharing a stem:
  - {stem}.trie   the MARISA trie
  - {stem}.jsonl  one record per line; line i belongs to trie key id i

The same class provides tolerant (fuzzy) lookup: the trie is walked letter
by letter, a tolerator proposes extra steps at every position, and branches
that no dictionary word starts with are pruned.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import marisa_trie
import orjson

from hebword.models import MorphData
from hebword.tolerators import Tolerator


logger = logging.getLogger(__name__)


HEBREW_LETTERS = frozenset(chr(c) for c in range(ord('א'), ord('ת') + 1))

# Letters plus geresh/gershayim in their ASCII and Hebrew forms (צה"ל, ג'ירפה)
HEBREW_ALPHABET = HEBREW_LETTERS | frozenset('"\'׳״')


class UnsupportedCharacterError(ValueError):
    """Query contains characters the dictionary cannot index."""


class DictionaryFormatError(ValueError):
    """Dictionary files are missing pieces or disagree with each other."""


@dataclass(frozen=True)
class TolerantMatch:
    """A dictionary word reached from a query by tolerated steps."""
    word: str
    data: MorphData
    score: int


def dictionary_paths(stem: Union[str, Path]) -> Tuple[Path, Path]:
    """Return (trie_path, records_path) for a dictionary stem."""
    stem = str(stem)
    return Path(stem + '.trie'), Path(stem + '.jsonl')


class ExactDictionary:
    """Read-only word -> MorphData dictionary."""

    def __init__(
        self,
        trie: marisa_trie.Trie,
        records: List[MorphData],
        alphabet: Optional[FrozenSet[str]] = None
    ):
        """
        Args:
            trie: Trie holding every word
            records: Record of each word, indexed by trie key id
            alphabet: Characters queries may contain (None = anything)
        """
        if len(records) != len(trie):
            raise DictionaryFormatError(
                f"Trie has {len(trie):,} words but {len(records):,} records were given"
            )
        self._trie = trie
        self._records = records
        self.alphabet = alphabet

    @classmethod
    def from_entries(
        cls,
        entries: Union[Mapping[str, MorphData], Iterable[Tuple[str, MorphData]]],
        alphabet: Optional[FrozenSet[str]] = None
    ) -> 'ExactDictionary':
        """
        Build a dictionary from (word, record) pairs.

        Later duplicates replace earlier ones. Raises UnsupportedCharacterError
        for a word outside the alphabet and ValueError for an empty word.
        """
        if isinstance(entries, Mapping):
            entries = entries.items()

        by_word: Dict[str, MorphData] = {}
        for word, data in entries:
            if not word:
                raise ValueError("Dictionary words must not be empty")
            check_encodable(word)
            if alphabet is not None:
                check_alphabet(word, alphabet)
            by_word[word] = data

        trie = marisa_trie.Trie(list(by_word))
        records: List[Optional[MorphData]] = [None] * len(trie)
        for word, data in by_word.items():
            records[trie[word]] = data

        return cls(trie, records, alphabet)

    # -------------------------------------------------------------------------
    # Exact lookup
    # -------------------------------------------------------------------------

    def lookup(self, word: str) -> Optional[MorphData]:
        """
        Return the record for word, or None if it is not in the dictionary.

        Raises UnsupportedCharacterError if word has characters outside the
        dictionary's alphabet.
        """
        if self.alphabet is not None:
            check_alphabet(word, self.alphabet)
        check_encodable(word)
        if not word or word not in self._trie:
            return None
        return self._records[self._trie[word]]

    def __contains__(self, word: str) -> bool:
        try:
            check_encodable(word)
        except UnsupportedCharacterError:
            return False
        return bool(word) and word in self._trie

    def __len__(self) -> int:
        return len(self._trie)

    def __iter__(self) -> Iterator[str]:
        return iter(self._trie)

    def items(self) -> Iterator[Tuple[str, MorphData]]:
        for word in self._trie:
            yield word, self._records[self._trie[word]]

    # -------------------------------------------------------------------------
    # Tolerant lookup
    # -------------------------------------------------------------------------

    def lookup_tolerant(self, word: str, tolerator: Tolerator) -> List[TolerantMatch]:
        """
        Find dictionary words reachable from word through tolerated steps.

        The exact word, when present, is included with score 0. Each word is
        reported once, with its lowest score. Results are sorted by score.

        Raises UnsupportedCharacterError like lookup().
        """
        if self.alphabet is not None:
            check_alphabet(word, self.alphabet)
        check_encodable(word)
        if not word:
            return []

        best: Dict[str, int] = {}
        # (query position, dictionary text so far, score, last step was an insertion)
        stack = [(0, '', 0, False)]

        while stack:
            pos, built, score, inserted = stack.pop()

            if pos == len(word):
                if built in self._trie and score < best.get(built, score + 1):
                    best[built] = score
                continue

            verbatim = built + word[pos]
            if self._trie.has_keys_with_prefix(verbatim):
                stack.append((pos + 1, verbatim, score, False))

            for consumed, emitted, cost in tolerator(word, pos):
                if consumed == 0 and inserted:
                    continue
                candidate = built + emitted
                if self._trie.has_keys_with_prefix(candidate):
                    stack.append((pos + consumed, candidate, score + cost, consumed == 0))

        matches = [
            TolerantMatch(found, self._records[self._trie[found]], score)
            for found, score in best.items()
        ]
        matches.sort(key=lambda m: (m.score, m.word))
        return matches

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, stem: Union[str, Path]) -> Tuple[Path, Path]:
        """Write {stem}.trie and {stem}.jsonl. Returns both paths."""
        trie_path, records_path = dictionary_paths(stem)
        trie_path.parent.mkdir(parents=True, exist_ok=True)

        self._trie.save(str(trie_path))

        with open(records_path, 'wb') as f:
            for key_id, data in enumerate(self._records):
                record = {'word': self._trie.restore_key(key_id)}
                record.update(data.to_dict())
                f.write(orjson.dumps(record) + b'\n')

        logger.info(f"Saved {len(self):,} words to {trie_path} and {records_path}")
        return trie_path, records_path

    @classmethod
    def load(
        cls,
        stem: Union[str, Path],
        alphabet: Optional[FrozenSet[str]]
    ) -> 'ExactDictionary':
        """
        Load a dictionary written by save().

        The alphabet is not stored in the files; pass the one the dictionary
        was built with: HEBREW_ALPHABET for lexicon builds, None if unrestricted.

        Raises FileNotFoundError if either file is missing and
        DictionaryFormatError if the files disagree.
        """
        trie_path, records_path = dictionary_paths(stem)
        for path in (trie_path, records_path):
            if not path.exists():
                raise FileNotFoundError(f"Dictionary file not found: {path}")

        trie = marisa_trie.Trie()
        trie.load(str(trie_path))

        records = []
        with open(records_path, 'rb') as f:
            for line_num, line in enumerate(f):
                try:
                    record = orjson.loads(line)
                    data = MorphData.from_dict(record)
                except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    raise DictionaryFormatError(f"{records_path}:{line_num + 1}: {e}") from e
                if line_num >= len(trie) or trie.restore_key(line_num) != record.get('word'):
                    raise DictionaryFormatError(
                        f"{records_path}:{line_num + 1}: record does not match trie key id {line_num}"
                    )
                records.append(data)

        dictionary = cls(trie, records, alphabet)
        logger.info(f"Loaded {len(dictionary):,} words from {trie_path}")
        return dictionary


def check_alphabet(word: str, alphabet: FrozenSet[str]):
    for c in word:
        if c not in alphabet:
            raise UnsupportedCharacterError(f"Unsupported character {c!r} in {word!r}")


def check_encodable(word: str):
    """Reject strings the trie cannot encode, such as lone surrogates."""
    try:
        word.encode('utf-8')
    except UnicodeEncodeError as e:
        raise UnsupportedCharacterError(f"Unencodable character in {word!r}: {e.reason}") from e
