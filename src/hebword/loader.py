"""
loader.py — Read lexicon and custom-word files into dictionaries.

LEXICON FORMAT (JSONL, one word form per line):
  {"word": "ספרים", "prefixes": 63,
   "lemmas": [{"lemma": "ספר", "desc": 81}]}

  prefixes: PS_* bits the word form may follow
  desc:     D_* descriptor flags of that lemma reading

CUSTOM WORDS FORMAT (UTF-8 text, '#' starts a comment):
  word                    a noun
  word noun|שםעצם         a noun
  word name|שםפרטי        a proper noun
  word like|כמו other     same readings as 'other' in the main dictionary

Lines that cannot be used are logged and skipped; a missing file raises
FileNotFoundError.
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterator, Optional, Tuple, Union

import orjson

from hebword.dictionary import (
    HEBREW_ALPHABET,
    ExactDictionary,
    UnsupportedCharacterError,
    check_alphabet,
)
from hebword.lingo import D_NOUN, D_SPECNOUN, PS_ALL
from hebword.models import MorphData
from hebword.progress_display import ProgressDisplay


logger = logging.getLogger(__name__)


NOUN_TYPES = {'noun', 'שםעצם'}
NAME_TYPES = {'name', 'שםפרטי'}
LIKE_TYPES = {'like', 'כמו'}


# =============================================================================
# Lexicon
# =============================================================================

def iter_lexicon(
    path: Path,
    alphabet: Optional[FrozenSet[str]] = HEBREW_ALPHABET
) -> Iterator[Tuple[int, Optional[Tuple[str, MorphData]]]]:
    """
    Yield (line_num, entry) for every non-blank line of a lexicon file.

    entry is None for lines that were skipped.
    """
    if not path.exists():
        raise FileNotFoundError(f"Lexicon not found: {path}")

    with open(path, 'rb') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                record = orjson.loads(line)
                word = record['word']
                data = MorphData.from_dict(record)
            except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"{path.name}:{line_num}: {e}")
                yield line_num, None
                continue

            if not isinstance(word, str) or not word or not data.lemmas:
                logger.warning(f"{path.name}:{line_num}: entry without word or lemmas")
                yield line_num, None
                continue

            if alphabet is not None:
                try:
                    check_alphabet(word, alphabet)
                except UnsupportedCharacterError as e:
                    logger.warning(f"{path.name}:{line_num}: {e}")
                    yield line_num, None
                    continue

            yield line_num, (word, data)


def load_lexicon(
    path: Path,
    alphabet: Optional[FrozenSet[str]] = HEBREW_ALPHABET
) -> ExactDictionary:
    """Load a lexicon JSONL file into a dictionary."""
    entries: Dict[str, MorphData] = {}
    skipped = 0
    for _, entry in iter_lexicon(path, alphabet):
        if entry is None:
            skipped += 1
            continue
        word, data = entry
        entries[word] = data

    logger.info(f"Loaded {len(entries):,} words from {path.name}")
    if skipped:
        logger.warning(f"  -> Skipped {skipped:,} lines")
    return ExactDictionary.from_entries(entries, alphabet)


def build_dictionary(
    input_path: Path,
    output_stem: Union[str, Path],
    alphabet: Optional[FrozenSet[str]] = HEBREW_ALPHABET
) -> ExactDictionary:
    """
    Build a dictionary from a lexicon file and save it next to output_stem.

    Writes {output_stem}.trie and {output_stem}.jsonl.
    """
    logger.info(f"Building dictionary from {input_path.name}")

    entries: Dict[str, MorphData] = {}
    skipped = 0
    with ProgressDisplay(f"Reading {input_path.name}") as progress:
        for line_num, entry in iter_lexicon(input_path, alphabet):
            if entry is None:
                skipped += 1
            else:
                word, data = entry
                entries[word] = data
            progress.update(Lines=line_num, Words=len(entries), Skipped=skipped)

    logger.info(f"  -> Read {len(entries):,} words")
    if skipped:
        logger.warning(f"  -> Skipped {skipped:,} lines")

    dictionary = ExactDictionary.from_entries(entries, alphabet)
    dictionary.save(output_stem)
    return dictionary


# =============================================================================
# Custom words
# =============================================================================

def load_custom_words(path: Path, dictionary: Optional[ExactDictionary] = None) -> ExactDictionary:
    """
    Load a custom words file.

    Args:
        path: Custom words file
        dictionary: Main dictionary, used to resolve 'like' lines

    Returns:
        A dictionary with no alphabet restriction
    """
    if not path.exists():
        raise FileNotFoundError(f"Custom words file not found: {path}")

    entries: Dict[str, MorphData] = {}

    with open(path, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f, 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue

            cells = line.split()
            word = cells[0]
            word_type = cells[1] if len(cells) > 1 else 'noun'

            if word_type in NOUN_TYPES:
                data = MorphData((word,), (D_NOUN,), PS_ALL)
            elif word_type in NAME_TYPES:
                data = MorphData((word,), (D_NOUN | D_SPECNOUN,), PS_ALL)
            elif word_type in LIKE_TYPES:
                data = _resolve_like(path, line_num, cells, dictionary)
                if data is None:
                    continue
            else:
                logger.warning(f"{path.name}:{line_num}: unknown word type '{word_type}'")
                continue

            entries[word] = data

    logger.info(f"Loaded {len(entries):,} custom words from {path.name}")
    return ExactDictionary.from_entries(entries)


def _resolve_like(path: Path, line_num: int, cells, dictionary: Optional[ExactDictionary]):
    if len(cells) < 3:
        logger.warning(f"{path.name}:{line_num}: 'like' needs a word to copy")
        return None
    if dictionary is None:
        logger.warning(f"{path.name}:{line_num}: no main dictionary to resolve '{cells[2]}'")
        return None
    try:
        data = dictionary.lookup(cells[2])
    except UnsupportedCharacterError:
        data = None
    if data is None:
        logger.warning(f"{path.name}:{line_num}: '{cells[2]}' not in main dictionary")
    return data
