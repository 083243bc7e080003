"""Pytest configuration and shared fixtures."""
import tempfile
from pathlib import Path

import orjson
import pytest

from hebword.classifier import WordClassifier
from hebword.dictionary import HEBREW_ALPHABET, ExactDictionary
from hebword.lingo import (
    D_FEMININE,
    D_IMPERATIVE,
    D_MASCULINE,
    D_NOUN,
    D_OSMICHUT,
    D_PAST,
    D_PLURAL,
    D_SINGULAR,
    D_SPECNOUN,
    D_VERB,
    PS_ALL,
    PS_IMPER,
    PS_NONDEF,
    PS_PREP,
    PS_VERB,
    build_prefix_table,
)
from hebword.models import MorphData


NOUN_MS = D_NOUN | D_MASCULINE | D_SINGULAR
VERB_PAST_MS = D_VERB | D_PAST | D_MASCULINE | D_SINGULAR


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mini_lexicon():
    """A small hand-made lexicon.

    Each entry is chosen to exercise one classification path:
      - plain nouns for exact and prefixed hits
      - a word with noun and verb readings
      - a past-tense verb (takes ש but not ה)
      - an imperative (takes only ו)
      - a construct-state noun (takes ב but not ה)
      - ילד has a word-level mask that disagrees with its lemma
    """
    return {
        'בית': MorphData(('בית',), (NOUN_MS,), PS_ALL),
        'ספר': MorphData(('ספר', 'ספר'), (NOUN_MS, VERB_PAST_MS), PS_ALL),
        'ספרים': MorphData(('ספר',), (D_NOUN | D_MASCULINE | D_PLURAL,), PS_ALL),
        'שלום': MorphData(('שלום',), (NOUN_MS,), PS_ALL),
        'מות': MorphData(('מוות',), (NOUN_MS,), PS_ALL),
        'כתב': MorphData(('כתב',), (VERB_PAST_MS,), PS_ALL),
        'לך': MorphData(('הלך',), (D_VERB | D_IMPERATIVE | D_MASCULINE | D_SINGULAR,), PS_IMPER),
        'מלכת': MorphData(('מלכה',), (D_NOUN | D_FEMININE | D_SINGULAR | D_OSMICHUT,), PS_PREP | PS_NONDEF),
        'ילד': MorphData(('ילד',), (NOUN_MS,), PS_VERB),
    }


@pytest.fixture
def dictionary(mini_lexicon):
    return ExactDictionary.from_entries(mini_lexicon, HEBREW_ALPHABET)


@pytest.fixture
def prefixes():
    return build_prefix_table()


@pytest.fixture
def custom_dictionary():
    """User overrides: a proper noun, a Latin-script word, and two words
    that would otherwise be found through the main dictionary."""
    return ExactDictionary.from_entries({
        'גוגל': MorphData(('גוגל',), (D_NOUN | D_SPECNOUN,), PS_ALL),
        'iPhone': MorphData(('iPhone',), (D_NOUN,), PS_ALL),
        'שלום': MorphData(('שלום',), (NOUN_MS,), PS_ALL),
        'הבית': MorphData(('הבית',), (NOUN_MS,), PS_ALL),
    })


@pytest.fixture
def classifier(dictionary, prefixes):
    return WordClassifier(dictionary=dictionary, prefixes=prefixes)


@pytest.fixture
def classifier_with_custom(classifier, custom_dictionary):
    return classifier.with_custom_dictionary(custom_dictionary)


@pytest.fixture
def lexicon_file(temp_dir, mini_lexicon):
    """mini_lexicon written as lexicon JSONL."""
    path = temp_dir / 'lexicon.jsonl'
    with open(path, 'wb') as f:
        for word, data in mini_lexicon.items():
            record = {'word': word}
            record.update(data.to_dict())
            f.write(orjson.dumps(record) + b'\n')
    return path
