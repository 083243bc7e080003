"""Tests for lexicon and custom-words loading."""

import logging

import orjson
import pytest

from hebword.dictionary import HEBREW_ALPHABET, ExactDictionary, dictionary_paths
from hebword.lingo import D_NOUN, D_SPECNOUN, PS_ALL
from hebword.loader import build_dictionary, iter_lexicon, load_custom_words, load_lexicon
from hebword.models import MorphData


class TestLexicon:

    def test_load(self, lexicon_file, mini_lexicon):
        dictionary = load_lexicon(lexicon_file)
        assert dict(dictionary.items()) == mini_lexicon

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_lexicon(temp_dir / 'missing.jsonl')

    def test_bad_lines_skipped(self, temp_dir, caplog):
        path = temp_dir / 'lexicon.jsonl'
        good = {'word': 'בית', 'prefixes': 63, 'lemmas': [{'lemma': 'בית', 'desc': 1}]}
        lines = [
            orjson.dumps(good),
            b'',
            b'{not json',
            orjson.dumps({'word': 'ספר', 'prefixes': 63}),                  # no lemmas
            orjson.dumps({'word': 'ספר', 'prefixes': 63, 'lemmas': []}),    # empty lemmas
            orjson.dumps({'word': 'book', 'prefixes': 63, 'lemmas': [{'lemma': 'book', 'desc': 1}]}),
            orjson.dumps({'word': 7, 'prefixes': 63, 'lemmas': [{'lemma': 'x', 'desc': 1}]}),
            orjson.dumps(['בית']),
        ]
        path.write_bytes(b'\n'.join(lines) + b'\n')

        with caplog.at_level(logging.WARNING, logger='hebword.loader'):
            dictionary = load_lexicon(path)

        assert list(dictionary) == ['בית']
        assert any('Skipped 6 lines' in r.message for r in caplog.records)

    def test_iter_reports_line_numbers(self, temp_dir):
        path = temp_dir / 'lexicon.jsonl'
        record = {'word': 'בית', 'prefixes': 63, 'lemmas': [{'lemma': 'בית', 'desc': 1}]}
        path.write_bytes(b'\n' + b'garbage\n' + orjson.dumps(record) + b'\n')
        entries = list(iter_lexicon(path))
        assert [line_num for line_num, _ in entries] == [2, 3]
        assert entries[0][1] is None
        assert entries[1][1][0] == 'בית'

    def test_no_alphabet(self, temp_dir):
        path = temp_dir / 'lexicon.jsonl'
        record = {'word': 'book', 'prefixes': 63, 'lemmas': [{'lemma': 'book', 'desc': 1}]}
        path.write_bytes(orjson.dumps(record) + b'\n')
        assert 'book' in load_lexicon(path, alphabet=None)

    def test_build_dictionary(self, lexicon_file, mini_lexicon, temp_dir):
        stem = temp_dir / 'out' / 'he'
        built = build_dictionary(lexicon_file, stem)
        assert len(built) == len(mini_lexicon)
        assert all(path.exists() for path in dictionary_paths(stem))
        assert dict(ExactDictionary.load(stem, HEBREW_ALPHABET).items()) == mini_lexicon


class TestCustomWords:

    @pytest.fixture
    def custom_file(self, temp_dir):
        path = temp_dir / 'custom-words.txt'
        path.write_text(
            '# custom words\n'
            'גוגל שםפרטי\n'
            'Python name\n'
            'וויקי noun\n'
            'בלוג\n'
            'ספרון כמו ספר   # same readings as ספר\n'
            'ספריה like ספרים\n'
            '\n'
            'משהו כמו לאקיים\n'
            'משהו2 like\n'
            'משהו3 verb\n',
            encoding='utf-8'
        )
        return path

    def test_load(self, custom_file, dictionary, mini_lexicon):
        custom = load_custom_words(custom_file, dictionary)

        assert set(custom) == {'גוגל', 'Python', 'וויקי', 'בלוג', 'ספרון', 'ספריה'}
        assert custom.lookup('גוגל') == MorphData(('גוגל',), (D_NOUN | D_SPECNOUN,), PS_ALL)
        assert custom.lookup('Python').descriptor_flags == (D_NOUN | D_SPECNOUN,)
        assert custom.lookup('וויקי') == MorphData(('וויקי',), (D_NOUN,), PS_ALL)
        assert custom.lookup('בלוג') == MorphData(('בלוג',), (D_NOUN,), PS_ALL)
        assert custom.lookup('ספרון') == mini_lexicon['ספר']
        assert custom.lookup('ספריה') == mini_lexicon['ספרים']

    def test_bad_lines_logged(self, custom_file, dictionary, caplog):
        with caplog.at_level(logging.WARNING, logger='hebword.loader'):
            load_custom_words(custom_file, dictionary)
        messages = ' '.join(r.message for r in caplog.records)
        assert 'not in main dictionary' in messages
        assert 'needs a word to copy' in messages
        assert "unknown word type 'verb'" in messages

    def test_like_without_dictionary(self, custom_file):
        custom = load_custom_words(custom_file)
        assert 'ספרון' not in custom
        assert 'גוגל' in custom

    def test_custom_words_accept_any_script(self, custom_file, dictionary):
        custom = load_custom_words(custom_file, dictionary)
        assert custom.alphabet is None
        assert custom.lookup('C++') is None

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_custom_words(temp_dir / 'missing.txt')
