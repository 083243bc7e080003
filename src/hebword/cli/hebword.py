#!/usr/bin/env python3
"""
hebword - Command-line tool for Hebrew word recognition.

Subcommands:
  classify   Classify words given as arguments, or one per line on stdin
  lookup     Show the lemma readings the dictionaries hold for each word
  build      Build a dictionary (.trie + .jsonl) from a lexicon JSONL file

Output of classify is one line per word:
  word<TAB>TYPE           (default)
  {"word":..,"type":..}   (--jsonl)

Output of lookup is one line per reading, or word<TAB>- if none:
  word<TAB>lemma<TAB>description
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional

import orjson

from hebword import __version__
from hebword.config import Config, ConfigError, load_classifier, load_config
from hebword.dictionary import DictionaryFormatError, UnsupportedCharacterError
from hebword.lingo import describe_dmask
from hebword.loader import build_dictionary


# Setup logging
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def _config_from_args(args: argparse.Namespace) -> Config:
    """Config file first, then command-line overrides."""
    config = load_config(args.config) if args.config else Config()

    if args.dictionary:
        config.dictionary = args.dictionary
        config.lexicon = None
    elif args.lexicon:
        config.lexicon = args.lexicon
        config.dictionary = None
    if args.custom_words:
        config.custom_words = args.custom_words
    if getattr(args, 'allow_he_hasheela', False):
        config.allow_he_hasheela = True
    if getattr(args, 'tolerate', False):
        config.tolerate = True

    return config


def _read_words(words: List[str]) -> Iterator[str]:
    if words:
        yield from words
        return
    for line in sys.stdin:
        word = line.strip()
        if word:
            yield word


def cmd_classify(args: argparse.Namespace) -> int:
    try:
        config = _config_from_args(args)
        classifier = load_classifier(config)
    except (ConfigError, FileNotFoundError, DictionaryFormatError) as e:
        logger.error(str(e))
        return 1

    if args.verbose:
        logger.info(f"Tolerant matching: {'on' if config.tolerate else 'off'}")

    counts = {}
    recognized = 0
    for word in _read_words(args.words):
        word_type = classifier.classify(word, config.tolerate)
        counts[word_type.name] = counts.get(word_type.name, 0) + 1
        if word_type.is_recognized:
            recognized += 1
        if args.jsonl:
            sys.stdout.write(orjson.dumps({'word': word, 'type': word_type.name}).decode('utf-8') + '\n')
        else:
            sys.stdout.write(f"{word}\t{word_type.name}\n")

    if args.verbose:
        logger.info(f"Recognized {recognized:,} of {sum(counts.values()):,} words")
        for name, count in sorted(counts.items()):
            logger.info(f"  {name}: {count:,}")

    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    try:
        classifier = load_classifier(_config_from_args(args))
    except (ConfigError, FileNotFoundError, DictionaryFormatError) as e:
        logger.error(str(e))
        return 1

    # Custom words shadow the main dictionary, as in classify
    dictionaries = [d for d in (classifier.custom, classifier.dictionary) if d is not None]

    for word in _read_words(args.words):
        data = None
        for dictionary in dictionaries:
            try:
                data = dictionary.lookup(word)
            except UnsupportedCharacterError:
                continue
            if data is not None:
                break

        if data is None:
            sys.stdout.write(f"{word}\t-\n")
            continue
        for lemma, desc in zip(data.lemmas, data.descriptor_flags):
            sys.stdout.write(f"{word}\t{lemma}\t{describe_dmask(desc)}\n")

    return 0


def cmd_build(args: argparse.Namespace) -> int:
    if not args.lexicon.exists():
        logger.error(f"Input file not found: {args.lexicon}")
        return 1

    dictionary = build_dictionary(args.lexicon, args.output)
    logger.info(f"Dictionary build complete: {len(dictionary):,} words")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hebword',
        description='Hebrew word recognition against a dictionary and prefix grammar',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build a dictionary once
  hebword build data/he-lexicon.jsonl data/build/he

  # Classify words
  hebword classify --dictionary data/build/he הבית ובספרים hello

  # Lemma readings of a word
  hebword lookup --dictionary data/build/he ספרים

  # Tolerant matching, words from stdin, JSONL out
  cat words.txt | hebword classify --config hebword.yaml --tolerate --jsonl
        """
    )
    parser.add_argument('--version', action='store_true', help='Show version and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command')

    # Dictionary options shared by classify and lookup
    dictionaries = argparse.ArgumentParser(add_help=False)
    dictionaries.add_argument('words', nargs='*', help='Words to process (default: read stdin)')
    dictionaries.add_argument('-c', '--config', type=Path, help='YAML configuration file')
    source = dictionaries.add_mutually_exclusive_group()
    source.add_argument('-d', '--dictionary', type=Path, metavar='STEM',
                        help='Built dictionary stem (STEM.trie + STEM.jsonl)')
    source.add_argument('-l', '--lexicon', type=Path, help='Lexicon JSONL file')
    dictionaries.add_argument('--custom-words', type=Path, help='Custom words file')

    classify = subparsers.add_parser('classify', parents=[dictionaries], help='Classify words')
    classify.add_argument('-t', '--tolerate', action='store_true',
                          help='Try tolerant matching for unknown words')
    classify.add_argument('--allow-he-hasheela', action='store_true',
                          help='Accept interrogative ה as a prefix')
    classify.add_argument('--jsonl', action='store_true', help='Write JSONL instead of TSV')
    classify.set_defaults(func=cmd_classify)

    lookup = subparsers.add_parser('lookup', parents=[dictionaries], help='Show lemma readings of words')
    lookup.set_defaults(func=cmd_lookup)

    build = subparsers.add_parser('build', help='Build a dictionary from a lexicon')
    build.add_argument('lexicon', type=Path, help='Lexicon JSONL file')
    build.add_argument('output', type=Path, help='Output stem (writes OUTPUT.trie and OUTPUT.jsonl)')
    build.set_defaults(func=cmd_build)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"hebword {__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        logging.getLogger('hebword').setLevel(logging.DEBUG)

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
