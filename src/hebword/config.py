"""
Configuration for hebword.

A YAML file describing where the dictionaries come from:

  dictionary: data/build/he          # stem of a built dictionary (.trie + .jsonl)
  lexicon: data/he-lexicon.jsonl     # used when 'dictionary' is not given
  custom_words: custom-words.txt     # optional
  allow_he_hasheela: false           # interrogative ה as a prefix
  tolerate: false                    # default for classify --tolerate
  max_tolerant_length: 20

Relative paths are resolved against the directory holding the file.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hebword.classifier import MAX_TOLERANT_LENGTH, WordClassifier
from hebword.dictionary import HEBREW_ALPHABET, ExactDictionary
from hebword.lingo import build_prefix_table
from hebword.loader import load_custom_words, load_lexicon


logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration file is unreadable or has a bad value."""


# key -> expected type
CONFIG_SCHEMA = {
    'dictionary': str,
    'lexicon': str,
    'custom_words': str,
    'allow_he_hasheela': bool,
    'tolerate': bool,
    'max_tolerant_length': int,
}


@dataclass
class Config:
    dictionary: Optional[Path] = None
    lexicon: Optional[Path] = None
    custom_words: Optional[Path] = None
    allow_he_hasheela: bool = False
    tolerate: bool = False
    max_tolerant_length: int = MAX_TOLERANT_LENGTH

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> 'Config':
        """Validate a parsed config mapping."""
        config = cls()
        for key, value in data.items():
            if key not in CONFIG_SCHEMA:
                logger.warning(f"Unknown config key '{key}' ignored")
                continue
            if value is None:
                continue

            expected = CONFIG_SCHEMA[key]
            # bool is an int subclass; don't let true pass as a length
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ConfigError(f"'{key}' must be {expected.__name__}, got {type(value).__name__}")

            if expected is str:
                path = Path(value)
                if base_dir is not None and not path.is_absolute():
                    path = base_dir / path
                value = path
            setattr(config, key, value)

        if config.max_tolerant_length < 1:
            raise ConfigError("'max_tolerant_length' must be positive")
        return config


def load_config(config_path: Path) -> Config:
    """Read and validate a YAML config file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    return Config.from_dict(data, base_dir=config_path.parent)


def load_classifier(config: Config) -> WordClassifier:
    """
    Load every dictionary named in config and build a classifier.

    Raises ConfigError if no main dictionary is configured; loader errors
    (FileNotFoundError, DictionaryFormatError) propagate.
    """
    if config.dictionary is not None:
        dictionary = ExactDictionary.load(config.dictionary, HEBREW_ALPHABET)
    elif config.lexicon is not None:
        dictionary = load_lexicon(config.lexicon)
    else:
        raise ConfigError("Either 'dictionary' or 'lexicon' must be configured")

    custom = None
    if config.custom_words is not None:
        custom = load_custom_words(config.custom_words, dictionary)

    return WordClassifier(
        dictionary=dictionary,
        prefixes=build_prefix_table(config.allow_he_hasheela),
        custom=custom,
        max_tolerant_length=config.max_tolerant_length,
    )
