"""
lingo.py — Hebrew prefix grammar and descriptor flags.

Defines:
  - Prefix categories (PS_*): bits describing which kind of word a
    prefix letter sequence may precede.
  - Descriptor flags (D_*): per-lemma morphological description
    (part of speech, gender, number, tense, construct state, possessive).
  - dmask_to_prefix_mask(): the fixed projection from a lemma's descriptor
    flags to the prefix categories that lemma reading accepts.
  - build_prefix_table(): every legal prefix combination with its mask.

PREFIX GRAMMAR:
  Hebrew prefixes are single letters that combine in a fixed order:

    [ו] [ש | כש | מש] [ב | כ | ל | מ] [ה]
     |        |              |          |
     |        |              |          +-- definite article
     |        |              +------------- preposition
     |        +---------------------------- subordinator
     +------------------------------------- conjunction

  The article is absorbed (not written) after ב, כ and ל, so ה never
  follows them directly. It is written after מ (מהבית).

  A word is compatible with a prefix when
      prefix_mask & dmask_to_prefix_mask(desc) != 0
"""

import logging
from typing import Dict, Iterator, Optional, Tuple


logger = logging.getLogger(__name__)


# =============================================================================
# Prefix categories
# =============================================================================

PS_PREP = 1      # ends with a preposition (ב כ ל מ)
PS_DEF = 2       # ends with the definite article
PS_VERB = 4      # may precede a finite verb
PS_NONDEF = 8    # may precede a word that cannot take the article
PS_IMPER = 16    # may precede an imperative
PS_MISC = 32
PS_ALL = 63


# =============================================================================
# Descriptor flags
# =============================================================================
# Layout (low bit first):
#   bits 0-2   part of speech
#   bits 3-4   gender
#   bits 5-6   number
#   bits 7-9   tense / verb form
#   bit  10    construct state (smichut)
#   bit  11    proper noun
#   bits 12-15 possessive suffix person/number

D_TYPEMASK = 0x7
D_NOUN = 0x1
D_VERB = 0x2
D_ADJ = 0x3
D_OTHER = 0x4

D_GENDERMASK = 0x18
D_MASCULINE = 0x08
D_FEMININE = 0x10

D_NUMMASK = 0x60
D_SINGULAR = 0x20
D_PLURAL = 0x40

D_TENSEMASK = 0x380
D_INFINITIVE = 0x080
D_PAST = 0x100
D_PRESENT = 0x180
D_FUTURE = 0x200
D_IMPERATIVE = 0x280
D_BINFINITIVE = 0x300

D_OSMICHUT = 0x400
D_SPECNOUN = 0x800

D_OMASK = 0xF000
D_OSHIFT = 12


def dmask_to_prefix_mask(dmask: int) -> int:
    """Project a lemma's descriptor flags onto the prefixes it accepts."""
    word_type = dmask & D_TYPEMASK

    if word_type == D_VERB:
        tense = dmask & D_TENSEMASK
        if tense == D_IMPERATIVE:
            return PS_IMPER
        if tense != D_PRESENT:
            return PS_VERB
        # Present participles behave like adjectives
        if dmask & (D_OSMICHUT | D_OMASK):
            return PS_NONDEF
        return PS_ALL

    if word_type in (D_NOUN, D_ADJ):
        if dmask & (D_OSMICHUT | D_OMASK | D_SPECNOUN):
            return PS_NONDEF
        return PS_ALL

    return PS_ALL


def describe_dmask(dmask: int) -> str:
    """Short human-readable rendering of descriptor flags, for CLI output."""
    parts = []
    word_type = dmask & D_TYPEMASK
    parts.append({D_NOUN: 'noun', D_VERB: 'verb', D_ADJ: 'adj', D_OTHER: 'other'}.get(word_type, '-'))

    gender = dmask & D_GENDERMASK
    if gender == D_MASCULINE:
        parts.append('m')
    elif gender == D_FEMININE:
        parts.append('f')
    elif gender == D_GENDERMASK:
        parts.append('mf')

    number = dmask & D_NUMMASK
    if number == D_SINGULAR:
        parts.append('sg')
    elif number == D_PLURAL:
        parts.append('pl')

    tense = dmask & D_TENSEMASK
    if tense:
        parts.append({
            D_INFINITIVE: 'inf', D_PAST: 'past', D_PRESENT: 'pres',
            D_FUTURE: 'fut', D_IMPERATIVE: 'imp', D_BINFINITIVE: 'binf',
        }.get(tense, '?'))

    if dmask & D_OSMICHUT:
        parts.append('construct')
    if dmask & D_SPECNOUN:
        parts.append('proper')
    if dmask & D_OMASK:
        parts.append(f'poss{(dmask & D_OMASK) >> D_OSHIFT}')

    return ','.join(parts)


# =============================================================================
# Prefix table
# =============================================================================

CONJUNCTIONS = ('', 'ו')
SUBORDINATORS = ('', 'ש', 'כש', 'מש')
PREPOSITIONS = ('', 'ב', 'כ', 'ל', 'מ')
ARTICLES = ('', 'ה')

# Prepositions that swallow a following article
ABSORBING_PREPOSITIONS = {'ב', 'כ', 'ל'}


class PrefixMaskTable:
    """
    Read-only mapping from a prefix letter sequence to its category mask.

    A missing entry means the sequence is not a valid prefix start.
    Callers scan by strictly increasing length and stop at the first miss.
    """

    def __init__(self, masks: Dict[str, int]):
        self._masks = dict(masks)

    def lookup_prefix(self, prefix: str) -> Optional[int]:
        return self._masks.get(prefix)

    def __contains__(self, prefix: str) -> bool:
        return prefix in self._masks

    def __len__(self) -> int:
        return len(self._masks)

    def __iter__(self) -> Iterator[str]:
        return iter(self._masks)

    def items(self):
        return self._masks.items()

    def non_monotonic(self) -> Iterator[Tuple[str, str]]:
        """
        Yield (prefix, missing) pairs where a shorter leading part is absent.

        The prefix scan stops at the first unregistered length, so such
        prefixes can never be reached.
        """
        for prefix in sorted(self._masks, key=len):
            for n in range(1, len(prefix)):
                if prefix[:n] not in self._masks:
                    yield prefix, prefix[:n]
                    break


def _prefix_mask(subordinator: str, preposition: str, article: str) -> int:
    """Mask for a prefix, decided by its last component."""
    if article:
        return PS_DEF
    if preposition:
        return PS_PREP | PS_NONDEF
    if subordinator:
        return PS_VERB | PS_NONDEF | PS_MISC
    # Bare conjunction goes with anything, imperatives included
    return PS_ALL


def iter_prefixes() -> Iterator[Tuple[str, int]]:
    """Generate (prefix, mask) for every combination the grammar allows."""
    for conj in CONJUNCTIONS:
        for sub in SUBORDINATORS:
            for prep in PREPOSITIONS:
                for art in ARTICLES:
                    if art and prep in ABSORBING_PREPOSITIONS:
                        continue
                    prefix = conj + sub + prep + art
                    if not prefix:
                        continue
                    yield prefix, _prefix_mask(sub, prep, art)


def build_prefix_table(allow_he_hasheela: bool = False) -> PrefixMaskTable:
    """
    Build the prefix mask table.

    Args:
        allow_he_hasheela: Also accept the interrogative ה before verbs
            (ה and וה gain PS_VERB). Off by default, since it makes almost
            every verb starting with ה ambiguous.
    """
    masks: Dict[str, int] = {}
    for prefix, mask in iter_prefixes():
        # The same letters can come from more than one derivation
        masks[prefix] = masks.get(prefix, 0) | mask

    if allow_he_hasheela:
        for prefix in ('ה', 'וה'):
            masks[prefix] |= PS_VERB

    table = PrefixMaskTable(masks)

    for prefix, missing in table.non_monotonic():
        logger.warning(f"Prefix '{prefix}' unreachable: '{missing}' is not registered")

    logger.debug(f"Built prefix table with {len(table)} prefixes")
    return table
