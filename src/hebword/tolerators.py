"""
Lookup tolerators for fuzzy dictionary search.

A tolerator is called at every position of the query while the dictionary
walks its trie. It returns extra steps the walk may take besides consuming
the next query letter verbatim. Each step is a tuple:

    (consumed, emitted, cost)

  consumed: number of query letters the step uses (0 = insertion)
  emitted:  dictionary text the step produces
  cost:     added to the candidate's score

The walk never takes two insertions in a row at the same position.
"""

from typing import Callable, List, Tuple

Step = Tuple[int, str, int]
Tolerator = Callable[[str, int], List[Step]]

# Vowel letters (em kryia) written in full spelling and left out in
# defective spelling
EM_KRYIA = ('ו', 'י')


def tolerate_em_kryia_all(key: str, pos: int) -> List[Step]:
    """
    Tolerate missing or doubled vowel letters.

    - ו or י may be inserted before any letter but the first
      (שלם -> שלום, ספר -> סיפר)
    - a doubled וו or יי in the query may stand for a single letter
      (מוות -> מות)
    """
    if pos == 0 or pos >= len(key):
        return []

    steps = [(0, letter, 1) for letter in EM_KRYIA]

    pair = key[pos:pos + 2]
    if len(pair) == 2 and pair[0] == pair[1] and pair[0] in EM_KRYIA:
        steps.append((2, pair[0], 1))

    return steps
