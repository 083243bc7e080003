"""Tests for the prefix grammar and descriptor projection."""

import logging

import pytest

from hebword.lingo import (
    D_ADJ,
    D_FEMININE,
    D_FUTURE,
    D_IMPERATIVE,
    D_INFINITIVE,
    D_MASCULINE,
    D_NOUN,
    D_OSHIFT,
    D_OSMICHUT,
    D_OTHER,
    D_PAST,
    D_PLURAL,
    D_PRESENT,
    D_SINGULAR,
    D_SPECNOUN,
    D_VERB,
    PS_ALL,
    PS_DEF,
    PS_IMPER,
    PS_MISC,
    PS_NONDEF,
    PS_PREP,
    PS_VERB,
    PrefixMaskTable,
    build_prefix_table,
    describe_dmask,
    dmask_to_prefix_mask,
)


class TestDescriptorProjection:

    @pytest.mark.parametrize('dmask, expected', [
        (D_NOUN | D_MASCULINE | D_SINGULAR, PS_ALL),
        (D_NOUN | D_OSMICHUT, PS_NONDEF),
        (D_NOUN | D_SPECNOUN, PS_NONDEF),
        (D_NOUN | (1 << D_OSHIFT), PS_NONDEF),
        (D_ADJ | D_FEMININE | D_PLURAL, PS_ALL),
        (D_ADJ | D_OSMICHUT, PS_NONDEF),
        (D_VERB | D_PAST, PS_VERB),
        (D_VERB | D_FUTURE, PS_VERB),
        (D_VERB | D_INFINITIVE, PS_VERB),
        (D_VERB | D_IMPERATIVE, PS_IMPER),
        (D_VERB | D_PRESENT, PS_ALL),
        (D_VERB | D_PRESENT | D_OSMICHUT, PS_NONDEF),
        (D_OTHER, PS_ALL),
        (0, PS_ALL),
    ])
    def test_projection(self, dmask, expected):
        assert dmask_to_prefix_mask(dmask) == expected

    def test_describe(self):
        assert describe_dmask(D_NOUN | D_MASCULINE | D_SINGULAR) == 'noun,m,sg'
        assert describe_dmask(D_VERB | D_PAST | D_FEMININE | D_PLURAL) == 'verb,f,pl,past'
        assert describe_dmask(D_NOUN | D_OSMICHUT | (2 << D_OSHIFT)) == 'noun,construct,poss2'


class TestPrefixTable:

    @pytest.fixture
    def table(self):
        return build_prefix_table()

    @pytest.mark.parametrize('prefix, mask', [
        ('ו', PS_ALL),
        ('ה', PS_DEF),
        ('ב', PS_PREP | PS_NONDEF),
        ('מה', PS_DEF),
        ('ש', PS_VERB | PS_NONDEF | PS_MISC),
        ('וכש', PS_VERB | PS_NONDEF | PS_MISC),
        ('וכשה', PS_DEF),
        ('ושב', PS_PREP | PS_NONDEF),
    ])
    def test_masks(self, table, prefix, mask):
        assert table.lookup_prefix(prefix) == mask

    @pytest.mark.parametrize('prefix', ['בה', 'כה', 'לה', 'הו', 'בב', 'א', 'וו', ''])
    def test_not_prefixes(self, table, prefix):
        assert table.lookup_prefix(prefix) is None
        assert prefix not in table

    def test_every_mask_nonzero(self, table):
        assert all(mask for _, mask in table.items())

    def test_monotonic(self, table):
        """Every leading part of a registered prefix is registered too."""
        assert list(table.non_monotonic()) == []
        for prefix in table:
            for n in range(1, len(prefix)):
                assert prefix[:n] in table

    def test_only_conjunction_allows_imperative(self, table):
        allowed = {prefix for prefix, mask in table.items() if mask & PS_IMPER}
        assert allowed == {'ו'}

    def test_he_hasheela(self, table):
        assert not table.lookup_prefix('ה') & PS_VERB
        questioning = build_prefix_table(allow_he_hasheela=True)
        assert questioning.lookup_prefix('ה') & PS_VERB
        assert questioning.lookup_prefix('וה') & PS_VERB
        assert not questioning.lookup_prefix('שה') & PS_VERB
        assert len(questioning) == len(table)

    def test_non_monotonic_reported(self):
        table = PrefixMaskTable({'ו': PS_ALL, 'וכש': PS_VERB})
        assert list(table.non_monotonic()) == [('וכש', 'וכ')]

    def test_build_logs_nothing_for_valid_grammar(self, caplog):
        with caplog.at_level(logging.WARNING, logger='hebword.lingo'):
            build_prefix_table()
        assert caplog.records == []
