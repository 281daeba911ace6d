"""
Mutation Engine Tests

Unit tests for the nucleotide model, word/sentence mutation, haplotype
linkage, the coherence filter and the text facade.

Forced branches use FixedDraws, a stand-in generator that returns the
same draw every time.
"""

import sys
import unittest
from pathlib import Path
from unittest import mock

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from mutation_engine import MutationType, Nucleotide, TextMutator, TransitionModel
from mutation_engine.coherence import CoherenceFilter, calculate_difference, split_marker
from mutation_engine.haplotypes import HaplotypeMatcher
from mutation_engine.nucleotides import (
    DEFAULT_NUCLEOTIDE_MAP,
    DEFAULT_TRANSITION_MATRIX,
    NUCLEOTIDE_ORDER,
    build_letter_index,
    matrix_to_array,
    validate_transition_matrix,
)
from mutation_engine.populations import POPULATION_PROFILES
from mutation_engine.word_mutator import WordMutator

from _draws import FixedDraws


def identity_word(word, high_mutation_zone=False):
    return word


class TestTransitionModel(unittest.TestCase):
    """Nucleotide mapping and transition sampling."""

    def test_rows_sum_to_one(self):
        """Every shipped matrix is row-stochastic."""
        matrices = [DEFAULT_TRANSITION_MATRIX] + [
            p.transition_matrix for p in POPULATION_PROFILES.values()
        ]
        for matrix in matrices:
            sums = matrix_to_array(matrix).sum(axis=1)
            np.testing.assert_allclose(sums, np.ones(4), atol=1e-6)

    def test_invalid_matrix_rejected(self):
        bad = {n: dict(row) for n, row in DEFAULT_TRANSITION_MATRIX.items()}
        bad[Nucleotide.C][Nucleotide.C] = 0.9
        with self.assertRaises(ValueError):
            validate_transition_matrix(bad)

        missing = {n: row for n, row in DEFAULT_TRANSITION_MATRIX.items() if n != Nucleotide.T}
        with self.assertRaises(ValueError):
            TransitionModel(np.random.default_rng(0), matrix=missing)

    def test_duplicate_letter_rejected(self):
        nucleotide_map = dict(DEFAULT_NUCLEOTIDE_MAP)
        nucleotide_map[Nucleotide.T] = ('o', 'e')
        with self.assertRaises(ValueError):
            build_letter_index(nucleotide_map)

    def test_reverse_lookup(self):
        model = TransitionModel(np.random.default_rng(0))
        self.assertEqual(model.nucleotide_for('E'), Nucleotide.A)
        self.assertEqual(model.nucleotide_for('s'), Nucleotide.G)
        self.assertEqual(model.nucleotide_for('t'), Nucleotide.C)
        self.assertEqual(model.nucleotide_for('i'), Nucleotide.T)
        self.assertIsNone(model.nucleotide_for('x'))
        self.assertIsNone(model.nucleotide_for('!'))

    def test_samples_stay_in_alphabet(self):
        model = TransitionModel(np.random.default_rng(7))
        for _ in range(200):
            for nucleotide in NUCLEOTIDE_ORDER:
                self.assertIn(model.transition_target(nucleotide), NUCLEOTIDE_ORDER)
                self.assertIn(model.letter_for(nucleotide), DEFAULT_NUCLEOTIDE_MAP[nucleotide])

    def test_cumulative_selection_order(self):
        """Buckets are laid out in A, G, C, T order."""
        self.assertEqual(TransitionModel(FixedDraws(0.0)).transition_target(Nucleotide.A), Nucleotide.A)
        self.assertEqual(TransitionModel(FixedDraws(0.0)).transition_target(Nucleotide.G), Nucleotide.A)
        self.assertEqual(TransitionModel(FixedDraws(0.45)).transition_target(Nucleotide.G), Nucleotide.G)
        self.assertEqual(TransitionModel(FixedDraws(0.85)).transition_target(Nucleotide.A), Nucleotide.C)
        self.assertEqual(TransitionModel(FixedDraws(0.15)).transition_target(Nucleotide.C), Nucleotide.G)

    def test_fallback_returns_source(self):
        model = TransitionModel(FixedDraws(1.5))
        for nucleotide in NUCLEOTIDE_ORDER:
            self.assertEqual(model.transition_target(nucleotide), nucleotide)

    def test_transition_frequencies(self):
        """Sampled A->G rate approaches the matrix value."""
        model = TransitionModel(np.random.default_rng(42))
        targets = [model.transition_target(Nucleotide.A) for _ in range(5000)]
        rate = targets.count(Nucleotide.G) / len(targets)
        self.assertAlmostEqual(rate, 0.4, delta=0.03)

    def test_set_matrix_keeps_identity(self):
        model = TransitionModel(np.random.default_rng(0))
        matrix = POPULATION_PROFILES['han'].transition_matrix
        model.set_matrix(matrix)
        self.assertIs(model.matrix, matrix)


class TestWordMutator(unittest.TestCase):
    """Bounded substitutions and indels."""

    def test_unmapped_word_unchanged(self):
        mutator = WordMutator(TransitionModel(np.random.default_rng(3)))
        for word in ['xyz', 'lump', '123!', '', 'QWY']:
            self.assertEqual(mutator.mutate_word(word), word)
            self.assertEqual(mutator.mutate_word(word, True), word)

    def test_mutation_budget(self):
        """'eat' changes at most one position normally, two in a high zone."""
        for seed in range(200):
            mutator = WordMutator(TransitionModel(np.random.default_rng(seed)))
            normal = mutator.mutate_word('eat')
            high = mutator.mutate_word('eat', high_mutation_zone=True)
            self.assertEqual(len(normal), 3)
            self.assertLessEqual(sum(a != b for a, b in zip(normal, 'eat')), 1)
            self.assertLessEqual(sum(a != b for a, b in zip(high, 'eat')), 2)

    def test_single_left_to_right_pass(self):
        mutator = WordMutator(TransitionModel(FixedDraws(0.0)))
        # e and a draw A (no change); t draws A and becomes 'e'
        self.assertEqual(mutator.mutate_word('eat'), 'eae')
        self.assertEqual(mutator.mutate_word('tttt'), 'ettt')
        self.assertEqual(mutator.mutate_word('tttt', True), 'eett')

    def test_deletion(self):
        mutator = WordMutator(TransitionModel(FixedDraws(0.0, index=0)))
        self.assertEqual(mutator.apply_indel('ab', 0, MutationType.DELETION), 'ab')
        self.assertEqual(mutator.apply_indel('word', 0, MutationType.DELETION), 'ord')

    def test_deletion_ignores_position(self):
        mutator = WordMutator(TransitionModel(FixedDraws(0.0, index=0)))
        self.assertEqual(mutator.apply_indel('word', 3, 'deletion'), 'ord')

    def test_insertion(self):
        mutator = WordMutator(TransitionModel(FixedDraws(0.0, index=0)))
        self.assertEqual(mutator.apply_indel('word', 0, MutationType.INSERTION), 'eword')
        self.assertEqual(mutator.apply_indel('', 0, 'insertion'), 'e')

        seeded = WordMutator(TransitionModel(np.random.default_rng(5)))
        for _ in range(50):
            self.assertEqual(len(seeded.apply_indel('cat', 1, MutationType.INSERTION)), 4)

    def test_substitution_kind_is_noop(self):
        mutator = WordMutator(TransitionModel(FixedDraws(0.0)))
        self.assertEqual(mutator.apply_indel('word', 0, MutationType.SUBSTITUTION), 'word')


class TestHaplotypeMatcher(unittest.TestCase):

    def setUp(self):
        self.matcher = HaplotypeMatcher()

    def test_prefix_detection(self):
        self.assertTrue(self.matcher.is_prefix(['Once']))
        self.assertTrue(self.matcher.is_prefix(['once', 'UPON']))
        self.assertTrue(self.matcher.is_prefix(['the']))
        self.assertFalse(self.matcher.is_prefix(['upon']))
        self.assertFalse(self.matcher.is_prefix(['the', 'cat']))
        self.assertFalse(self.matcher.is_prefix([]))

    def test_complete_phrase(self):
        self.assertTrue(self.matcher.is_haplotype(['Once', 'Upon', 'A', 'Time']))
        self.assertTrue(self.matcher.is_haplotype(['by', 'the', 'shore']))
        self.assertFalse(self.matcher.is_haplotype(['once', 'upon', 'a']))

    def test_unit_mutation(self):
        calls = []

        def record(word, high):
            calls.append(high)
            return word.upper()

        self.assertEqual(self.matcher.mutate_haplotype(['by', 'the', 'shore'], record), 'BY THE SHORE')
        self.assertEqual(calls, [True, True, True])


class TestSentenceMutator(unittest.TestCase):
    """Haplotype state machine, indel schedule and silent swaps."""

    def test_haplotype_routed_as_unit(self):
        hits = []
        engine = TextMutator(seed=11, haplotype_hook=hits.append)
        result = engine.mutate_sentence('once upon a time')
        self.assertEqual(len(hits), 1)
        self.assertEqual(result, hits[0])
        self.assertEqual(len(result.split(' ')), 4)

    def test_haplotype_skips_indels(self):
        """The fourth word of a haplotype gets no scheduled insertion."""
        engine = TextMutator(rng=FixedDraws(0.5))
        high_flags = []

        def record(word, high=False):
            high_flags.append(high)
            return word

        self.assertEqual(engine.mutate_sentence('once upon a time', record), 'once upon a time')
        self.assertEqual(high_flags, [True, True, True, True])

    def test_haplotype_path_via_mock(self):
        engine = TextMutator(seed=2)
        with mock.patch.object(engine.matcher, 'mutate_haplotype',
                               return_value='HAPLOTYPE') as patched:
            result = engine.mutate_sentence('Once upon a time')
        patched.assert_called_once()
        self.assertEqual(result, 'HAPLOTYPE')

    def test_regular_words_follow_schedule(self):
        engine = TextMutator(rng=FixedDraws(0.5, index=0))
        result = engine.mutate_sentence('alpha beta gamma delta', identity_word)
        self.assertEqual(result, 'alpha beta gamma edelta')

    def test_high_zone_every_third_word(self):
        """Every third word, counted from 1, is mutated in the high zone."""
        engine = TextMutator(rng=FixedDraws(0.5))

        def flags_for(sentence):
            high_flags = []

            def record(word, high=False):
                high_flags.append(high)
                return word

            engine.mutate_sentence(sentence, record)
            return high_flags

        self.assertEqual(flags_for('xa xb xc xd xe xf'), [False, False, True, False, False, True])
        # 'in the' is buffered then released; 'in' is still word 3
        self.assertEqual(flags_for('x y in the end'), [False, False, True, False, False])
        # a completed haplotype occupies words 1-4
        self.assertEqual(
            flags_for('once upon a time x y'),
            [True, True, True, True, False, True]
        )

    def test_broken_prefix_released(self):
        hits = []
        engine = TextMutator(rng=FixedDraws(0.5), haplotype_hook=hits.append)
        self.assertEqual(engine.mutate_sentence('the cat sat', identity_word), 'the cat sat')
        self.assertEqual(engine.mutate_sentence('once upon', identity_word), 'once upon')
        self.assertEqual(hits, [])

    def test_released_buffer_keeps_positions(self):
        """Released words are mutated at their own positions in the sentence."""
        engine = TextMutator(rng=FixedDraws(0.5, index=0))
        result = engine.mutate_sentence('x y in the end', identity_word)
        # 'in the' is released; 'end' is word 5 (deletion) and 'the' is word 4 (insertion)
        self.assertEqual(result, 'x y in ethe nd')

    def test_silent_swap_moves_haplotype_token(self):
        engine = TextMutator(rng=FixedDraws(0.0, index=0))
        result = engine.mutate_sentence('once upon a time we ran', identity_word)
        self.assertEqual(result, 'we once upon a time ran')

    def test_no_swap_for_short_sentences(self):
        engine = TextMutator(rng=FixedDraws(0.0, index=0))
        self.assertEqual(engine.mutate_sentence('xy zz', identity_word), 'xy zz')

    def test_empty_sentence(self):
        engine = TextMutator(seed=0)
        self.assertEqual(engine.mutate_sentence(''), '')


class TestCoherenceFilter(unittest.TestCase):

    def test_difference_ratio(self):
        self.assertEqual(calculate_difference('abc', 'abc'), 0.0)
        self.assertAlmostEqual(calculate_difference('abc', 'abd'), 1 / 3)
        self.assertEqual(calculate_difference('ab', 'abcd'), 0.5)
        self.assertEqual(calculate_difference('', ''), 0.0)
        self.assertEqual(calculate_difference('', 'abc'), 1.0)

    def test_restores_first_letter(self):
        coherence = CoherenceFilter()
        self.assertEqual(coherence.make_coherent('xyz cat', 'dog cat'), 'dyz cat')
        self.assertEqual(coherence.make_coherent('dag', 'dog'), 'dag')
        self.assertEqual(coherence.make_coherent('ab', 'abcd'), 'ab')

    def test_extra_words_left_alone(self):
        coherence = CoherenceFilter()
        self.assertEqual(coherence.make_coherent('xyz qqq extra', 'dog'), 'dyz qqq extra')
        self.assertEqual(coherence.make_coherent('xyz', 'dog cat bird'), 'dyz')

    def test_emphasis_marker_preserved(self):
        coherence = CoherenceFilter(emphasis_marker='*')
        self.assertEqual(coherence.make_coherent('*xyz* cat', 'dog cat'), '*dyz* cat')
        self.assertEqual(coherence.make_coherent('*dog*', 'dog'), '*dog*')

    def test_split_marker(self):
        self.assertEqual(split_marker('*big*', '*'), ('*', 'big', '*'))
        self.assertEqual(split_marker('**', '*'), ('*', '', '*'))
        self.assertEqual(split_marker('*big', '*'), ('', '*big', ''))
        self.assertEqual(split_marker('*', '*'), ('', '*', ''))
        self.assertEqual(split_marker('*big*', ''), ('', '*big*', ''))

    def test_first_letter_changes_only_when_divergent(self):
        rng = np.random.default_rng(9)
        mutator = WordMutator(TransitionModel(rng))
        coherence = CoherenceFilter()
        words = ['tree', 'stone', 'river', 'it', 'eat', 'nest', 'toast']
        for _ in range(100):
            mutated = [mutator.mutate_word(mutator.mutate_word(w, True), True) for w in words]
            repaired = coherence.make_coherent(' '.join(mutated), ' '.join(words)).split(' ')
            for before, after, orig in zip(mutated, repaired, words):
                if after[:1] != before[:1]:
                    self.assertGreater(calculate_difference(before, orig), 0.5)
                    self.assertEqual(after[0], orig[0])


class TestTextMutator(unittest.TestCase):

    def test_identity_transitions_leave_text_unchanged(self):
        engine = TextMutator(rng=FixedDraws(0.5))
        with mock.patch.object(engine.model, 'transition_target', side_effect=lambda n: n):
            self.assertEqual(engine.mutate_text('The cat sat.'), 'The cat sat.')
            self.assertEqual(
                engine.mutate_text('Hi there.   How are you?'),
                'Hi there. How are you?'
            )

    def test_total_over_inputs(self):
        engine = TextMutator(seed=4)
        self.assertEqual(engine.mutate_text(''), '')
        self.assertEqual(engine.mutate_text('?!...'), '?!...')
        self.assertIsInstance(engine.mutate_text('e'), str)
        self.assertIsInstance(engine.mutate_text('Once upon a time. The end! Really?'), str)

    def test_seeded_runs_reproducible(self):
        text = 'In the beginning the river ran past the stone tower. It was late.'
        self.assertEqual(TextMutator(seed=21).mutate_text(text), TextMutator(seed=21).mutate_text(text))

    def test_visualize_matrix(self):
        lines = TextMutator(seed=0).visualize_matrix().splitlines()
        self.assertEqual(len(lines), 6)
        self.assertEqual(lines[0], '   | A    | G    | C    | T    |')
        self.assertEqual(lines[1], '---|------|------|------|------|')
        for line, label in zip(lines[2:], ['A', 'G', 'C', 'T']):
            self.assertTrue(line.startswith(f' {label} |'))
        self.assertEqual(lines[2], ' A | 40%  | 40%  | 10%  | 10%  |')
        self.assertEqual(lines[4], ' C | 10%  | 10%  | 40%  | 40%  |')


if __name__ == '__main__':
    unittest.main(verbosity=2)
