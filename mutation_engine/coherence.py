"""
Coherence Filter Module

Caps per-word divergence between a mutated sentence and its original so
that mutated text keeps a partial anchor of recognizability.

Words are aligned by position only. When indels or a silent swap changed
the word order or count, alignment after that point is approximate.

Public API:
    calculate_difference(word1, word2) -> float
    split_marker(word, marker) -> (prefix, core, suffix)
    CoherenceFilter.make_coherent(mutated, original) -> str
"""

from typing import Tuple


# Words differing by more than this ratio get their first letter restored
COHERENCE_THRESHOLD = 0.5


def calculate_difference(word1: str, word2: str) -> float:
    """
    Fraction of positions that differ between two words.

    Positions beyond the shorter word count as differences. Two empty
    words are identical.
    """
    length = max(len(word1), len(word2))
    if length == 0:
        return 0.0

    diff_count = sum(
        1 for i in range(length)
        if i >= len(word1) or i >= len(word2) or word1[i] != word2[i]
    )
    return diff_count / length


def split_marker(word: str, marker: str) -> Tuple[str, str, str]:
    """Split a marker-wrapped word into (marker, core, marker); unwrapped words give ('', word, '')."""
    if (marker and len(word) >= 2 * len(marker)
            and word.startswith(marker) and word.endswith(marker)):
        return marker, word[len(marker):len(word) - len(marker)], marker
    return '', word, ''


class CoherenceFilter:
    """
    Restores the first letter of over-mutated words.

    Attributes:
        threshold: Difference ratio above which a word is repaired
        emphasis_marker: Optional marker wrapped around mutated words
                         (e.g. '*'); stripped for comparison and restored
    """

    def __init__(self, threshold: float = COHERENCE_THRESHOLD, emphasis_marker: str = ''):
        self.threshold = threshold
        self.emphasis_marker = emphasis_marker

    def make_coherent(self, mutated: str, original: str) -> str:
        mutated_words = mutated.split(' ')
        original_words = original.split(' ')

        for i in range(min(len(mutated_words), len(original_words))):
            orig_word = original_words[i]
            if not orig_word:
                continue

            prefix, core, suffix = self._unwrap(mutated_words[i])
            if calculate_difference(core, orig_word) > self.threshold:
                mutated_words[i] = prefix + orig_word[0] + core[1:] + suffix

        return ' '.join(mutated_words)

    def _unwrap(self, word: str) -> Tuple[str, str, str]:
        return split_marker(word, self.emphasis_marker)
