"""
Epigenetic Variant Module

Marks some words as "methylated" (silenced). Silenced words are emphasized
in the output and raise the mutation pressure on the word that follows.

Methylation state lives only for the duration of one mutate_sentence call.
Emphasis is placed by position: mutated word i is emphasized when original
word i (clamped to the last word) was silenced. After an indel or a silent
swap changed the word layout, this correspondence is approximate.

Public API:
    EpigeneticMutator: epigenetic engine variant
    METHYLATION_PATTERNS: ranked silencing patterns
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Set

from .coherence import CoherenceFilter, split_marker
from .text_mutator import MutationEngine, TextMutator


EMPHASIS_MARKER = '*'
KNOCK_ON_PROBABILITY = 0.6


@dataclass(frozen=True)
class MethylationPattern:
    """A class of words that may be silenced with the given probability."""
    name: str
    pattern: 're.Pattern'
    probability: float

    def matches(self, word: str) -> bool:
        return self.pattern.search(word) is not None


METHYLATION_PATTERNS = (
    MethylationPattern(
        'intensifier',
        re.compile(r'\b(very|really|quite|just|simply|actually|literally)\b', re.IGNORECASE),
        0.7
    ),
    MethylationPattern(
        'adjective',
        re.compile(r'\b([a-z]+)(ful|ous|ive|able|ible)\b', re.IGNORECASE),
        0.4
    ),
    MethylationPattern(
        'function_word',
        re.compile(r'\b(the|a|an|in|on|at|to|for|with|by)\b', re.IGNORECASE),
        0.2
    ),
)


class EpigeneticMutator(MutationEngine):
    """
    Epigenetic engine variant.

    Args:
        base: Base engine to call through to (built when omitted)
        rng: Random source for a newly built base engine
        seed: Seed for a newly built base engine
        patterns: Ranked methylation patterns
        knock_on_probability: Chance an emphasized word forces a
                              high-mutation-zone mutation of its successor
    """

    def __init__(
        self,
        base: Optional[TextMutator] = None,
        rng=None,
        seed: Optional[int] = None,
        patterns: Sequence[MethylationPattern] = METHYLATION_PATTERNS,
        knock_on_probability: float = KNOCK_ON_PROBABILITY
    ):
        self.base = base if base is not None else TextMutator(rng=rng, seed=seed)
        self.rng = self.base.rng
        self.patterns = tuple(patterns)
        self.knock_on_probability = knock_on_probability
        self.coherence = CoherenceFilter(
            threshold=self.base.coherence.threshold,
            emphasis_marker=EMPHASIS_MARKER
        )

    def methylate(self, words: Sequence[str]) -> Set[str]:
        """
        Select the words silenced for this sentence.

        For each word, patterns are tried in rank order; the first that
        matches and wins its draw silences the word.
        """
        methylated = set()
        for word in words:
            for pattern in self.patterns:
                if pattern.matches(word) and self.rng.random() < pattern.probability:
                    methylated.add(word)
                    break
        return methylated

    @staticmethod
    def is_emphasized(word: str) -> bool:
        return bool(split_marker(word, EMPHASIS_MARKER)[0])

    def mutate_word(self, word: str, high_mutation_zone: bool = False) -> str:
        return self.base.mutate_word(word, high_mutation_zone)

    def mutate_sentence(self, sentence: str, mutate_word: Optional[Callable] = None) -> str:
        if mutate_word is None:
            mutate_word = self.mutate_word

        words = sentence.split(' ')
        methylated = self.methylate(words)

        mutated_words = self.base.mutate_sentence(sentence, mutate_word).split(' ')

        marked: List[str] = []
        for i, mutated_word in enumerate(mutated_words):
            original_word = words[min(i, len(words) - 1)]
            if original_word in methylated:
                marked.append(f"{EMPHASIS_MARKER}{mutated_word}{EMPHASIS_MARKER}")
            else:
                marked.append(mutated_word)

        for i in range(len(marked) - 1):
            if self.is_emphasized(marked[i]) and self.rng.random() < self.knock_on_probability:
                marked[i + 1] = mutate_word(marked[i + 1].replace(EMPHASIS_MARKER, ''), True)

        return ' '.join(marked)

    def mutate_text(self, text: str, mutate_sentence: Optional[Callable] = None) -> str:
        return self.base.mutate_text(
            text,
            mutate_sentence or self.mutate_sentence,
            coherence=self.coherence
        )

    @property
    def transition_matrix(self):
        return self.base.transition_matrix

    def visualize_matrix(self) -> str:
        return self.base.visualize_matrix()
