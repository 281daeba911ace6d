"""
Text Mutator Module

Engine facade: splits text into sentences, runs sentence mutation and the
coherence filter on each, and renders the active transition matrix.

MutationEngine is the capability set every variant implements. Variants
hold a TextMutator and call through to it, passing their own word or
sentence strategy where they specialize behavior.

Public API:
    MutationEngine: abstract capability set
    TextMutator: base engine
    split_sentences(text) -> List[str]
    format_transition_matrix(matrix) -> str
"""

import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np

from .coherence import CoherenceFilter
from .haplotypes import HaplotypeMatcher
from .mutation_types import MutationType
from .nucleotides import NUCLEOTIDE_ORDER, Nucleotide, TransitionModel
from .sentence_mutator import SentenceMutator
from .word_mutator import WordMutator


SENTENCE_BOUNDARY = re.compile(r'(?<=[.!?])\s+')

MATRIX_HEADER = "   |" + "".join(f" {n.value:<4} |" for n in NUCLEOTIDE_ORDER)
MATRIX_SEPARATOR = "---|" + "------|" * len(NUCLEOTIDE_ORDER)


def split_sentences(text: str) -> List[str]:
    """Split on sentence-final punctuation followed by whitespace."""
    return SENTENCE_BOUNDARY.split(text)


def format_transition_matrix(matrix: Dict[Nucleotide, Dict[Nucleotide, float]]) -> str:
    """
    Render a transition matrix as a fixed-width percentage table.

    Example:
           | A    | G    | C    | T    |
        ---|------|------|------|------|
         A | 40%  | 40%  | 10%  | 10%  |
    """
    lines = [MATRIX_HEADER, MATRIX_SEPARATOR]
    for source in NUCLEOTIDE_ORDER:
        cells = "".join(
            f" {f'{matrix[source][target] * 100:.0f}%':<5}|"
            for target in NUCLEOTIDE_ORDER
        )
        lines.append(f" {source.value} |{cells}")
    return "\n".join(lines) + "\n"


class MutationEngine(ABC):
    """Capability set shared by the base engine and its variants."""

    @property
    @abstractmethod
    def transition_matrix(self) -> Dict[Nucleotide, Dict[Nucleotide, float]]:
        ...

    @abstractmethod
    def mutate_word(self, word: str, high_mutation_zone: bool = False) -> str:
        ...

    @abstractmethod
    def mutate_sentence(self, sentence: str, mutate_word: Optional[Callable] = None) -> str:
        ...

    @abstractmethod
    def mutate_text(self, text: str, mutate_sentence: Optional[Callable] = None) -> str:
        ...

    @abstractmethod
    def visualize_matrix(self) -> str:
        ...


class TextMutator(MutationEngine):
    """
    Base nucleotide-transition engine.

    Args:
        rng: Random source (numpy Generator or compatible); built from
             ``seed`` when omitted
        seed: Seed for the default generator
        transition_matrix: Initial matrix (default: DEFAULT_TRANSITION_MATRIX)
        nucleotide_map: Letter groups per nucleotide
        haplotypes: Linked phrases (default: DEFAULT_HAPLOTYPES)
        haplotype_hook: Callback receiving every mutated haplotype

    Example:
        >>> engine = TextMutator(seed=42)
        >>> engine.mutate_text("Once upon a time there was a cat.")
    """

    def __init__(
        self,
        rng=None,
        seed: Optional[int] = None,
        transition_matrix: Optional[Dict[Nucleotide, Dict[Nucleotide, float]]] = None,
        nucleotide_map: Optional[Dict[Nucleotide, Tuple[str, ...]]] = None,
        haplotypes: Optional[Iterable[str]] = None,
        haplotype_hook: Optional[Callable[[str], None]] = None
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.model = TransitionModel(self.rng, transition_matrix, nucleotide_map)
        self.word_mutator = WordMutator(self.model)
        self.matcher = HaplotypeMatcher(haplotypes)
        self.sentence_mutator = SentenceMutator(
            self.word_mutator, self.matcher, self.rng,
            haplotype_hook=haplotype_hook
        )
        self.coherence = CoherenceFilter()

    @property
    def transition_matrix(self) -> Dict[Nucleotide, Dict[Nucleotide, float]]:
        return self.model.matrix

    def set_transition_matrix(self, matrix: Dict[Nucleotide, Dict[Nucleotide, float]]) -> None:
        self.model.set_matrix(matrix)

    def mutate_word(self, word: str, high_mutation_zone: bool = False) -> str:
        return self.word_mutator.mutate_word(word, high_mutation_zone)

    def apply_indel(self, word: str, position: int, kind: MutationType) -> str:
        return self.word_mutator.apply_indel(word, position, kind)

    def mutate_sentence(self, sentence: str, mutate_word: Optional[Callable] = None) -> str:
        return self.sentence_mutator.mutate_sentence(sentence, mutate_word)

    def make_coherent(self, mutated: str, original: str) -> str:
        return self.coherence.make_coherent(mutated, original)

    def mutate_text(
        self,
        text: str,
        mutate_sentence: Optional[Callable[[str], str]] = None,
        coherence: Optional[CoherenceFilter] = None
    ) -> str:
        """
        Mutate every sentence independently and rejoin with single spaces.

        Args:
            text: Input text
            mutate_sentence: Sentence strategy (default: this engine's)
            coherence: Coherence filter (default: this engine's)

        Returns:
            Mutated text. Original inter-sentence whitespace is not kept.
        """
        if mutate_sentence is None:
            mutate_sentence = self.mutate_sentence
        if coherence is None:
            coherence = self.coherence

        mutated_sentences = []
        for sentence in split_sentences(text):
            mutated = mutate_sentence(sentence)
            mutated_sentences.append(coherence.make_coherent(mutated, sentence))

        return ' '.join(mutated_sentences)

    def visualize_matrix(self) -> str:
        return format_transition_matrix(self.model.matrix)
