"""
Sentence Mutator Module

Drives word-level mutation across a sentence: haplotype grouping, the
indel schedule, and the occasional silent (word-order) mutation.

Random draws are consumed in this order for each regular word:
    1. substitution draws inside mutate_word
    2. deletion draws (every 5th word)
    3. insertion draws (every 4th word)
    4. one silent-mutation draw
followed, once per sentence, by the swap position draw if a silent
mutation was flagged.

Public API:
    SentenceMutator.mutate_sentence(sentence, mutate_word) -> str
"""

from enum import Enum
from typing import Callable, List, Optional, Tuple

from .haplotypes import HaplotypeMatcher
from .mutation_types import MutationType
from .word_mutator import WordMutator


# Schedules are 1-based word positions
HIGH_MUTATION_PERIOD = 3
DELETION_PERIOD = 5
INSERTION_PERIOD = 4

SILENT_MUTATION_RATE = 0.05

# A swap needs more than this many tokens
MIN_SWAP_TOKENS = 2


class MatcherState(Enum):
    """Haplotype tracking state while walking a sentence."""
    SCANNING = "scanning"
    ACCUMULATING = "accumulating"


class SentenceMutator:
    """
    Word-by-word sentence mutation with haplotype linkage.

    Attributes:
        word_mutator: Default word strategy and indel provider
        matcher: Haplotype matcher
        rng: Random source for silent mutations
        haplotype_hook: Optional callback receiving each emitted haplotype
    """

    def __init__(
        self,
        word_mutator: WordMutator,
        matcher: HaplotypeMatcher,
        rng,
        silent_mutation_rate: float = SILENT_MUTATION_RATE,
        haplotype_hook: Optional[Callable[[str], None]] = None
    ):
        self.word_mutator = word_mutator
        self.matcher = matcher
        self.rng = rng
        self.silent_mutation_rate = silent_mutation_rate
        self.haplotype_hook = haplotype_hook

    def mutate_sentence(
        self,
        sentence: str,
        mutate_word: Optional[Callable[[str, bool], str]] = None
    ) -> str:
        """
        Mutate a sentence.

        Words that could begin a haplotype are buffered. A completed
        haplotype is mutated as one unit and emitted as a single token. A
        buffer that stops matching (or is still open at the end of the
        sentence) is released through regular mutation at its own positions.

        Args:
            sentence: Sentence to mutate (words separated by single spaces)
            mutate_word: Word strategy; defaults to the WordMutator

        Returns:
            Mutated sentence
        """
        if mutate_word is None:
            mutate_word = self.word_mutator.mutate_word

        tokens: List[str] = []
        buffer: List[Tuple[int, str]] = []
        state = MatcherState.SCANNING
        silent_mutation = False

        for index, word in enumerate(sentence.split(' ')):
            if state == MatcherState.ACCUMULATING:
                candidate = [w for _, w in buffer] + [word]
                if self.matcher.is_haplotype(candidate):
                    self._emit_haplotype(candidate, tokens, mutate_word)
                    buffer = []
                    state = MatcherState.SCANNING
                    continue
                if self.matcher.is_prefix(candidate):
                    buffer.append((index, word))
                    continue
                silent_mutation |= self._release(buffer, tokens, mutate_word)
                buffer = []
                state = MatcherState.SCANNING

            if self.matcher.is_prefix([word]):
                if self.matcher.is_haplotype([word]):
                    self._emit_haplotype([word], tokens, mutate_word)
                else:
                    buffer = [(index, word)]
                    state = MatcherState.ACCUMULATING
                continue

            silent_mutation |= self._mutate_regular(index, word, tokens, mutate_word)

        if buffer:
            silent_mutation |= self._release(buffer, tokens, mutate_word)

        if silent_mutation and len(tokens) > MIN_SWAP_TOKENS:
            pos = int(self.rng.integers(len(tokens) - 1))
            tokens[pos], tokens[pos + 1] = tokens[pos + 1], tokens[pos]

        return ' '.join(tokens)

    def _emit_haplotype(self, words, tokens, mutate_word) -> None:
        phrase = self.matcher.mutate_haplotype(words, mutate_word)
        if self.haplotype_hook is not None:
            self.haplotype_hook(phrase)
        tokens.append(phrase)

    def _release(self, buffer, tokens, mutate_word) -> bool:
        """Mutate buffered words individually; return True if any flagged silence."""
        flagged = False
        for index, word in buffer:
            flagged |= self._mutate_regular(index, word, tokens, mutate_word)
        return flagged

    def _mutate_regular(self, index, word, tokens, mutate_word) -> bool:
        position = index + 1
        mutated = mutate_word(word, position % HIGH_MUTATION_PERIOD == 0)

        if position % DELETION_PERIOD == 0:
            mutated = self.word_mutator.apply_indel(mutated, index, MutationType.DELETION)
        if position % INSERTION_PERIOD == 0:
            mutated = self.word_mutator.apply_indel(mutated, index, MutationType.INSERTION)

        tokens.append(mutated)
        return self.rng.random() < self.silent_mutation_rate
