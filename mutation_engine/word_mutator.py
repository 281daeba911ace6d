"""
Word Mutator Module

Applies bounded nucleotide substitutions and single-letter indels to words.

Public API:
    WordMutator.mutate_word(word, high_mutation_zone) -> str
    WordMutator.apply_indel(word, position, kind) -> str
"""

from typing import Union

from .mutation_types import MutationType
from .nucleotides import TransitionModel


# Maximum substitutions per word
NORMAL_MUTATION_BUDGET = 1
HIGH_ZONE_MUTATION_BUDGET = 2

# Deletions never shrink a word below this length
MIN_DELETION_LENGTH = 3


class WordMutator:
    """
    Letter-level mutation driven by a TransitionModel.

    Example:
        >>> mutator = WordMutator(TransitionModel(np.random.default_rng(1)))
        >>> mutator.mutate_word("eat", high_mutation_zone=True)
    """

    def __init__(self, model: TransitionModel):
        self.model = model

    def mutate_word(self, word: str, high_mutation_zone: bool = False) -> str:
        """
        Substitute at most 1 (or 2 in a high-mutation zone) letters.

        The word is scanned once, left to right. Each mapped letter draws a
        transition target while budget remains; a changed target replaces the
        letter with a fresh letter of the target nucleotide. Unmapped
        characters, and everything after the budget is spent, are copied.
        """
        budget = HIGH_ZONE_MUTATION_BUDGET if high_mutation_zone else NORMAL_MUTATION_BUDGET
        mutated = []

        for char in word:
            nucleotide = self.model.nucleotide_for(char)
            if nucleotide is not None and budget > 0:
                target = self.model.transition_target(nucleotide)
                if target != nucleotide:
                    mutated.append(self.model.letter_for(target))
                    budget -= 1
                    continue
            mutated.append(char)

        return ''.join(mutated)

    def apply_indel(
        self,
        word: str,
        position: int,
        kind: Union[MutationType, str]
    ) -> str:
        """
        Insert or delete a single letter.

        Args:
            word: Word to modify
            position: Word position in the sentence. Kept for callers; the
                      edit site is always drawn at random (see DESIGN.md).
            kind: MutationType.DELETION or MutationType.INSERTION

        Returns:
            Modified word (unchanged for substitutions or short deletions)
        """
        kind = MutationType(kind)

        if kind == MutationType.DELETION:
            return _apply_deletion(word, self.model)
        elif kind == MutationType.INSERTION:
            return _apply_insertion(word, self.model)
        return word


def _apply_deletion(word: str, model: TransitionModel) -> str:
    """Remove one letter at a random position from words longer than 2."""
    if len(word) < MIN_DELETION_LENGTH:
        return word
    delete_pos = int(model.rng.integers(len(word)))
    return word[:delete_pos] + word[delete_pos + 1:]


def _apply_insertion(word: str, model: TransitionModel) -> str:
    """Insert a letter from a random nucleotide at a random position."""
    letter = model.letter_for(model.random_nucleotide())
    insert_pos = int(model.rng.integers(len(word) + 1))
    return word[:insert_pos] + letter + word[insert_pos:]
