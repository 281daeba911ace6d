"""
Population Profiles Module

Population-specific transition matrices and the vocabulary each population
can introduce into the text (multilingual variant).

- yoruba: elevated A->G transitions, Yoruba vocabulary
- han: balanced transitions, Mandarin (pinyin) vocabulary
- european: elevated C->T transitions, French vocabulary
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .nucleotides import Nucleotide, validate_transition_matrix


A, G, C, T = Nucleotide.A, Nucleotide.G, Nucleotide.C, Nucleotide.T


@dataclass(frozen=True)
class VocabularyEntry:
    """A trigger word and its foreign-language replacement."""
    trigger: str
    word: str


@dataclass(frozen=True)
class PopulationProfile:
    """
    Named bundle of a transition matrix and a vocabulary.

    Attributes:
        name: Population key
        transition_matrix: Matrix installed when the profile is active
        vocabulary: Trigger/replacement pairs
    """
    name: str
    transition_matrix: Dict[Nucleotide, Dict[Nucleotide, float]]
    vocabulary: Tuple[VocabularyEntry, ...]

    def __post_init__(self):
        validate_transition_matrix(self.transition_matrix)


YORUBA = PopulationProfile(
    name='yoruba',
    transition_matrix={
        A: {A: 0.2, G: 0.6, C: 0.1, T: 0.1},
        G: {A: 0.3, G: 0.5, C: 0.1, T: 0.1},
        C: {A: 0.1, G: 0.1, C: 0.4, T: 0.4},
        T: {A: 0.1, G: 0.1, C: 0.4, T: 0.4},
    },
    vocabulary=(
        VocabularyEntry('water', 'omi'),
        VocabularyEntry('house', 'ile'),
        VocabularyEntry('person', 'eniyan'),
        VocabularyEntry('food', 'ounje'),
        VocabularyEntry('good', 'dara'),
    )
)

HAN = PopulationProfile(
    name='han',
    transition_matrix={
        A: {A: 0.3, G: 0.3, C: 0.2, T: 0.2},
        G: {A: 0.3, G: 0.3, C: 0.2, T: 0.2},
        C: {A: 0.2, G: 0.2, C: 0.3, T: 0.3},
        T: {A: 0.2, G: 0.2, C: 0.3, T: 0.3},
    },
    vocabulary=(
        VocabularyEntry('mountain', 'shān'),
        VocabularyEntry('water', 'shuǐ'),
        VocabularyEntry('person', 'rén'),
        VocabularyEntry('book', 'shū'),
        VocabularyEntry('good', 'hǎo'),
    )
)

EUROPEAN = PopulationProfile(
    name='european',
    transition_matrix={
        A: {A: 0.4, G: 0.4, C: 0.1, T: 0.1},
        G: {A: 0.4, G: 0.4, C: 0.1, T: 0.1},
        C: {A: 0.1, G: 0.1, C: 0.3, T: 0.5},
        T: {A: 0.1, G: 0.1, C: 0.3, T: 0.5},
    },
    vocabulary=(
        VocabularyEntry('water', 'eau'),
        VocabularyEntry('house', 'maison'),
        VocabularyEntry('person', 'personne'),
        VocabularyEntry('book', 'livre'),
        VocabularyEntry('good', 'bon'),
    )
)

# Iteration order matters for trigger-driven switching: the last
# successful switch wins.
POPULATION_PROFILES: Dict[str, PopulationProfile] = {
    profile.name: profile for profile in (YORUBA, HAN, EUROPEAN)
}
