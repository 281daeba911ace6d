"""
Combined Engine Module

Holds one instance of each variant and forwards to the selected one.
"""

import warnings
from typing import Callable, Optional

import numpy as np

from .epigenetic import EpigeneticMutator
from .multilingual import MultilingualMutator
from .mutation_types import EngineMode
from .phonetic import PhoneticMutator
from .text_mutator import MutationEngine


class CombinedMutator(MutationEngine):
    """
    Runtime-selectable variant engine.

    All variants share one random source. The phonetic variant is active
    until another is selected.
    """

    def __init__(self, rng=None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.phonetic = PhoneticMutator(rng=self.rng)
        self.epigenetic = EpigeneticMutator(rng=self.rng)
        self.multilingual = MultilingualMutator(rng=self.rng)
        self.active_engine: MutationEngine = self.phonetic

    def set_engine(self, engine_type: str) -> MutationEngine:
        """Select a variant; unknown types select the phonetic variant."""
        engines = {
            EngineMode.PHONETIC.value: self.phonetic,
            EngineMode.EPIGENETIC.value: self.epigenetic,
            EngineMode.MULTILINGUAL.value: self.multilingual,
        }
        if engine_type not in engines:
            warnings.warn(f"Unknown engine type '{engine_type}', using phonetic")
        self.active_engine = engines.get(engine_type, self.phonetic)
        return self.active_engine

    def set_population(self, population: str) -> bool:
        """Forward to the multilingual variant only while it is active."""
        if self.active_engine is self.multilingual:
            return self.multilingual.set_population(population)
        return False

    def mutate_word(self, word: str, high_mutation_zone: bool = False) -> str:
        return self.active_engine.mutate_word(word, high_mutation_zone)

    def mutate_sentence(self, sentence: str, mutate_word: Optional[Callable] = None) -> str:
        return self.active_engine.mutate_sentence(sentence, mutate_word)

    def mutate_text(self, text: str, mutate_sentence: Optional[Callable] = None) -> str:
        return self.active_engine.mutate_text(text, mutate_sentence)

    @property
    def transition_matrix(self):
        return self.active_engine.transition_matrix

    def visualize_matrix(self) -> str:
        return self.active_engine.visualize_matrix()
