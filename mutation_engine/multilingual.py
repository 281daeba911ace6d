"""
Multilingual Variant Module

Switches between population profiles based on trigger words in the input,
then borrows vocabulary from the active population before mutating with
its transition matrix.

Public API:
    MultilingualMutator: multilingual engine variant
"""

import re
from typing import Callable, Dict, Optional

from .mutation_types import DEFAULT_POPULATION
from .populations import POPULATION_PROFILES, PopulationProfile, VocabularyEntry
from .text_mutator import MutationEngine, TextMutator


SWITCH_PROBABILITY = 0.4
REPLACEMENT_PROBABILITY = 0.3

WORD_TOKEN = re.compile(r'\w+')


def trigger_pattern(trigger: str) -> 're.Pattern':
    """Word-bounded, case-insensitive literal match for a trigger word."""
    return re.compile(rf'\b{re.escape(trigger)}\b', re.IGNORECASE)


class MultilingualMutator(MutationEngine):
    """
    Multilingual engine variant.

    Exactly one population profile is active at a time. Activating a profile
    installs its transition matrix on the base engine as a whole.

    Args:
        base: Base engine to call through to (built when omitted)
        rng: Random source for a newly built base engine
        seed: Seed for a newly built base engine
        profiles: Population profiles by name
        population: Initially active population
        switch_probability: Chance a trigger occurrence switches population
        replacement_probability: Chance a present trigger is replaced
    """

    def __init__(
        self,
        base: Optional[TextMutator] = None,
        rng=None,
        seed: Optional[int] = None,
        profiles: Optional[Dict[str, PopulationProfile]] = None,
        population: str = DEFAULT_POPULATION,
        switch_probability: float = SWITCH_PROBABILITY,
        replacement_probability: float = REPLACEMENT_PROBABILITY
    ):
        self.base = base if base is not None else TextMutator(rng=rng, seed=seed)
        self.rng = self.base.rng
        self.profiles = dict(profiles if profiles is not None else POPULATION_PROFILES)
        self.switch_probability = switch_probability
        self.replacement_probability = replacement_probability
        self.active_population = None

        if not self.set_population(population):
            raise ValueError(
                f"Unknown population '{population}', "
                f"expected one of {sorted(self.profiles)}"
            )

    @property
    def active_profile(self) -> PopulationProfile:
        return self.profiles[self.active_population]

    def set_population(self, population: str) -> bool:
        """
        Activate a population profile.

        Returns:
            True on success; False for unknown names, leaving the current
            population and matrix untouched
        """
        profile = self.profiles.get(population)
        if profile is None:
            return False
        self.active_population = population
        self.base.set_transition_matrix(profile.transition_matrix)
        return True

    def switch_population(self, text: str) -> str:
        """
        Let trigger words in ``text`` pull the engine toward a population.

        Every word token is checked against every profile's vocabulary;
        the first matching entry of a profile draws once. Later successful
        draws override earlier ones.

        Returns:
            Name of the population active afterwards
        """
        for token in WORD_TOKEN.findall(text.lower()):
            for population, profile in self.profiles.items():
                for entry in profile.vocabulary:
                    if token == entry.trigger.lower():
                        if self.rng.random() < self.switch_probability:
                            self.set_population(population)
                        break
        return self.active_population

    def borrow_vocabulary(self, text: str) -> str:
        """Replace all occurrences of some present triggers with foreign words."""
        for entry in self.active_profile.vocabulary:
            text = self._replace_trigger(text, entry)
        return text

    def _replace_trigger(self, text: str, entry: VocabularyEntry) -> str:
        pattern = trigger_pattern(entry.trigger)
        if pattern.search(text) is None:
            return text
        if self.rng.random() < self.replacement_probability:
            return pattern.sub(lambda m: entry.word, text)
        return text

    def mutate_word(self, word: str, high_mutation_zone: bool = False) -> str:
        return self.base.mutate_word(word, high_mutation_zone)

    def mutate_sentence(self, sentence: str, mutate_word: Optional[Callable] = None) -> str:
        return self.base.mutate_sentence(sentence, mutate_word)

    def mutate_text(self, text: str, mutate_sentence: Optional[Callable] = None) -> str:
        self.switch_population(text)
        text = self.borrow_vocabulary(text)
        return self.base.mutate_text(text, mutate_sentence)

    @property
    def transition_matrix(self):
        return self.base.transition_matrix

    def visualize_matrix(self) -> str:
        return self.base.visualize_matrix()
