"""
Phonetic Variant Module

Layers sound-change rules on top of nucleotide substitution, then repairs
unpronounceable stop-consonant clusters.

Phonological rules (each gated independently, applied in order):
- Vowel raising before nasals: a->e, e->i, o->u before m/n
- Intervocalic voicing: p->b, t->d, k->g, f->v, s->z, θ->ð between vowels
- Final devoicing: b->p, d->t, g->k, v->f, z->s, ð->θ at word end

Public API:
    PhoneticMutator: phonetic engine variant
    ensure_pronounceable(word) -> str
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .text_mutator import MutationEngine, TextMutator


RULE_PROBABILITY = 0.3
NEUTRAL_VOWEL = 'e'


@dataclass(frozen=True)
class Phoneme:
    """Simplified IPA description of a letter."""
    sound: str
    category: str
    neighbors: Tuple[str, ...]


PHONEME_MAP: Dict[str, Phoneme] = {
    # Vowels
    'a': Phoneme('/æ/', 'vowel', ('e', 'o')),
    'e': Phoneme('/ɛ/', 'vowel', ('a', 'i')),
    'i': Phoneme('/ɪ/', 'vowel', ('e', 'u')),
    'o': Phoneme('/ɒ/', 'vowel', ('a', 'u')),
    'u': Phoneme('/ʌ/', 'vowel', ('o', 'i')),
    # Stops
    'p': Phoneme('/p/', 'stop', ('b', 't')),
    'b': Phoneme('/b/', 'stop', ('p', 'd')),
    't': Phoneme('/t/', 'stop', ('d', 'k')),
    'd': Phoneme('/d/', 'stop', ('t', 'g')),
    'k': Phoneme('/k/', 'stop', ('g', 't')),
    'g': Phoneme('/g/', 'stop', ('k', 'd')),
    # Fricatives
    'f': Phoneme('/f/', 'fricative', ('v', 'th')),
    'v': Phoneme('/v/', 'fricative', ('f', 'z')),
    's': Phoneme('/s/', 'fricative', ('z', 'sh')),
    'z': Phoneme('/z/', 'fricative', ('s', 'v')),
    # Liquids & nasals
    'l': Phoneme('/l/', 'liquid', ('r',)),
    'r': Phoneme('/ɹ/', 'liquid', ('l',)),
    'm': Phoneme('/m/', 'nasal', ('n',)),
    'n': Phoneme('/n/', 'nasal', ('m', 'ng')),
}


def letters_in_category(category: str) -> str:
    return ''.join(letter for letter, p in PHONEME_MAP.items() if p.category == category)


STOP_CONSONANTS = letters_in_category('stop')
STOP_CLUSTER = re.compile(f'[{STOP_CONSONANTS}]{{3}}')

VOWEL_RAISING = {'a': 'e', 'e': 'i', 'o': 'u'}
VOICING = {'p': 'b', 't': 'd', 'k': 'g', 'f': 'v', 's': 'z', 'θ': 'ð'}
DEVOICING = {'b': 'p', 'd': 't', 'g': 'k', 'v': 'f', 'z': 's', 'ð': 'θ'}


@dataclass(frozen=True)
class PhonologicalRule:
    """A single-site rewrite: the first match of ``pattern`` is replaced."""
    name: str
    pattern: 're.Pattern'
    replacement: Callable[['re.Match'], str]

    def apply(self, word: str) -> str:
        return self.pattern.sub(self.replacement, word, count=1)


PHONOLOGICAL_RULES = (
    PhonologicalRule(
        'vowel_raising',
        re.compile(r'([aeiou])([mn])'),
        lambda m: VOWEL_RAISING.get(m.group(1), m.group(1)) + m.group(2)
    ),
    PhonologicalRule(
        'intervocalic_voicing',
        re.compile(r'([aeiou])([ptkfsθ])([aeiou])'),
        lambda m: m.group(1) + VOICING.get(m.group(2), m.group(2)) + m.group(3)
    ),
    PhonologicalRule(
        'final_devoicing',
        re.compile(r'([bdgvzð])$'),
        lambda m: DEVOICING.get(m.group(1), m.group(1))
    ),
)


def ensure_pronounceable(word: str) -> str:
    """Break every three-stop cluster with a neutral vowel after its first stop."""
    return STOP_CLUSTER.sub(lambda m: m.group(0)[0] + NEUTRAL_VOWEL + m.group(0)[1:], word)


class PhoneticMutator(MutationEngine):
    """
    Phonetic engine variant.

    Args:
        base: Base engine to call through to (built when omitted)
        rng: Random source for a newly built base engine
        seed: Seed for a newly built base engine
        rule_probability: Chance each phonological rule fires per word
    """

    def __init__(
        self,
        base: Optional[TextMutator] = None,
        rng=None,
        seed: Optional[int] = None,
        rule_probability: float = RULE_PROBABILITY
    ):
        self.base = base if base is not None else TextMutator(rng=rng, seed=seed)
        self.rng = self.base.rng
        self.rules = PHONOLOGICAL_RULES
        self.rule_probability = rule_probability

    def mutate_word(self, word: str, high_mutation_zone: bool = False) -> str:
        mutated = self.base.mutate_word(word, high_mutation_zone)

        for rule in self.rules:
            if self.rng.random() < self.rule_probability:
                mutated = rule.apply(mutated)

        return ensure_pronounceable(mutated)

    def mutate_sentence(self, sentence: str, mutate_word: Optional[Callable] = None) -> str:
        return self.base.mutate_sentence(sentence, mutate_word or self.mutate_word)

    def mutate_text(self, text: str, mutate_sentence: Optional[Callable] = None) -> str:
        return self.base.mutate_text(text, mutate_sentence or self.mutate_sentence)

    @property
    def transition_matrix(self):
        return self.base.transition_matrix

    def visualize_matrix(self) -> str:
        return self.base.visualize_matrix()
