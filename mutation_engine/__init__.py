"""
Mutation Engine Module

Genomic-style text mutation: letters are read as nucleotides, words
mutate through a transition matrix, phrases mutate as linked haplotypes,
and a coherence filter keeps the result recognizable.

Public API:
    - TextMutator: Base engine (mutate_text, visualize_matrix)
    - PhoneticMutator, EpigeneticMutator, MultilingualMutator: Variants
    - CombinedMutator: Runtime-selectable variant facade
    - create_engine: Build an engine from a MutationConfig
    - mutate_lines: Line-by-line mutation preserving blank lines
    - MutationConfig, MutationType, EngineMode, Nucleotide
"""

from .mutation_types import MutationType, EngineMode, MutationConfig
from .nucleotides import Nucleotide, TransitionModel
from .text_mutator import MutationEngine, TextMutator
from .phonetic import PhoneticMutator
from .epigenetic import EpigeneticMutator
from .multilingual import MultilingualMutator
from .combined import CombinedMutator
from .factory import create_engine, mutate_lines

__all__ = [
    'MutationType',
    'EngineMode',
    'MutationConfig',
    'Nucleotide',
    'TransitionModel',
    'MutationEngine',
    'TextMutator',
    'PhoneticMutator',
    'EpigeneticMutator',
    'MultilingualMutator',
    'CombinedMutator',
    'create_engine',
    'mutate_lines'
]
