"""
Genomic Text Mutator Package

A Python package that rewrites text with genomic-style mutation rules:
letters are read as nucleotides, words mutate through a transition matrix,
known phrases mutate as linked haplotypes, and a coherence filter keeps the
result recognizable.

Main modules:
    - mutation_engine: Base engine and phonetic/epigenetic/multilingual variants
    - analysis: Word divergence metrics
    - visualization: Transition matrix heatmap
"""

__version__ = '1.0.0'
__author__ = 'Genomic Text Mutator'

# Convenience imports
from mutation_engine import TextMutator, MutationConfig, create_engine, mutate_lines
from analysis import word_divergence_table, summarize_divergence
