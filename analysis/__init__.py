"""
Analysis Module

Provides tools for analyzing mutated text against its source.

Public API:
    - word_divergence_table: Per-position word divergence DataFrame
    - summarize_divergence: Summary statistics of a divergence table
"""

from .divergence import word_divergence_table, summarize_divergence

__all__ = [
    'word_divergence_table',
    'summarize_divergence'
]
