"""
Visualization Module

Provides plotting functions for the mutation engine.

Public API:
    - plot_transition_heatmap: Heatmap of a nucleotide transition matrix
"""

from .heatmaps import plot_transition_heatmap

__all__ = [
    'plot_transition_heatmap'
]
