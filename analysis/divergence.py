"""
Divergence Metrics Module

Measures how far mutated text strayed from its source, word by word.
These metrics quantify how recognizable the output remains.

Public API:
    word_divergence_table(original, mutated) -> pd.DataFrame
    summarize_divergence(table) -> dict
"""

import numpy as np
import pandas as pd
from typing import Any, Dict

from mutation_engine.coherence import COHERENCE_THRESHOLD, calculate_difference


DIVERGENCE_COLUMNS = [
    'position', 'original_word', 'mutated_word',
    'difference', 'aligned', 'anchored'
]


def word_divergence_table(original: str, mutated: str) -> pd.DataFrame:
    """
    Align original and mutated words by position.

    Args:
        original: Source text
        mutated: Mutated text

    Returns:
        DataFrame with one row per position of the longer text:
            - 'position': 0-based word position
            - 'original_word' / 'mutated_word': words ('' past the end)
            - 'difference': difference ratio (NaN when unaligned)
            - 'aligned': True when both texts have a word at this position
            - 'anchored': True when aligned words share their first letter
    """
    original_words = original.split()
    mutated_words = mutated.split()
    n_positions = max(len(original_words), len(mutated_words))

    rows = []
    for i in range(n_positions):
        orig = original_words[i] if i < len(original_words) else ''
        mut = mutated_words[i] if i < len(mutated_words) else ''
        aligned = i < len(original_words) and i < len(mutated_words)

        rows.append({
            'position': i,
            'original_word': orig,
            'mutated_word': mut,
            'difference': calculate_difference(mut, orig) if aligned else np.nan,
            'aligned': aligned,
            'anchored': aligned and mut[:1] == orig[:1]
        })

    return pd.DataFrame(rows, columns=DIVERGENCE_COLUMNS)


def summarize_divergence(
    table: pd.DataFrame,
    threshold: float = COHERENCE_THRESHOLD
) -> Dict[str, Any]:
    """
    Summarize a divergence table.

    Returns:
        Dict containing:
            - 'total_positions': Rows in the table
            - 'aligned_positions': Positions present in both texts
            - 'mean_difference': Mean difference ratio over aligned words
            - 'pct_unchanged': Percentage of aligned words left identical
            - 'pct_divergent': Percentage of aligned words above threshold
            - 'pct_anchored': Percentage of aligned words keeping first letter
            - 'length_delta': Mutated word count minus original word count
    """
    if table.empty:
        return _empty_divergence_result()

    aligned = table[table['aligned']]
    n_aligned = len(aligned)
    n_original = int((table['original_word'] != '').sum())
    n_mutated = int((table['mutated_word'] != '').sum())

    if n_aligned == 0:
        result = _empty_divergence_result()
        result['total_positions'] = len(table)
        result['length_delta'] = n_mutated - n_original
        return result

    differences = aligned['difference'].to_numpy(dtype=float)

    return {
        'total_positions': len(table),
        'aligned_positions': n_aligned,
        'mean_difference': float(np.mean(differences)),
        'pct_unchanged': float(np.mean(differences == 0) * 100),
        'pct_divergent': float(np.mean(differences > threshold) * 100),
        'pct_anchored': float(aligned['anchored'].mean() * 100),
        'length_delta': n_mutated - n_original
    }


def _empty_divergence_result() -> Dict[str, Any]:
    """Return empty divergence result structure."""
    return {
        'total_positions': 0,
        'aligned_positions': 0,
        'mean_difference': 0.0,
        'pct_unchanged': 0.0,
        'pct_divergent': 0.0,
        'pct_anchored': 0.0,
        'length_delta': 0
    }
