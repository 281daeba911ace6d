"""
Heatmap Visualization Module

Provides a heatmap of a nucleotide transition matrix.

Public API:
    plot_transition_heatmap(matrix, outpath) -> None
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from typing import Dict, Union
from pathlib import Path

from mutation_engine.nucleotides import NUCLEOTIDE_ORDER, Nucleotide, matrix_to_array


TRANSITION_CMAP = 'Blues'


def plot_transition_heatmap(
    matrix: Union[Dict[Nucleotide, Dict[Nucleotide, float]], np.ndarray],
    outpath: Union[str, Path],
    title: str = "Nucleotide Transition Matrix",
    figsize: tuple = (6, 5),
    dpi: int = 150,
    cmap: str = TRANSITION_CMAP
) -> None:
    """
    Create an annotated heatmap of transition probabilities.

    Args:
        matrix: Transition matrix dict or 4x4 array (rows = source,
                cols = target, order A G C T)
        outpath: Output path for PNG file
        title: Plot title
        figsize: Figure size in inches
        dpi: Resolution
        cmap: Matplotlib colormap name

    Output:
        Saves PNG heatmap to outpath
    """
    if isinstance(matrix, dict):
        matrix = matrix_to_array(matrix)

    labels = [n.value for n in NUCLEOTIDE_ORDER]

    fig, ax = plt.subplots(figsize=figsize)
    im = ax.imshow(matrix, cmap=cmap, aspect='equal', vmin=0, vmax=1)
    fig.colorbar(im, ax=ax, label='Transition Probability', shrink=0.8)

    ax.set_xticks(np.arange(len(labels)))
    ax.set_xticklabels(labels)
    ax.set_yticks(np.arange(len(labels)))
    ax.set_yticklabels(labels)

    for i in range(matrix.shape[0]):
        for j in range(matrix.shape[1]):
            text_color = 'white' if matrix[i, j] > 0.5 else 'black'
            ax.text(j, i, f'{matrix[i, j] * 100:.0f}%', ha='center', va='center',
                    color=text_color, fontsize=10)

    ax.set_xlabel('Target Nucleotide')
    ax.set_ylabel('Source Nucleotide')
    ax.set_title(title)

    plt.tight_layout()
    plt.savefig(outpath, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
