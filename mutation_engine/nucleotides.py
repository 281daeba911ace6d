"""
Nucleotide Model Module

Maps the four symbolic nucleotides (A, G, C, T) onto groups of real letters
and samples nucleotide transitions from a per-population probability matrix.

Genomic analogy:
- A and G (purines) stand for high-frequency vowels and common consonants
- C and T (pyrimidines) stand for sharp consonants and mid/low vowels
- Transitions (A<->G, C<->T) are weighted above transversions, as in nature

Public API:
    TransitionModel: transition sampling and letter lookup
    validate_transition_matrix(matrix) -> None
    matrix_to_array(matrix) -> np.ndarray
"""

from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np


class Nucleotide(str, Enum):
    """Symbolic mutation alphabet."""
    A = "A"
    G = "G"
    C = "C"
    T = "T"


# Cumulative sampling is order-sensitive, so every loop over the
# alphabet uses this order.
NUCLEOTIDE_ORDER = (Nucleotide.A, Nucleotide.G, Nucleotide.C, Nucleotide.T)

DEFAULT_NUCLEOTIDE_MAP: Dict[Nucleotide, Tuple[str, ...]] = {
    Nucleotide.A: ('e', 'a'),       # High-frequency vowels
    Nucleotide.G: ('r', 'n', 's'),  # Common consonants
    Nucleotide.C: ('k', 't'),       # Sharp consonants
    Nucleotide.T: ('o', 'i'),       # Mid-to-low frequency vowels
}

# A->G and C->T transitions are the common ones
DEFAULT_TRANSITION_MATRIX: Dict[Nucleotide, Dict[Nucleotide, float]] = {
    Nucleotide.A: {Nucleotide.A: 0.4, Nucleotide.G: 0.4, Nucleotide.C: 0.1, Nucleotide.T: 0.1},
    Nucleotide.G: {Nucleotide.A: 0.4, Nucleotide.G: 0.4, Nucleotide.C: 0.1, Nucleotide.T: 0.1},
    Nucleotide.C: {Nucleotide.A: 0.1, Nucleotide.G: 0.1, Nucleotide.C: 0.4, Nucleotide.T: 0.4},
    Nucleotide.T: {Nucleotide.A: 0.1, Nucleotide.G: 0.1, Nucleotide.C: 0.4, Nucleotide.T: 0.4},
}

PROBABILITY_TOLERANCE = 1e-6


def validate_transition_matrix(matrix: Dict[Nucleotide, Dict[Nucleotide, float]]) -> None:
    """
    Check that a transition matrix is a complete stochastic matrix.

    Raises:
        ValueError: If a row or target is missing, a probability falls
                    outside [0, 1], or a row does not sum to 1
    """
    for source in NUCLEOTIDE_ORDER:
        if source not in matrix:
            raise ValueError(f"Transition matrix has no row for {source.value}")
        row = matrix[source]
        missing = [n.value for n in NUCLEOTIDE_ORDER if n not in row]
        if missing:
            raise ValueError(f"Row {source.value} is missing targets: {missing}")
        probs = np.array([row[target] for target in NUCLEOTIDE_ORDER], dtype=float)
        if np.any(probs < 0) or np.any(probs > 1):
            raise ValueError(f"Row {source.value} has probabilities outside [0, 1]")
        if not np.isclose(probs.sum(), 1.0, atol=PROBABILITY_TOLERANCE):
            raise ValueError(
                f"Row {source.value} sums to {probs.sum():.6f}, expected 1.0"
            )


def build_letter_index(nucleotide_map: Dict[Nucleotide, Tuple[str, ...]]) -> Dict[str, Nucleotide]:
    """
    Derive the letter -> nucleotide reverse map.

    Raises:
        ValueError: If a letter is assigned to more than one nucleotide
    """
    index = {}
    for nucleotide in NUCLEOTIDE_ORDER:
        for letter in nucleotide_map.get(nucleotide, ()):
            letter = letter.lower()
            if letter in index and index[letter] != nucleotide:
                raise ValueError(
                    f"Letter '{letter}' mapped to both {index[letter].value} "
                    f"and {nucleotide.value}"
                )
            index[letter] = nucleotide
    return index


def matrix_to_array(matrix: Dict[Nucleotide, Dict[Nucleotide, float]]) -> np.ndarray:
    """Convert a transition matrix to a 4x4 array (rows: source, cols: target)."""
    return np.array([
        [matrix[source][target] for target in NUCLEOTIDE_ORDER]
        for source in NUCLEOTIDE_ORDER
    ], dtype=float)


class TransitionModel:
    """
    Samples nucleotide transitions and letters from an injected generator.

    The generator only needs ``random()`` and ``integers(n)``, so a
    ``numpy.random.Generator`` or a fixed-draw stand-in both work.

    Attributes:
        rng: Random source shared with the rest of the engine
        nucleotide_map: Nucleotide -> letters (immutable for the model's life)
        letter_index: Letter -> nucleotide reverse map
        matrix: Active transition matrix (replaced wholesale only)
    """

    def __init__(
        self,
        rng,
        matrix: Optional[Dict[Nucleotide, Dict[Nucleotide, float]]] = None,
        nucleotide_map: Optional[Dict[Nucleotide, Tuple[str, ...]]] = None
    ):
        self.rng = rng
        self.nucleotide_map = dict(nucleotide_map or DEFAULT_NUCLEOTIDE_MAP)
        for nucleotide in NUCLEOTIDE_ORDER:
            if not self.nucleotide_map.get(nucleotide):
                raise ValueError(f"Nucleotide {nucleotide.value} has no letters")
        self.letter_index = build_letter_index(self.nucleotide_map)
        self.matrix = None
        self.set_matrix(matrix if matrix is not None else DEFAULT_TRANSITION_MATRIX)

    def set_matrix(self, matrix: Dict[Nucleotide, Dict[Nucleotide, float]]) -> None:
        """Validate and install a new transition matrix (no copy is made)."""
        validate_transition_matrix(matrix)
        self.matrix = matrix

    def nucleotide_for(self, letter: str) -> Optional[Nucleotide]:
        """Return the nucleotide a letter belongs to, or None if unmapped."""
        return self.letter_index.get(letter.lower())

    def transition_target(self, nucleotide: Nucleotide) -> Nucleotide:
        """
        Draw the nucleotide that ``nucleotide`` transitions into.

        A single uniform draw in [0, 1) is compared against cumulative
        probabilities in A, G, C, T order. If rounding leaves the draw above
        the last cumulative value, the source nucleotide is returned.
        """
        draw = self.rng.random()
        row = self.matrix[nucleotide]
        cumulative = 0.0
        for target in NUCLEOTIDE_ORDER:
            cumulative += row[target]
            if draw < cumulative:
                return target
        return nucleotide

    def letter_for(self, nucleotide: Nucleotide) -> str:
        """Uniformly sample one of the letters a nucleotide represents."""
        letters = self.nucleotide_map[nucleotide]
        return letters[int(self.rng.integers(len(letters)))]

    def random_nucleotide(self) -> Nucleotide:
        """Uniformly sample a nucleotide."""
        return NUCLEOTIDE_ORDER[int(self.rng.integers(len(NUCLEOTIDE_ORDER)))]
