"""
Mutation Types Module

Defines the enumerations and configuration containers shared by the text
mutation engine and its variants.

Genomic analogy:
- Substitutions: a letter is replaced by a letter of another nucleotide class
- Insertions: a letter is added to a word (replication slippage)
- Deletions: a letter is removed from a word
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class MutationType(Enum):
    """
    Enumeration of letter-level mutation types.

    SUBSTITUTION: Nucleotide transition applied to a single letter
    INSERTION: Addition of one letter (indel)
    DELETION: Removal of one letter (indel)
    """
    SUBSTITUTION = "substitution"
    INSERTION = "insertion"
    DELETION = "deletion"


class EngineMode(Enum):
    """
    Enumeration of available engine variants.

    DEFAULT: Base nucleotide transition engine
    PHONETIC: Adds sound-change rules and pronounceability repair
    EPIGENETIC: Adds methylation (word silencing) and knock-on mutations
    MULTILINGUAL: Population-specific matrices and foreign vocabulary
    """
    DEFAULT = "default"
    PHONETIC = "phonetic"
    EPIGENETIC = "epigenetic"
    MULTILINGUAL = "multilingual"


DEFAULT_POPULATION = 'european'


@dataclass
class MutationConfig:
    """
    Engine configuration as assembled by the command line.

    Attributes:
        mode: Engine variant name (unknown names fall back to 'default')
        population: Population profile for the multilingual variant
        strength: Mutation strength (0-1). Advisory only: parsed and
                  validated but not used by any mutation probability.
        preserve_format: Mutate line by line, keeping blank lines
        seed: Random seed for reproducibility
    """
    mode: str = EngineMode.DEFAULT.value
    population: str = DEFAULT_POPULATION
    strength: float = 0.5
    preserve_format: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate strength bounds."""
        if not 0.0 <= self.strength <= 1.0:
            raise ValueError(f"Strength must be within [0, 1], got {self.strength}")

    @property
    def engine_mode(self) -> EngineMode:
        """Resolve the mode name, falling back to the default engine."""
        try:
            return EngineMode(self.mode)
        except ValueError:
            return EngineMode.DEFAULT
