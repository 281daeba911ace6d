"""
Engine Factory Module

Builds the engine requested by a MutationConfig and applies it to text,
optionally line by line.

Public API:
    create_engine(config, rng) -> (MutationEngine, bool)
    mutate_lines(engine, text) -> str
"""

import re
from typing import Optional, Tuple

import numpy as np

from .epigenetic import EpigeneticMutator
from .multilingual import MultilingualMutator
from .mutation_types import EngineMode, MutationConfig
from .phonetic import PhoneticMutator
from .text_mutator import MutationEngine, TextMutator


LINE_BREAK = re.compile(r'\r?\n')


def create_engine(
    config: Optional[MutationConfig] = None,
    rng=None
) -> Tuple[MutationEngine, bool]:
    """
    Build the engine for ``config.mode``.

    Unknown modes silently fall back to the base engine. For the
    multilingual mode the requested population is applied; an unknown
    population keeps the default one active.

    Args:
        config: Engine configuration (default: MutationConfig())
        rng: Random source; built from ``config.seed`` when omitted

    Returns:
        Tuple of:
            - The engine
            - Whether the requested population was recognized (always True
              outside multilingual mode)
    """
    if config is None:
        config = MutationConfig()
    if rng is None:
        rng = np.random.default_rng(config.seed)

    mode = config.engine_mode
    if mode == EngineMode.PHONETIC:
        return PhoneticMutator(rng=rng), True
    elif mode == EngineMode.EPIGENETIC:
        return EpigeneticMutator(rng=rng), True
    elif mode == EngineMode.MULTILINGUAL:
        engine = MultilingualMutator(rng=rng)
        return engine, engine.set_population(config.population)
    return TextMutator(rng=rng), True


def mutate_lines(engine: MutationEngine, text: str) -> str:
    """Mutate each non-blank line separately, keeping blank lines verbatim."""
    lines = LINE_BREAK.split(text)
    return '\n'.join(
        line if line.strip() == '' else engine.mutate_text(line)
        for line in lines
    )
