"""
Haplotype Matcher Module

Haplotypes are fixed multi-word phrases that are inherited, and mutated,
as a single linked unit instead of word by word.

Public API:
    HaplotypeMatcher: prefix/complete-phrase detection and unit mutation
"""

from typing import Callable, Iterable, Optional, Sequence


DEFAULT_HAPLOTYPES = (
    "the quick brown fox",
    "once upon a time",
    "in the beginning",
    "by the shore",
)


class HaplotypeMatcher:
    """
    Case-insensitive matching of word sequences against known phrases.

    Attributes:
        haplotypes: Lower-cased phrases, in priority order
    """

    def __init__(self, haplotypes: Optional[Iterable[str]] = None):
        phrases = DEFAULT_HAPLOTYPES if haplotypes is None else haplotypes
        self.haplotypes = tuple(' '.join(p.lower().split()) for p in phrases)
        self._phrase_words = tuple(tuple(p.split(' ')) for p in self.haplotypes)

    def is_prefix(self, words: Sequence[str]) -> bool:
        """Check whether ``words`` are the leading words of some haplotype."""
        if not words:
            return False
        lowered = tuple(w.lower() for w in words)
        return any(
            phrase[:len(lowered)] == lowered
            for phrase in self._phrase_words
            if len(phrase) >= len(lowered)
        )

    def is_haplotype(self, words: Sequence[str]) -> bool:
        """Check whether ``words`` spell out a complete haplotype."""
        return ' '.join(w.lower() for w in words) in self.haplotypes

    def mutate_haplotype(
        self,
        words: Sequence[str],
        mutate_word: Callable[[str, bool], str]
    ) -> str:
        """Mutate every word in high-mutation-zone mode and rejoin as one token."""
        return ' '.join(mutate_word(word, True) for word in words)
