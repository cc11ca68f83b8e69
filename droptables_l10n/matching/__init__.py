"""Matching core: pattern selection, automaton, boundary checks, substitution."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from .automaton import BestMatchTable, MatchAutomaton
from .boundary import BoundaryPolicy, is_ascii_word
from .patterns import collect_patterns, is_useful_pattern
from .substitutor import Replacement, Substitutor, apply_replacements


def build_automaton(values: Iterable[object]) -> MatchAutomaton:
    """Build an automaton from raw source-language dictionary values."""

    return MatchAutomaton(collect_patterns(values))


def build_substitutor(
    automaton: MatchAutomaton,
    translations: Mapping[str, str],
    boundary: Optional[BoundaryPolicy] = None,
) -> Substitutor:
    """Return the text transform for one target language."""

    return Substitutor(automaton, translations, boundary)


__all__ = [
    "BestMatchTable",
    "BoundaryPolicy",
    "MatchAutomaton",
    "Replacement",
    "Substitutor",
    "apply_replacements",
    "build_automaton",
    "build_substitutor",
    "collect_patterns",
    "is_ascii_word",
    "is_useful_pattern",
]
