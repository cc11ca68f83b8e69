"""Selection of the dictionary phrases indexed by the match automaton."""

from __future__ import annotations

from typing import Iterable, List, cast

from ..constants import (
    FORBIDDEN_PATTERN_CHARS,
    MAX_PATTERN_LENGTH,
    MIN_PATTERN_LENGTH,
    ROMAN_NUMERALS,
)


def is_useful_pattern(value: object) -> bool:
    """Return whether a dictionary value is worth matching in page text.

    Long descriptions, multi-line strings, strings without any letter and
    roman numerals are rejected: they either never occur in table cells or
    would match far too eagerly.

    Args:
        value: Raw dictionary value, of any JSON type.

    Returns:
        ``True`` when the value can be used as a pattern.

    Examples:
        >>> is_useful_pattern("Orokin Vault")
        True
        >>> is_useful_pattern("IV")
        False
        >>> is_useful_pattern("25%")
        False
    """
    if not isinstance(value, str):
        return False
    if not MIN_PATTERN_LENGTH <= len(value) <= MAX_PATTERN_LENGTH:
        return False
    if any(char in FORBIDDEN_PATTERN_CHARS for char in value):
        return False
    if not any(char.isalpha() for char in value):
        return False
    if value in ROMAN_NUMERALS:
        return False
    return True


def pattern_sort_key(pattern: str) -> tuple[int, str]:
    """Order patterns longest first, then lexicographically."""
    return (-len(pattern), pattern)


def collect_patterns(values: Iterable[object]) -> List[str]:
    """Filter, de-duplicate and order candidate patterns.

    The returned order is the insertion order expected by
    :class:`~droptables_l10n.matching.automaton.MatchAutomaton`: longer
    phrases come first so that they surface first among merged outputs.

    Args:
        values: Dictionary values in source-language order.

    Returns:
        Unique useful patterns sorted by :func:`pattern_sort_key`.
    """
    seen: set[str] = set()
    patterns: List[str] = []
    for value in values:
        if not is_useful_pattern(value):
            continue
        pattern = cast(str, value)
        if pattern in seen:
            continue
        seen.add(pattern)
        patterns.append(pattern)
    patterns.sort(key=pattern_sort_key)
    return patterns
