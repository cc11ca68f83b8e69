"""Text transform replacing dictionary phrases with their translations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from .automaton import MatchAutomaton
from .boundary import BoundaryPolicy


@dataclass(frozen=True)
class Replacement:
    """One accepted substitution inside a text run.

    Attributes:
        start: Offset of the replaced phrase.
        end: Offset just past the replaced phrase.
        source: Source-language phrase found in the text.
        translation: Text written in its place.
    """

    start: int
    end: int
    source: str
    translation: str


class Substitutor:
    """Replace the longest dictionary phrase found at each text position.

    Instances are callables suitable for
    :meth:`droptables_l10n.markup.MarkupTextWalker.transform`.

    Examples:
        >>> automaton = MatchAutomaton(["Orokin Vault", "Orokin"])
        >>> substitutor = Substitutor(automaton, {"Orokin": "奥罗金"})
        >>> substitutor("Orokin Cell")
        '奥罗金 Cell'
        >>> substitutor("Orokin Vault")
        'Orokin Vault'
    """

    def __init__(
        self,
        automaton: MatchAutomaton,
        translations: Mapping[str, str],
        boundary: Optional[BoundaryPolicy] = None,
    ) -> None:
        """Bind the matcher, the translations and the boundary policy.

        Args:
            automaton: Matcher built from the source-language patterns.
            translations: Source phrase to translated phrase mapping.
            boundary: Policy vetoing matches glued to other words. Defaults
                to :class:`BoundaryPolicy`.
        """
        self.automaton = automaton
        self.translations = translations
        self.boundary = boundary or BoundaryPolicy()
        self.replacement_count = 0

    def find(self, text: str) -> List[Replacement]:
        """Return the substitutions the transform would apply to ``text``.

        The text is walked left to right. At each position holding a best
        match accepted by the boundary policy and having a non-empty
        translation, the phrase is replaced and the cursor jumps past it;
        otherwise the cursor moves by a single character.

        Args:
            text: Text run to inspect.

        Returns:
            Non-overlapping replacements ordered by position.
        """
        table = self.automaton.scan(text)
        replacements: List[Replacement] = []
        position = 0
        size = len(text)

        while position < size:
            length = table.lengths[position]
            if length:
                pattern = self.automaton.pattern(table.patterns[position])
                if self.boundary.accepts(text, position, pattern):
                    translation = self.translations.get(pattern)
                    if translation:
                        replacements.append(
                            Replacement(
                                start=position,
                                end=position + length,
                                source=pattern,
                                translation=translation,
                            )
                        )
                        position += length
                        continue
            position += 1

        return replacements

    def __call__(self, text: str) -> str:
        """Return ``text`` with every accepted phrase translated."""
        replacements = self.find(text)
        if not replacements:
            return text
        self.replacement_count += len(replacements)
        return apply_replacements(text, replacements)


def apply_replacements(text: str, replacements: Sequence[Replacement]) -> str:
    """Apply ordered, non-overlapping replacements to ``text``."""
    pieces: List[str] = []
    last_idx = 0
    for replacement in replacements:
        pieces.append(text[last_idx : replacement.start])
        pieces.append(replacement.translation)
        last_idx = replacement.end
    pieces.append(text[last_idx:])
    return "".join(pieces)
