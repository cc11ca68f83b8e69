"""Guard against dictionary phrases matching inside longer Latin words."""

from __future__ import annotations


def _is_ascii_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


def is_ascii_word(pattern: str) -> bool:
    """Return whether ``pattern`` is made only of ASCII letters.

    Examples:
        >>> is_ascii_word("ON")
        True
        >>> is_ascii_word("Orokin Vault")
        False
    """
    return bool(pattern) and all(_is_ascii_letter(char) for char in pattern)


class BoundaryPolicy:
    """Decide whether a match may be substituted at its position.

    Only patterns consisting entirely of ASCII letters are checked: such a
    match is rejected when the character just before or just after it is an
    ASCII letter too, so that a short code such as ``ON`` never rewrites part
    of ``DRAGON``. Other patterns (names with spaces, digits, punctuation or
    non-Latin scripts) are always accepted.
    """

    def accepts(self, text: str, start: int, pattern: str) -> bool:
        """Return whether ``pattern`` found at ``start`` can be replaced.

        Args:
            text: Text run being transformed.
            start: Offset of the match inside ``text``.
            pattern: Matched pattern.

        Returns:
            ``False`` when an ASCII-letter pattern touches another ASCII
            letter, ``True`` otherwise.
        """
        if not is_ascii_word(pattern):
            return True
        end = start + len(pattern)
        if start > 0 and _is_ascii_letter(text[start - 1]):
            return False
        if end < len(text) and _is_ascii_letter(text[end]):
            return False
        return True
