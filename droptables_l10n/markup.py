"""Apply a text transform to selected text runs of a markup document.

The walker does not build a tree: it splits the document on ``<`` / ``>``,
copies tags verbatim and keeps a stack of open element names to know whether
a text run sits inside an allowed element. Everything outside transformed
runs is reproduced byte for byte.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Collection, List, Optional

from .constants import ALLOWED_TAGS, VOID_TAGS


log = logging.getLogger("droptables_l10n")

TextTransform = Callable[[str], str]

RE_TAG_NAME = re.compile(r"^<\s*(/)?\s*([a-zA-Z0-9]+)")
RE_SELF_CLOSING = re.compile(r"/\s*>$")


class MarkupTextWalker:
    """Transform the text of allowed elements, leave markup untouched.

    Examples:
        >>> walker = MarkupTextWalker()
        >>> walker.transform("<p>x</p><td>x</td>", str.upper)
        '<p>x</p><td>X</td>'
    """

    def __init__(
        self,
        allowed_tags: Collection[str] = ALLOWED_TAGS,
        void_tags: Collection[str] = VOID_TAGS,
    ) -> None:
        """Store the element name sets.

        Args:
            allowed_tags: Elements whose text (including text of nested
                elements) is handed to the transform.
            void_tags: Elements that never get a closing tag.
        """
        self.allowed_tags = frozenset(name.lower() for name in allowed_tags)
        self.void_tags = frozenset(name.lower() for name in void_tags)

    def transform(self, markup: str, transform_text: TextTransform) -> str:
        """Return ``markup`` with allowed text runs passed through a transform.

        Args:
            markup: Document to process.
            transform_text: Callable applied to each eligible text run.

        Returns:
            The transformed document. An unterminated tag and everything after
            it are copied unchanged.
        """
        stack: List[str] = []
        out: List[str] = []
        cursor = 0
        size = len(markup)

        while cursor < size:
            lt = markup.find("<", cursor)
            if lt == -1:
                out.append(self._text_run(markup[cursor:], stack, transform_text))
                break

            if lt > cursor:
                out.append(self._text_run(markup[cursor:lt], stack, transform_text))

            gt = markup.find(">", lt + 1)
            if gt == -1:
                log.debug("Unterminated tag at offset %d, copying the remainder.", lt)
                out.append(markup[lt:])
                break

            tag = markup[lt : gt + 1]
            out.append(tag)
            self._track(tag, stack)
            cursor = gt + 1

        return "".join(out)

    def _text_run(
        self, text: str, stack: List[str], transform_text: TextTransform
    ) -> str:
        if self._in_allowed_context(stack):
            return transform_text(text)
        return text

    def _in_allowed_context(self, stack: List[str]) -> bool:
        return any(name in self.allowed_tags for name in stack)

    def _track(self, tag: str, stack: List[str]) -> None:
        """Update the open-element stack for a complete tag.

        Void and self-closing tags leave the stack alone, as do tags without
        a recognizable name (comments, doctype). A closing tag that does not
        match the top of the stack removes the nearest open element of the
        same name, if there is one.
        """
        parsed = parse_tag(tag)
        if parsed is None:
            return
        is_close, name = parsed
        if RE_SELF_CLOSING.search(tag) or name in self.void_tags:
            return

        if not is_close:
            stack.append(name)
            return

        if stack and stack[-1] == name:
            stack.pop()
            return
        for idx in range(len(stack) - 1, -1, -1):
            if stack[idx] == name:
                log.debug("Recovering from misnested </%s>.", name)
                del stack[idx]
                return
        log.debug("Ignoring stray </%s>.", name)


def parse_tag(tag: str) -> Optional[tuple[bool, str]]:
    """Return ``(is_closing, lowercase_name)`` for a tag, or ``None``.

    Examples:
        >>> parse_tag("<TD class='x'>")
        (False, 'td')
        >>> parse_tag("</ b >")
        (True, 'b')
        >>> parse_tag("<!-- note -->") is None
        True
    """
    match = RE_TAG_NAME.match(tag)
    if not match:
        return None
    return bool(match.group(1)), match.group(2).lower()
