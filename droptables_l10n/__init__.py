"""Public package exports for ``droptables_l10n``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .dictionary import Language, TranslationIndex
from .markup import MarkupTextWalker
from .matching import BoundaryPolicy, MatchAutomaton, Substitutor, collect_patterns


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .site import build_site
    from .update import update_and_build

__all__ = [
    "BoundaryPolicy",
    "Language",
    "MarkupTextWalker",
    "MatchAutomaton",
    "Substitutor",
    "TranslationIndex",
    "build_site",
    "collect_patterns",
    "update_and_build",
]


def __getattr__(name: str) -> Any:
    """
    Lazily import the I/O layer.

    ``droptables_l10n.site`` pulls in BeautifulSoup and ``droptables_l10n.update``
    pulls in requests. The matching core stays importable without them.
    """
    if name == "build_site":
        from .site import build_site

        return build_site
    if name == "update_and_build":
        from .update import update_and_build

        return update_and_build
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
