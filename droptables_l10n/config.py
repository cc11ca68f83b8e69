"""Run configuration for the site builder and the command line."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from .constants import (
    ALLOWED_TAGS,
    DATA_DIR,
    DEFAULT_LANGUAGE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_URL,
    SOURCE_LANGUAGE,
    SOURCE_PAGE,
    VOID_TAGS,
)


def make_config(**overrides: Any) -> SimpleNamespace:
    """Create a configuration namespace filled with the default settings.

    Args:
        **overrides: Values replacing the defaults of the same name.

    Returns:
        Namespace exposing every setting as an attribute.

    Raises:
        TypeError: If an override does not name a known setting.

    Examples:
        >>> make_config(default_language="fr").default_language
        'fr'
    """
    defaults: dict[str, Any] = {
        "allowed_tags": ALLOWED_TAGS,
        "void_tags": VOID_TAGS,
        "source_language": SOURCE_LANGUAGE,
        "default_language": DEFAULT_LANGUAGE,
        "data_dir": DATA_DIR,
        "source_page": SOURCE_PAGE,
        "output_dir": DEFAULT_OUTPUT_DIR,
        "url": DEFAULT_URL,
    }
    unknown = set(overrides) - set(defaults)
    if unknown:
        raise TypeError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    defaults.update(overrides)
    return SimpleNamespace(**defaults)
