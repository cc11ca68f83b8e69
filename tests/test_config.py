from __future__ import annotations

import pytest

from droptables_l10n.config import make_config
from droptables_l10n.constants import ALLOWED_TAGS, DEFAULT_LANGUAGE, VOID_TAGS


def test_make_config_defaults():
    config = make_config()

    assert config.allowed_tags == ALLOWED_TAGS == {"th", "td", "a", "h3", "b"}
    assert config.void_tags == VOID_TAGS
    assert config.default_language == DEFAULT_LANGUAGE
    assert config.source_language == "en"
    assert config.output_dir == "site"


def test_make_config_overrides():
    config = make_config(default_language="fr", output_dir="public")

    assert config.default_language == "fr"
    assert config.output_dir == "public"


def test_make_config_rejects_unknown_keys():
    with pytest.raises(TypeError, match="summary"):
        make_config(summary=True)
