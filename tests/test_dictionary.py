from __future__ import annotations

import json

import pytest

from droptables_l10n.dictionary import (
    Language,
    TranslationIndex,
    load_dictionary,
    read_languages,
)


def test_translation_index_maps_source_to_target():
    index = TranslationIndex.from_dictionaries(
        {"/a": "Orokin", "/b": "Forma"}, {"/a": "奥罗金", "/b": "福马"}
    )

    assert dict(index) == {"Orokin": "奥罗金", "Forma": "福马"}
    assert len(index) == 2
    assert "Orokin" in index


def test_translation_index_skips_missing_empty_and_identical():
    index = TranslationIndex.from_dictionaries(
        {
            "/a": "Orokin",
            "/b": "Forma",
            "/c": "Void",
            "/d": "",
            "/e": 7,
            "/f": "Lith",
        },
        {"/a": "", "/c": "Void", "/d": "空", "/e": "七", "/f": None},
    )

    assert len(index) == 0
    assert index.get("Forma") is None


def test_translation_index_keeps_first_duplicate():
    index = TranslationIndex.from_dictionaries(
        {"/a": "Orokin", "/b": "Orokin", "/c": "Orokin"},
        {"/a": "Orokin", "/b": "奥罗金", "/c": "奥罗金 (旧)"},
    )

    assert index["Orokin"] == "奥罗金"


def test_translation_index_drops_identity_and_empty_entries():
    index = TranslationIndex(
        {"Orokin": "奥罗金", "Void": "Void", "Forma": "", "": "空"}
    )

    assert dict(index) == {"Orokin": "奥罗金"}


def test_translation_index_repr_reports_size():
    assert repr(TranslationIndex({"a": "b"})) == "TranslationIndex(1 entries)"


def test_load_dictionary_reads_json_object(tmp_path):
    path = tmp_path / "dict.zh.json"
    path.write_text(
        json.dumps({"/a": "奥罗金"}, ensure_ascii=False), encoding="utf-8"
    )

    assert load_dictionary(path) == {"/a": "奥罗金"}


def test_load_dictionary_rejects_non_object(tmp_path):
    path = tmp_path / "dict.zh.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="JSON object"):
        load_dictionary(path)


def test_load_dictionary_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dictionary(tmp_path / "absent.json")


def test_read_languages_parses_rows(tmp_path):
    path = tmp_path / "languages.csv"
    path.write_text(
        "code, native name, english name\n"
        "en,English,English\n"
        "\n"
        "zh, 中文 ,Chinese\n"
        ",x,y\n",
        encoding="utf-8",
    )

    assert read_languages(path) == [
        Language("en", "English", "English"),
        Language("zh", "中文", "Chinese"),
    ]


def test_read_languages_falls_back_to_code(tmp_path):
    path = tmp_path / "languages.csv"
    path.write_text("code\nde\n", encoding="utf-8")

    assert read_languages(path) == [Language("de", "de", "de")]


def test_read_languages_requires_code_column(tmp_path):
    path = tmp_path / "languages.csv"
    path.write_text("lang,name\nen,English\n", encoding="utf-8")

    with pytest.raises(ValueError, match="missing 'code' column"):
        read_languages(path)
