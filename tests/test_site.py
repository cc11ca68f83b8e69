from __future__ import annotations

import json
import logging

from bs4 import BeautifulSoup
import pytest

from conftest import SOURCE_HTML
from droptables_l10n.config import make_config
from droptables_l10n.constants import DATA_DIR
from droptables_l10n.dictionary import Language
from droptables_l10n.markup import MarkupTextWalker
from droptables_l10n.matching import MatchAutomaton
from droptables_l10n.site import (
    build_index_html,
    build_site,
    localize_file,
    localize_page,
    read_text,
    set_document_language,
    write_text,
)


EXPECTED_ZH = """<!DOCTYPE html>
<html lang="zh">
<head><meta charset="utf-8"><title>Orokin Vault drops</title></head>
<body>
<h3>奥罗金宝库</h3>
<table>
<tr><th>奥罗金</th><td>福马蓝图</td><td>Rare (2.00%)</td></tr>
<tr><td><b>DRAGON</b> 开</td></tr>
</table>
<p>Orokin Vault</p>
</body>
</html>
"""


def test_build_site_writes_every_language(sample_repo):
    report = build_site(sample_repo)
    site = sample_repo / "site"

    assert report.output_dir == site
    assert [entry.code for entry in report.languages] == ["en", "zh", "fr"]
    assert (site / "droptables-zh.html").read_text(encoding="utf-8") == EXPECTED_ZH
    assert (site / ".nojekyll").read_text(encoding="utf-8") == ""
    assert (site / "index.html").exists()


def test_build_site_keeps_source_language_page(sample_repo):
    build_site(sample_repo)

    english = (sample_repo / "site" / "droptables-en.html").read_text(encoding="utf-8")

    assert english == SOURCE_HTML


def test_build_site_skips_identical_translations(sample_repo):
    report = build_site(sample_repo)

    french = (sample_repo / "site" / "droptables-fr.html").read_text(encoding="utf-8")
    fr_result = report.languages[2]

    assert '<html lang="fr">' in french
    assert "<h3>Coffre Orokin</h3>" in french
    assert "<th>Orokin</th>" in french
    assert fr_result.translations == 1
    assert fr_result.replacements == 1


def test_build_site_reports_counts(sample_repo):
    report = build_site(sample_repo)
    zh_result = report.languages[1]

    # "IV" is filtered out of the patterns
    assert report.pattern_count == 5
    assert zh_result.translations == 4
    assert zh_result.replacements == 4
    assert zh_result.path.name == "droptables-zh.html"


def test_build_site_custom_output_dir(sample_repo, tmp_path):
    target = tmp_path / "elsewhere"

    report = build_site(sample_repo, target)

    assert report.output_dir == target
    assert (target / "droptables-zh.html").exists()


def test_build_site_warns_on_empty_translation_index(sample_repo, caplog):
    (sample_repo / DATA_DIR / "dict.fr.json").write_text("{}", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="droptables_l10n"):
        build_site(sample_repo)

    assert "No translations found for language 'fr'" in caplog.text
    french = (sample_repo / "site" / "droptables-fr.html").read_text(encoding="utf-8")
    assert french == SOURCE_HTML.replace('<html lang="en">', '<html lang="fr">')


def test_build_site_missing_dictionary_raises(sample_repo):
    (sample_repo / DATA_DIR / "dict.fr.json").unlink()

    with pytest.raises(FileNotFoundError):
        build_site(sample_repo)


def test_index_page_lists_languages(sample_repo):
    build_site(sample_repo, config=make_config(default_language="fr"))

    html = (sample_repo / "site" / "index.html").read_text(encoding="utf-8")
    soup = BeautifulSoup(html, "html.parser")

    links = [(a["href"], a.get_text()) for a in soup.find_all("a")]
    assert links == [
        ("droptables-en.html", "English"),
        ("droptables-zh.html", "中文"),
        ("droptables-fr.html", "Français"),
    ]
    assert soup.html["lang"] == "fr"
    refresh = soup.find("meta", attrs={"http-equiv": "refresh"})
    assert refresh["content"] == "0; url=droptables-fr.html"


def test_index_page_escapes_native_names():
    html = build_index_html([Language("xx", "<b>&</b>", "Test")], "xx")

    assert "&lt;b&gt;&amp;&lt;/b&gt;" in html
    assert html.startswith("<!DOCTYPE html>")


def test_set_document_language_replaces_first_occurrence():
    markup = '<html lang="en"><p><html lang="en"></p>'

    assert (
        set_document_language(markup, "ko")
        == '<html lang="ko"><p><html lang="en"></p>'
    )


def test_localize_page_counts_replacements():
    automaton = MatchAutomaton(["Orokin"])

    localized, count = localize_page(
        "<td>Orokin</td><p>Orokin</p>", automaton, {"Orokin": "奥罗金"}
    )

    assert localized == "<td>奥罗金</td><p>Orokin</p>"
    assert count == 1


def test_localize_page_with_custom_walker():
    automaton = MatchAutomaton(["Orokin"])
    walker = MarkupTextWalker(allowed_tags={"p"})

    localized, _ = localize_page(
        "<td>Orokin</td><p>Orokin</p>", automaton, {"Orokin": "奥罗金"}, walker
    )

    assert localized == "<td>Orokin</td><p>奥罗金</p>"


def test_localize_file_translates_single_page(sample_repo):
    localized, count = localize_file(
        sample_repo / "droptables-en.html", "zh", sample_repo
    )

    assert localized == EXPECTED_ZH
    assert count == 4


def test_localize_file_source_language_is_passthrough(sample_repo):
    localized, count = localize_file(
        sample_repo / "droptables-en.html", "en", sample_repo
    )

    assert localized == SOURCE_HTML
    assert count == 0


def test_text_helpers_preserve_line_endings(tmp_path):
    path = tmp_path / "page.html"

    write_text(path, "<td>a</td>\r\n<td>b</td>\n")

    assert read_text(path) == "<td>a</td>\r\n<td>b</td>\n"
    assert path.read_bytes() == b"<td>a</td>\r\n<td>b</td>\n"


def test_build_site_rejects_non_object_dictionary(sample_repo):
    (sample_repo / DATA_DIR / "dict.zh.json").write_text(
        json.dumps(["x"]), encoding="utf-8"
    )

    with pytest.raises(ValueError):
        build_site(sample_repo)
