from __future__ import annotations

import json
from pathlib import Path
import sys

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from droptables_l10n.constants import DATA_DIR, SOURCE_PAGE
from droptables_l10n.matching import MatchAutomaton, Substitutor, collect_patterns


SOURCE_HTML = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Orokin Vault drops</title></head>
<body>
<h3>Orokin Vault</h3>
<table>
<tr><th>Orokin</th><td>Forma Blueprint</td><td>Rare (2.00%)</td></tr>
<tr><td><b>DRAGON</b> ON</td></tr>
</table>
<p>Orokin Vault</p>
</body>
</html>
"""

EN_DICT = {
    "/Lotus/Vault": "Orokin Vault",
    "/Lotus/Orokin": "Orokin",
    "/Lotus/Forma": "Forma Blueprint",
    "/Lotus/On": "ON",
    "/Lotus/Rare": "Rare",
    "/Lotus/Four": "IV",
}

ZH_DICT = {
    "/Lotus/Vault": "奥罗金宝库",
    "/Lotus/Orokin": "奥罗金",
    "/Lotus/Forma": "福马蓝图",
    "/Lotus/On": "开",
}

FR_DICT = {
    "/Lotus/Vault": "Coffre Orokin",
    "/Lotus/Orokin": "Orokin",
}

LANGUAGES_CSV = (
    "code,native name,english name\n"
    "en,English,English\n"
    "zh,中文,Chinese\n"
    "fr,Français,French\n"
)


@pytest.fixture
def substitutor_factory():
    def factory(translations, patterns=None, **kwargs):
        candidates = patterns if patterns is not None else translations.keys()
        automaton = MatchAutomaton(collect_patterns(candidates))
        return Substitutor(automaton, translations, **kwargs)

    return factory


@pytest.fixture
def sample_repo(tmp_path):
    data_dir = tmp_path / DATA_DIR
    (data_dir / "supplementals").mkdir(parents=True)
    (data_dir / "supplementals" / "languages.csv").write_text(
        LANGUAGES_CSV, encoding="utf-8"
    )
    for code, payload in (("en", EN_DICT), ("zh", ZH_DICT), ("fr", FR_DICT)):
        (data_dir / f"dict.{code}.json").write_text(
            json.dumps(payload, ensure_ascii=False), encoding="utf-8"
        )
    (tmp_path / SOURCE_PAGE).write_text(SOURCE_HTML, encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def no_github_output(monkeypatch):
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
