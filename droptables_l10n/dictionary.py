"""Dictionaries keyed by string identifiers and the phrase index built from them."""

from __future__ import annotations

import csv
from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional


log = logging.getLogger("droptables_l10n")


@dataclass(frozen=True)
class Language:
    """Row of the language table.

    Attributes:
        code: Language code used in dictionary and page file names.
        native_name: Name of the language in that language.
        english_name: Name of the language in English.
    """

    code: str
    native_name: str
    english_name: str


class TranslationIndex(Mapping[str, str]):
    """Source phrase to target phrase mapping for one language.

    Both dictionaries map the same opaque identifiers to phrases. For every
    identifier with a non-empty source phrase, the target phrase is recorded
    unless it is missing, empty or identical to the source. When a source
    phrase appears under several identifiers, the first one wins.

    Examples:
        >>> index = TranslationIndex.from_dictionaries(
        ...     {"/a": "Orokin", "/b": "Orokin", "/c": "Void"},
        ...     {"/a": "奥罗金", "/b": "Orokin (alt)", "/c": "Void"},
        ... )
        >>> dict(index)
        {'Orokin': '奥罗金'}
    """

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        """Wrap an existing phrase mapping.

        Entries with an empty key, an empty value or a value equal to its
        key are dropped.

        Args:
            entries: Source phrase to target phrase.
        """
        self._entries: Dict[str, str] = {
            phrase: translation
            for phrase, translation in (entries or {}).items()
            if phrase and translation and translation != phrase
        }

    @classmethod
    def from_dictionaries(
        cls, source: Mapping[str, object], target: Mapping[str, object]
    ) -> "TranslationIndex":
        """Build the index from two identifier-keyed dictionaries.

        Args:
            source: Identifier to source-language phrase.
            target: Identifier to target-language phrase.

        Returns:
            Index holding only meaningful translations.
        """
        entries: Dict[str, str] = {}
        for key, source_phrase in source.items():
            if not isinstance(source_phrase, str) or not source_phrase:
                continue
            target_phrase = target.get(key)
            if not isinstance(target_phrase, str) or not target_phrase:
                continue
            if target_phrase == source_phrase:
                continue
            entries.setdefault(source_phrase, target_phrase)
        return cls(entries)

    def __getitem__(self, phrase: str) -> str:
        return self._entries[phrase]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._entries)} entries)"


def load_dictionary(path: Path) -> Dict[str, object]:
    """Load an identifier-keyed dictionary from a JSON file.

    Args:
        path: JSON file whose top level is an object.

    Returns:
        The decoded mapping.

    Raises:
        OSError: If the file cannot be read.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top level is not an object.
    """
    log.debug("Loading dictionary '%s' ...", path)
    with open(path, encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Dictionary {path} must contain a JSON object.")
    return payload


def read_languages(path: Path) -> List[Language]:
    """Read the language table from a CSV file.

    The file needs a ``code`` column; ``native name`` and ``english name``
    fall back to the code when absent. Rows without a code are skipped.

    Args:
        path: CSV file with a header row.

    Returns:
        Languages in file order.

    Raises:
        ValueError: If the header has no ``code`` column.
    """
    with open(path, encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle, skipinitialspace=True)
        fields = [name.strip() for name in reader.fieldnames or []]
        if "code" not in fields:
            raise ValueError(f"languages.csv missing 'code' column: {path}")
        reader.fieldnames = fields

        languages: List[Language] = []
        for row in reader:
            code = (row.get("code") or "").strip()
            if not code:
                continue
            native = (row.get("native name") or "").strip()
            english = (row.get("english name") or "").strip()
            languages.append(
                Language(
                    code=code,
                    native_name=native or code,
                    english_name=english or code,
                )
            )
    return languages
