"""Build the localized drop-table site from the source page and dictionaries."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup

from .config import make_config
from .constants import DICT_TEMPLATE, LANGUAGES_CSV, PAGE_TEMPLATE
from .dictionary import Language, TranslationIndex, load_dictionary, read_languages
from .markup import MarkupTextWalker
from .matching import MatchAutomaton, build_automaton, build_substitutor


log = logging.getLogger("droptables_l10n")

INDEX_SKELETON = """<!DOCTYPE html>
<html lang="zh">
<head>
<meta charset="UTF-8">
<meta http-equiv="refresh" content="0; url=droptables-zh.html">
<title>Warframe PC Drops (Languages)</title>
</head>
<body>
<p>Language / 语言：</p>
<ul>
</ul>
</body>
</html>
"""


@dataclass(frozen=True)
class LanguageResult:
    """Outcome of building the page of one language.

    Attributes:
        code: Language code.
        path: Written page.
        translations: Number of phrases in the language's translation index.
        replacements: Number of phrases replaced in the page.
    """

    code: str
    path: Path
    translations: int
    replacements: int


@dataclass
class BuildReport:
    """Summary of a site build."""

    output_dir: Path
    pattern_count: int = 0
    languages: List[LanguageResult] = field(default_factory=list)


def read_text(path: Path) -> str:
    """Read a UTF-8 file keeping its line endings untouched."""
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def write_text(path: Path, text: str) -> None:
    """Write a UTF-8 file without translating line endings."""
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def set_document_language(markup: str, code: str, source_language: str = "en") -> str:
    """Replace the first ``<html lang="...">`` opening tag with ``code``."""
    return markup.replace(
        f'<html lang="{source_language}">', f'<html lang="{code}">', 1
    )


def build_index_html(languages: Sequence[Language], default_language: str) -> str:
    """Return the language index page redirecting to the default language.

    Args:
        languages: Languages listed on the page, in order.
        default_language: Code of the page the index redirects to.

    Returns:
        Serialized HTML document.
    """
    soup = BeautifulSoup(INDEX_SKELETON, "html.parser")
    if soup.html is not None:
        soup.html["lang"] = default_language
    refresh = soup.find("meta", attrs={"http-equiv": "refresh"})
    if refresh is not None:
        page = PAGE_TEMPLATE.format(code=default_language)
        refresh["content"] = f"0; url={page}"

    listing = soup.find("ul")
    if listing is not None:
        for language in languages:
            item = soup.new_tag("li")
            link = soup.new_tag("a", href=PAGE_TEMPLATE.format(code=language.code))
            link.string = language.native_name
            item.append(link)
            listing.append("\n")
            listing.append(item)
        listing.append("\n")
    return str(soup)


def localize_page(
    markup: str,
    automaton: MatchAutomaton,
    translations: Mapping[str, str],
    walker: Optional[MarkupTextWalker] = None,
) -> tuple[str, int]:
    """Translate the allowed text runs of a page.

    Args:
        markup: Source-language page.
        automaton: Matcher built from the source-language dictionary.
        translations: Phrase index of the target language.
        walker: Walker holding the element sets. Defaults to the standard one.

    Returns:
        The localized page and the number of replaced phrases.
    """
    substitutor = build_substitutor(automaton, translations)
    walker = walker or MarkupTextWalker()
    localized = walker.transform(markup, substitutor)
    return localized, substitutor.replacement_count


def localize_file(
    page: Path,
    code: str,
    repo_root: Path,
    config: Optional[SimpleNamespace] = None,
) -> tuple[str, int]:
    """Localize a single page with the dictionaries found under ``repo_root``.

    Args:
        page: Source-language page to translate.
        code: Target language code.
        repo_root: Directory holding the dictionary data directory.
        config: Run configuration, see :func:`~droptables_l10n.config.make_config`.

    Returns:
        The localized page and the number of replaced phrases.
    """
    cfg = config or make_config()
    data_dir = Path(repo_root) / cfg.data_dir
    markup = set_document_language(read_text(page), code, cfg.source_language)
    if code == cfg.source_language:
        return markup, 0

    source = load_dictionary(data_dir / DICT_TEMPLATE.format(code=cfg.source_language))
    target = load_dictionary(data_dir / DICT_TEMPLATE.format(code=code))
    automaton = build_automaton(source.values())
    translations = TranslationIndex.from_dictionaries(source, target)
    walker = MarkupTextWalker(cfg.allowed_tags, cfg.void_tags)
    return localize_page(markup, automaton, translations, walker)


def build_site(
    repo_root: Path,
    output_dir: Path | str | None = None,
    config: Optional[SimpleNamespace] = None,
) -> BuildReport:
    """Write one localized page per language plus the index page.

    The automaton is built once from the source-language dictionary and
    reused for every language.

    Args:
        repo_root: Directory containing the source page and the data directory.
        output_dir: Destination directory, relative to ``repo_root`` unless
            absolute. Defaults to ``config.output_dir``.
        config: Run configuration, see :func:`~droptables_l10n.config.make_config`.

    Returns:
        Report listing the written pages.

    Raises:
        OSError: If an input file cannot be read or an output written.
        ValueError: If the language table or a dictionary is malformed.
    """
    cfg = config or make_config()
    root = Path(repo_root)
    data_dir = root / cfg.data_dir
    out_dir = root / (output_dir if output_dir is not None else cfg.output_dir)

    languages = read_languages(data_dir / LANGUAGES_CSV)
    source_markup = read_text(root / cfg.source_page)
    source = load_dictionary(data_dir / DICT_TEMPLATE.format(code=cfg.source_language))

    automaton = build_automaton(source.values())
    log.info(
        "Indexed %d patterns (%d automaton nodes).",
        len(automaton.patterns),
        automaton.node_count,
    )

    out_dir.mkdir(parents=True, exist_ok=True)
    write_text(
        out_dir / "index.html", build_index_html(languages, cfg.default_language)
    )
    write_text(out_dir / ".nojekyll", "")

    report = BuildReport(output_dir=out_dir, pattern_count=len(automaton.patterns))
    walker = MarkupTextWalker(cfg.allowed_tags, cfg.void_tags)

    for language in languages:
        code = language.code
        target_path = out_dir / PAGE_TEMPLATE.format(code=code)
        markup = set_document_language(source_markup, code, cfg.source_language)

        if code == cfg.source_language:
            write_text(target_path, markup)
            report.languages.append(LanguageResult(code, target_path, 0, 0))
            continue

        target = load_dictionary(data_dir / DICT_TEMPLATE.format(code=code))
        translations = TranslationIndex.from_dictionaries(source, target)
        if not translations:
            log.warning("No translations found for language '%s'.", code)

        localized, count = localize_page(markup, automaton, translations, walker)
        write_text(target_path, localized)
        log.info("Wrote %s (%d replacements).", target_path.name, count)
        report.languages.append(
            LanguageResult(code, target_path, len(translations), count)
        )

    return report
