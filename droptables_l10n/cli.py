"""Command-line entry point for droptables-l10n."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Iterable

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import make_config
from .constants import DEFAULT_LANGUAGE, DEFAULT_OUTPUT_DIR, DEFAULT_URL
from .site import BuildReport, build_site, localize_file, write_text
from .update import update_and_build


log = logging.getLogger("droptables_l10n")


def main(argv: Iterable[str] | None = None) -> int:
    """Execute the command-line interface.

    Args:
        argv: Optional iterable overriding ``sys.argv``.

    Returns:
        Exit code (zero on success, non-zero on error or misuse).
    """
    parser = argparse.ArgumentParser(
        prog="droptables-l10n",
        description="Localize the Warframe drop tables page into every language.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _configure_build_parser(subparsers)
    _configure_update_parser(subparsers)
    _configure_localize_parser(subparsers)

    args = parser.parse_args(list(argv) if argv is not None else None)

    if not getattr(args, "handler", None):
        parser.print_help(sys.stderr)
        return 1

    _configure_logging(getattr(args, "quiet", False))
    return args.handler(args)


def _configure_logging(quiet: bool) -> None:
    """Route package logs to stderr through rich."""
    log.setLevel(logging.WARNING if quiet else logging.INFO)
    if not any(isinstance(handler, RichHandler) for handler in log.handlers):
        handler = RichHandler(
            console=Console(stderr=True), show_time=False, show_path=False
        )
        log.addHandler(handler)


def _add_repo_root(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=Path,
        default=Path("."),
        help="Directory holding the source page and dictionaries (default: .).",
    )


def _configure_build_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``build`` sub-command on the provided subparsers object.

    Args:
        subparsers: Sub-parser factory returned by ``ArgumentParser.add_subparsers``.
    """
    build_parser = subparsers.add_parser(
        "build", help="Generate one localized page per language."
    )
    _add_repo_root(build_parser)
    build_parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Site directory relative to the repository (default: %(default)s).",
    )
    build_parser.add_argument(
        "--default-language",
        default=DEFAULT_LANGUAGE,
        help="Language the index page redirects to (default: %(default)s).",
    )
    build_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the number of replacements per language.",
    )
    build_parser.add_argument(
        "--quiet", action="store_true", help="Silence progress messages."
    )
    build_parser.set_defaults(handler=_run_build)


def _run_build(args: argparse.Namespace) -> int:
    """Run the ``build`` sub-command and return an exit code.

    Args:
        args: Parsed arguments produced by the CLI.

    Returns:
        Exit code signaling success or failure.
    """
    config = make_config(
        output_dir=args.output_dir, default_language=args.default_language
    )
    try:
        report = build_site(args.repo_root, config=config)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.summary:
        _print_summary(report)
    if not args.quiet:
        print(f"Generated site: {report.output_dir}")
    return 0


def _configure_update_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``update`` sub-command downloading the source page."""

    update_parser = subparsers.add_parser(
        "update", help="Download the source page and rebuild the site if it changed."
    )
    _add_repo_root(update_parser)
    update_parser.add_argument(
        "--url", default=DEFAULT_URL, help="Source page (default: %(default)s)."
    )
    update_parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Site directory relative to the repository (default: %(default)s).",
    )
    update_parser.add_argument(
        "--force",
        action="store_true",
        help="Rebuild the site even when the page did not change.",
    )
    update_parser.set_defaults(handler=_run_update)


def _run_update(args: argparse.Namespace) -> int:
    """Run the ``update`` sub-command and print the JSON outcome."""

    try:
        result = update_and_build(
            args.repo_root, url=args.url, output_dir=args.output_dir, force=args.force
        )
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


def _configure_localize_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``localize`` sub-command translating a single page."""

    localize_parser = subparsers.add_parser(
        "localize", help="Localize one page and write it to stdout or a file."
    )
    localize_parser.add_argument("page", type=Path, help="Source-language page.")
    localize_parser.add_argument(
        "--lang", required=True, help="Target language code."
    )
    _add_repo_root(localize_parser)
    localize_parser.add_argument(
        "--output", type=Path, help="Destination file (defaults to stdout)."
    )
    localize_parser.add_argument(
        "--quiet", action="store_true", help="Silence progress messages."
    )
    localize_parser.set_defaults(handler=_run_localize)


def _run_localize(args: argparse.Namespace) -> int:
    """Run the ``localize`` sub-command."""

    try:
        localized, count = localize_file(args.page, args.lang, args.repo_root)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.output is None:
        sys.stdout.write(localized)
        return 0

    write_text(args.output, localized)
    if not args.quiet:
        print(f"Localized {args.page} → {args.output} ({count} replacement(s))")
    return 0


def _print_summary(report: BuildReport) -> None:
    """Display the per-language replacement counts as a table."""
    table = Table(
        title=f"Localized pages ({report.pattern_count} patterns)",
        title_style="bold bright_white",
        header_style="bold magenta",
        box=box.ROUNDED,
        border_style="grey50",
        pad_edge=False,
        padding=(0, 1),
    )
    table.add_column("Language", style="cyan", no_wrap=True)
    table.add_column("Page", style="green")
    table.add_column("Translations", justify="right")
    table.add_column("Replacements", justify="right")

    for entry in report.languages:
        table.add_row(
            entry.code,
            entry.path.name,
            str(entry.translations),
            str(entry.replacements),
        )

    Console().print(table)
