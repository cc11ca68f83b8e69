"""Refresh the source page and rebuild the site when it changed."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import hashlib
import logging
import os
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Optional

import requests

from .config import make_config
from .site import BuildReport, build_site, read_text, write_text


log = logging.getLogger("droptables_l10n")


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of an update run.

    Attributes:
        changed: Whether the downloaded page differs from the stored one.
        old_hash: SHA-256 of the stored page, ``None`` when there was none.
        fresh_hash: SHA-256 of the downloaded page.
        built: Whether the site was rebuilt.
    """

    changed: bool
    old_hash: Optional[str]
    fresh_hash: str
    built: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def sha256(text: str) -> str:
    """Return the hex SHA-256 digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def download(
    url: str, session: Optional[requests.Session] = None, timeout: int = 60
) -> str:
    """Download a page and decode it as UTF-8.

    Invalid byte sequences are replaced with U+FFFD.

    Args:
        url: Address of the page; redirects are followed.
        session: Optional ``requests.Session`` to reuse connections.
        timeout: Timeout in seconds.

    Returns:
        The decoded page.

    Raises:
        requests.HTTPError: If the server answers with an error status.
    """
    log.info("Downloading %s ...", url)
    if session is None:
        with requests.Session() as client:
            response = client.get(url, timeout=timeout, allow_redirects=True)
    else:
        response = session.get(url, timeout=timeout, allow_redirects=True)
    response.raise_for_status()
    return response.content.decode("utf-8", errors="replace")


def update_and_build(
    repo_root: Path,
    *,
    url: Optional[str] = None,
    output_dir: Path | str | None = None,
    force: bool = False,
    session: Optional[requests.Session] = None,
    timeout: int = 60,
    config: Optional[SimpleNamespace] = None,
) -> UpdateResult:
    """Download the source page, store it when changed and rebuild the site.

    The site is rebuilt when the page changed, when ``force`` is set, or when
    the output directory does not exist yet. When the ``GITHUB_OUTPUT``
    environment variable names a file, a ``changed=true|false`` line is
    appended to it.

    Args:
        repo_root: Directory holding the source page and the data directory.
        url: Page address. Defaults to ``config.url``.
        output_dir: Site directory. Defaults to ``config.output_dir``.
        force: Rebuild even when nothing changed.
        session: Optional HTTP session.
        timeout: HTTP timeout in seconds.
        config: Run configuration, see :func:`~droptables_l10n.config.make_config`.

    Returns:
        Hashes of the stored and downloaded pages and what was done.
    """
    cfg = config or make_config()
    root = Path(repo_root)
    page_path = root / cfg.source_page
    target_dir = output_dir if output_dir is not None else cfg.output_dir
    out_dir = root / target_dir

    fresh = download(url or cfg.url, session=session, timeout=timeout)
    fresh_hash = sha256(fresh)

    old_hash: Optional[str] = None
    if page_path.exists():
        old_hash = sha256(read_text(page_path))

    changed = old_hash != fresh_hash
    if changed:
        log.info("Source page changed, writing %s.", page_path.name)
        write_text(page_path, fresh)

    built = False
    if changed or force or not out_dir.exists():
        report: BuildReport = build_site(root, target_dir, cfg)
        log.info("Built %d pages in %s.", len(report.languages), report.output_dir)
        built = True

    github_output = os.environ.get("GITHUB_OUTPUT")
    if github_output:
        with open(github_output, "a", encoding="utf-8") as handle:
            handle.write(f"changed={'true' if changed else 'false'}\n")

    return UpdateResult(
        changed=changed, old_hash=old_hash, fresh_hash=fresh_hash, built=built
    )
