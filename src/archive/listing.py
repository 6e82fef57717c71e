"""Version and variant discovery from the Apache archive HTML listings."""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from typing import Iterable, List, Optional

from packaging import version as pkg_version

from constants import Constants
from common.http_client import fetch_text
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

_VERSION_HREF = re.compile(
    rf"^{Constants.TOOL_NAME}-([0-9]+\.[0-9]+\.[0-9]+(?:-[a-z0-9]+)?)/$"
)


class _AnchorParser(HTMLParser):
    """Collect the href of every <a> tag in document order."""

    def __init__(self):
        super().__init__()
        self.hrefs: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag != "a":
            return
        for key, value in attrs:
            if key == "href" and value:
                self.hrefs.append(value)


def _anchor_hrefs(html: str) -> List[str]:
    parser = _AnchorParser()
    parser.feed(html)
    parser.close()
    return parser.hrefs


def list_versions(html: Optional[str]) -> List[str]:
    """Extract published versions from the archive root listing.

    Args:
        html: Raw HTML of the archive root; empty when the fetch failed.

    Returns:
        Version strings in document order; empty when nothing matches.
    """
    if not html:
        return []
    versions = []
    for href in _anchor_hrefs(html):
        match = _VERSION_HREF.match(href)
        if match:
            versions.append(match.group(1))
    return versions


def scan_variants(version: str, html: Optional[str]) -> List[str]:
    """Extract ``spark-<version>-bin-*.tgz`` filenames from a release listing."""
    if not html:
        return []
    pattern = re.compile(
        rf"^{Constants.TOOL_NAME}-{re.escape(version)}-bin-.+\.tgz$"
    )
    variants = [href for href in _anchor_hrefs(html) if pattern.match(href)]
    if is_debug_enabled(logger):
        logger.debug(
            "Scanned release listing",
            extra=extra_context(
                event="parse",
                component="listing",
                action="scan_variants",
                version=version,
                count=len(variants)
            )
        )
    return variants


def latest_stable(versions: Iterable[str], query: str = "") -> Optional[str]:
    """Return the highest version without a pre-release tag.

    Args:
        versions: Candidate version strings.
        query: Optional prefix the version must start with (e.g. "3.2").
    """
    best = None
    best_parsed = None
    for candidate in versions:
        if "-" in candidate or not candidate.startswith(query):
            continue
        try:
            parsed = pkg_version.Version(candidate)
        except pkg_version.InvalidVersion:
            continue
        if best_parsed is None or parsed > best_parsed:
            best, best_parsed = candidate, parsed
    return best


def fetch_versions(archive_url: str = Constants.ARCHIVE_URL) -> List[str]:
    """Fetch the archive root and list its versions (empty on transport failure)."""
    html = fetch_text(f"{archive_url}/", context="version listing")
    return list_versions(html or "")


def fetch_release_listing(version: str, archive_url: str = Constants.ARCHIVE_URL) -> str:
    """Fetch the per-version listing HTML, or "" when unavailable."""
    html = fetch_text(
        f"{archive_url}/{Constants.TOOL_NAME}-{version}/",
        context="release listing",
    )
    return html or ""
