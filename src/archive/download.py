"""The asdf ``download`` command: fetch, verify and unpack a release archive."""

from __future__ import annotations

import logging
import os
import tarfile
from typing import Callable, List, Optional

import requests

from common.errors import ArchiveDownloadFailed
from common.http_client import stream_to_file
from common.logging_utils import safe_url
from archive.checksum import construct_archive_url, verify_archive
from archive.listing import fetch_release_listing, scan_variants
from archive.selector import select_variant

logger = logging.getLogger(__name__)


def download_archive(download_url: str, target_filepath: str) -> None:
    """Download an archive, resuming a partial file left by an earlier run."""
    logger.info("* Downloading %s...", os.path.basename(target_filepath))
    try:
        stream_to_file(download_url, target_filepath)
    except (requests.RequestException, OSError) as exc:
        raise ArchiveDownloadFailed(
            f"Could not download {safe_url(download_url)}: {exc}"
        ) from exc


def _stripped_members(tar: tarfile.TarFile, dest_dir: str) -> List[tarfile.TarInfo]:
    """Members with their top-level directory removed, refusing path escapes."""
    root = os.path.realpath(dest_dir)
    members = []
    for member in tar.getmembers():
        parts = member.name.replace("\\", "/").split("/", 1)
        if len(parts) < 2 or not parts[1].strip("/"):
            continue
        member.name = parts[1]
        target = os.path.realpath(os.path.join(root, member.name))
        if os.path.isabs(member.name) or os.path.commonpath([root, target]) != root:
            raise ArchiveDownloadFailed(f"Refusing to extract {member.name!r} outside {dest_dir}")
        if member.islnk():
            link_parts = member.linkname.split("/", 1)
            member.linkname = link_parts[1] if len(link_parts) == 2 else member.linkname
        members.append(member)
    return members


def extract_archive(archive_path: str, dest_dir: str) -> None:
    """Unpack a .tgz into ``dest_dir`` without its top-level directory."""
    os.makedirs(dest_dir, exist_ok=True)
    try:
        with tarfile.open(archive_path, "r:gz") as tar:
            members = _stripped_members(tar, dest_dir)
            tar.extractall(dest_dir, members=members, filter="tar")
    except (tarfile.TarError, OSError) as exc:
        raise ArchiveDownloadFailed(f"Could not extract {archive_path}: {exc}") from exc


def download(config, fetch_listing: Optional[Callable[[str, str], str]] = None) -> str:
    """Resolve, download, verify and unpack the configured version.

    Args:
        config: PluginConfig of the current invocation.
        fetch_listing: Replacement for the per-version listing fetch.

    Returns:
        Name of the archive that was installed into the download path.
    """
    fetch_listing = fetch_listing or fetch_release_listing
    spark_version = config.install_version

    html = fetch_listing(spark_version, config.archive_url)
    variants = scan_variants(spark_version, html)
    archive_filename = select_variant(
        config.install_type, spark_version, config.preferences, variants
    )

    try:
        os.makedirs(config.download_path, exist_ok=True)
    except OSError as exc:
        raise ArchiveDownloadFailed(
            f"Could not prepare download path {config.download_path}: {exc}"
        ) from exc
    archive_filepath = os.path.join(config.download_path, archive_filename)
    download_archive(
        construct_archive_url(spark_version, archive_filename, config.archive_url),
        archive_filepath,
    )
    verify_archive(config, spark_version, archive_filepath)

    extract_archive(archive_filepath, config.download_path)
    try:
        os.remove(archive_filepath)
    except OSError as exc:
        raise ArchiveDownloadFailed(f"Could not remove {archive_filepath}: {exc}") from exc
    logger.info("* Extracted %s into %s", archive_filename, config.download_path)
    return archive_filename
