"""Checksum fetching, normalization and archive verification.

Apache publishes ``<archive>.sha512`` for recent releases and ``<archive>.sha``
for old ones. Recent files use the ``<digest>  <filename>`` layout understood
by ``shasum --check``; old ones were produced by ``gpg --print-md`` and look
like ``<filename>: 5F4184E0 FE7E5C8A ...``, wrapped over several lines in
upper case. Both are normalized to the first layout before verification.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
from typing import List

from constants import Constants
from common.errors import (
    ArchiveDownloadFailed,
    ChecksumFetchFailed,
    ChecksumMismatch,
    InvalidArchiveRequest,
    InvalidChecksumFormat,
)
from common.http_client import fetch_text, first_successful
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from archive.models import ChecksumRecord

logger = logging.getLogger(__name__)

_CANONICAL_LINE = re.compile(r"^([A-Fa-f0-9]+)  (\S.*)$")
_LEGACY_COMPACT = re.compile(r"^([^:]+):([A-Fa-f0-9]+)$")


def construct_archive_url(
    spark_version: str,
    archive_filename: str,
    archive_url: str = Constants.ARCHIVE_URL,
) -> str:
    """Build ``<archive>/spark-<version>/<filename>``."""
    if not spark_version:
        raise InvalidArchiveRequest("Apache Spark version is required.")
    if not archive_filename:
        raise InvalidArchiveRequest("Spark binary archive filename is required.")
    return f"{archive_url}/{Constants.TOOL_NAME}-{spark_version}/{archive_filename}"


def _content_lines(text: str) -> List[str]:
    return [line.rstrip("\r") for line in text.splitlines() if line.strip()]


def normalize_checksum(raw_text: str) -> str:
    """Rewrite checksum file content into ``<digest>  <filename>`` form.

    Canonical content is returned unchanged and empty content yields "".

    Raises:
        InvalidChecksumFormat: content is in neither known layout.
    """
    if not raw_text or not raw_text.strip():
        return ""

    lines = _content_lines(raw_text)
    if all(_CANONICAL_LINE.match(line) for line in lines):
        return raw_text

    match = _LEGACY_COMPACT.match(re.sub(r"\s+", "", raw_text))
    if match:
        filename, digest = match.groups()
        return ChecksumRecord(digest=digest.lower(), filename=filename).to_line()

    raise InvalidChecksumFormat("Checksum content is invalid. Can not parse the hash value.")


def parse_checksum(canonical_text: str) -> List[ChecksumRecord]:
    """Split canonical checksum text into records."""
    records = []
    for line in _content_lines(canonical_text):
        match = _CANONICAL_LINE.match(line)
        if not match:
            raise InvalidChecksumFormat(f"Malformed checksum line: {line!r}")
        digest, filename = match.groups()
        records.append(ChecksumRecord(digest=digest.lower(), filename=filename.strip()))
    return records


def fetch_checksum(config, spark_version: str, archive_filepath: str) -> str:
    """Download and normalize the checksum published for an archive.

    Extensions from ``Constants.CHECKSUM_EXTENSIONS`` are tried in order. When
    none can be fetched the archive is deleted so that an unverified file is
    never left behind.
    """
    archive_filename = os.path.basename(archive_filepath)
    archive_download_url = construct_archive_url(
        spark_version, archive_filename, config.archive_url
    )

    def _fetch(ext: str):
        content = fetch_text(f"{archive_download_url}.{ext}", context="checksum")
        return content if content and content.strip() else None

    found = first_successful(Constants.CHECKSUM_EXTENSIONS, _fetch)
    if found is None:
        try:
            os.remove(archive_filepath)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove %s: %s", archive_filepath, exc)
        raise ChecksumFetchFailed(
            "Can't verify archive checksum. If this error persist, then you can set "
            f"{Constants.ENV_SKIP_VERIFICATION} value to true to skip this verification step."
        )

    ext, content = found
    if is_debug_enabled(logger):
        logger.debug(
            "Fetched checksum",
            extra=extra_context(
                event="checksum_fetch",
                component="checksum",
                action="fetch_checksum",
                extension=ext,
                target=safe_url(archive_download_url)
            )
        )
    return normalize_checksum(content)


def file_digest(path: str, algorithm: str = Constants.CHECKSUM_ALGORITHM) -> str:
    """Hex digest of a file, read in chunks."""
    digest = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(Constants.HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_against(canonical_text: str, archive_filepath: str) -> None:
    """Check a local archive against canonical checksum text.

    Raises:
        InvalidChecksumFormat: the recorded digest is not a SHA-512 digest.
        ChecksumMismatch: no record for the archive, or the digests differ.
    """
    archive_filename = os.path.basename(archive_filepath)
    records = [r for r in parse_checksum(canonical_text) if r.filename == archive_filename]
    if not records:
        raise ChecksumMismatch(
            f"No checksum recorded for {archive_filename}! Abort installation."
        )

    expected = records[0].digest
    if len(expected) != Constants.CHECKSUM_DIGEST_LENGTH:
        raise InvalidChecksumFormat(
            f"Expected a {Constants.CHECKSUM_ALGORITHM} digest for {archive_filename}, "
            f"got {len(expected)} hex characters."
        )

    try:
        actual = file_digest(archive_filepath)
    except OSError as exc:
        raise ArchiveDownloadFailed(f"Could not read {archive_filepath}: {exc}") from exc
    if actual != expected:
        logger.debug("Expected %s, actual %s", expected, actual)
        raise ChecksumMismatch("Checksum validation failed! Abort installation.")


def verify_archive(config, spark_version: str, archive_filepath: str) -> None:
    """Verify a downloaded archive unless verification is switched off."""
    if config.skip_verification:
        logger.warning(
            "Skipping checksum verification of %s", os.path.basename(archive_filepath)
        )
        return

    logger.info("* Verifying %s...", os.path.basename(archive_filepath))
    canonical = fetch_checksum(config, spark_version, archive_filepath)
    verify_against(canonical, archive_filepath)
    logger.info("* %s: OK", os.path.basename(archive_filepath))
