"""Pick the binary archive to install for a version and user preferences."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List

from packaging import version as pkg_version

from constants import Constants, InstallTypes
from common.errors import UnsupportedInstallType, VariantUnavailable
from common.logging_utils import extra_context, is_debug_enabled
from archive.models import SelectionPreferences

logger = logging.getLogger(__name__)


def _archive_prefix(spark_version: str) -> str:
    return f"{Constants.TOOL_NAME}-{spark_version}-bin-"


def without_hadoop_filename(spark_version: str) -> str:
    """Filename of the build shipped without bundled hadoop."""
    return f"{_archive_prefix(spark_version)}without-hadoop.tgz"


def hadoop_filename(spark_version: str, hadoop_version: str) -> str:
    """Filename of the build bundling ``hadoop_version``."""
    return f"{_archive_prefix(spark_version)}hadoop{hadoop_version}.tgz"


def _bundled_hadoop_candidates(spark_version: str, scanned: Iterable[str]) -> List[tuple]:
    pattern = re.compile(
        rf"^{re.escape(_archive_prefix(spark_version))}hadoop([0-9](?:\.[0-9])?)\.tgz$"
    )
    candidates = []
    for filename in scanned:
        for token in filename.split():
            match = pattern.match(token)
            if match:
                candidates.append((pkg_version.Version(match.group(1)), token))
    return candidates


def select_variant(
    install_type: str,
    spark_version: str,
    preferences: SelectionPreferences,
    scanned: Iterable[str],
) -> str:
    """Select exactly one archive filename.

    Priority: the without-hadoop build when preferred, then the exact custom
    hadoop build when requested, else the build bundling the highest hadoop
    version.

    Raises:
        UnsupportedInstallType: install_type is not "version".
        VariantUnavailable: nothing satisfies the active constraint.
    """
    if install_type != InstallTypes.VERSION.value:
        raise UnsupportedInstallType(
            f"{Constants.PLUGIN_NAME} only supports version release installation"
        )

    scanned = list(scanned)

    if preferences.without_hadoop:
        wanted = without_hadoop_filename(spark_version)
        if wanted in scanned:
            return wanted
        raise VariantUnavailable(
            f"Apache Spark {spark_version} does not have without-hadoop archive."
        )

    if preferences.hadoop_version:
        wanted = hadoop_filename(spark_version, preferences.hadoop_version)
        if wanted in scanned:
            return wanted
        raise VariantUnavailable(
            f"Unfortunately, Apache Spark {spark_version} with Hadoop "
            f"{preferences.hadoop_version} is not available yet."
        )

    candidates = _bundled_hadoop_candidates(spark_version, scanned)
    if not candidates:
        raise VariantUnavailable(
            f"Unfortunately, Apache Spark {spark_version} does not provide "
            "hadoop support prebuilt binary archive."
        )

    _, selected = max(candidates)
    if is_debug_enabled(logger):
        logger.debug(
            "Selected bundled hadoop archive",
            extra=extra_context(
                event="decision",
                component="selector",
                action="select_variant",
                candidate_count=len(candidates),
                selected=selected
            )
        )
    return selected
