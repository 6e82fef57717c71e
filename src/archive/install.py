"""The asdf ``install`` command."""

from __future__ import annotations

import logging
import os
import shutil

from constants import Constants, InstallTypes
from common.errors import InstallAssertionFailed, PluginError, UnsupportedInstallType

logger = logging.getLogger(__name__)


def tool_executable(install_path: str) -> str:
    """Path of the executable whose presence proves a usable install."""
    return os.path.join(install_path, "bin", Constants.TOOL_TEST.split(" ", 1)[0])


def _copy_tree(source_dir: str, install_path: str) -> None:
    os.makedirs(install_path, exist_ok=True)
    for entry in os.listdir(source_dir):
        source = os.path.join(source_dir, entry)
        target = os.path.join(install_path, entry)
        if os.path.isdir(source) and not os.path.islink(source):
            shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
        else:
            shutil.copy2(source, target, follow_symlinks=False)


def install_version(install_type: str, version: str, install_path: str, download_path: str) -> None:
    """Copy the extracted release into ``install_path``.

    The install is all-or-nothing: on any failure ``install_path`` is removed
    before the error propagates.

    Raises:
        UnsupportedInstallType: install_type is not "version".
        InstallAssertionFailed: copy failed or the executable is unusable.
    """
    if install_type != InstallTypes.VERSION.value:
        raise UnsupportedInstallType(
            f"{Constants.PLUGIN_NAME} only supports version release installation"
        )

    try:
        _copy_tree(download_path, install_path)

        executable = tool_executable(install_path)
        if not (os.path.isfile(executable) and os.access(executable, os.X_OK)):
            raise InstallAssertionFailed(f"Expected {executable} to be executable.")
    except (PluginError, OSError) as exc:
        shutil.rmtree(install_path, ignore_errors=True)
        if isinstance(exc, PluginError):
            raise
        raise InstallAssertionFailed(
            f"An error occurred while installing {Constants.TOOL_NAME}-{version}: {exc}"
        ) from exc

    logger.info("%s-%s installation was successful!", Constants.TOOL_NAME, version)


def install(config) -> None:
    """Run the installer for the configured version."""
    install_version(
        config.install_type,
        config.install_version,
        config.install_path,
        config.download_path,
    )
