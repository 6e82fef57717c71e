"""Runtime configuration read from the asdf environment.

asdf hands every input over through environment variables. They are read once
into an immutable ``PluginConfig`` which is then passed explicitly to each
component; nothing below the entrypoint reads ``os.environ``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from constants import Constants, InstallTypes
from archive.models import SelectionPreferences


def parse_flag(value: Optional[str], default: str = "0") -> bool:
    """Interpret a boolean-like environment value.

    False for "", "0", "n", "no", "f" and "false" (case-sensitive); anything
    else is true. An unset value is replaced by ``default`` first.
    """
    if value is None:
        value = default
    return value not in Constants.FALSY_VALUES


@dataclass(frozen=True)
class PluginConfig:
    """Immutable per-invocation configuration."""
    install_type: str = InstallTypes.VERSION.value
    install_version: str = Constants.DEFAULT_VERSION
    install_path: str = ""
    download_path: str = ""
    hadoop_version: Optional[str] = None
    without_hadoop: bool = False
    skip_verification: bool = False
    archive_url: str = Constants.ARCHIVE_URL

    @property
    def preferences(self) -> SelectionPreferences:
        """Variant selection preferences carried by this configuration."""
        return SelectionPreferences(
            hadoop_version=self.hadoop_version,
            without_hadoop=self.without_hadoop,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PluginConfig":
        """Build the configuration from ``environ`` (defaults to os.environ)."""
        env = os.environ if environ is None else environ
        hadoop_version = env.get(Constants.ENV_HADOOP_VERSION, "").strip() or None
        archive_url = env.get(Constants.ENV_ARCHIVE_URL, "").strip() or Constants.ARCHIVE_URL
        return cls(
            install_type=env.get(Constants.ENV_INSTALL_TYPE, InstallTypes.VERSION.value),
            install_version=env.get(Constants.ENV_INSTALL_VERSION) or Constants.DEFAULT_VERSION,
            install_path=env.get(Constants.ENV_INSTALL_PATH, ""),
            download_path=env.get(Constants.ENV_DOWNLOAD_PATH, ""),
            hadoop_version=hadoop_version,
            without_hadoop=parse_flag(env.get(Constants.ENV_WITHOUT_HADOOP)),
            skip_verification=parse_flag(env.get(Constants.ENV_SKIP_VERIFICATION)),
            archive_url=archive_url.rstrip("/"),
        )
