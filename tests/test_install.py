"""Tests for the installer."""

import os
import stat

import pytest

from archive.install import install, install_version
from cli_config import PluginConfig
from common.errors import InstallAssertionFailed, UnsupportedInstallType


@pytest.fixture
def download_dir(tmp_path):
    root = tmp_path / "download"
    (root / "bin").mkdir(parents=True)
    (root / "jars").mkdir()
    (root / "jars" / "spark-core.jar").write_bytes(b"jar")
    shell = root / "bin" / "spark-shell"
    shell.write_text("#!/bin/sh\n")
    shell.chmod(shell.stat().st_mode | stat.S_IXUSR)
    return root


class TestInstallVersion:
    """Test copying and the executable smoke check."""

    def test_copies_everything(self, tmp_path, download_dir):
        """Test the whole download is copied."""
        install_path = tmp_path / "installs" / "spark" / "3.3.0"

        install_version("version", "3.3.0", str(install_path), str(download_dir))

        assert os.access(install_path / "bin" / "spark-shell", os.X_OK)
        assert (install_path / "jars" / "spark-core.jar").read_bytes() == b"jar"

    def test_missing_executable_leaves_nothing(self, tmp_path, download_dir):
        """Test a missing executable leaves no install behind."""
        (download_dir / "bin" / "spark-shell").unlink()
        install_path = tmp_path / "installs" / "spark" / "3.3.0"

        with pytest.raises(InstallAssertionFailed, match="spark-shell"):
            install_version("version", "3.3.0", str(install_path), str(download_dir))

        assert not install_path.exists()

    def test_non_executable_leaves_nothing(self, tmp_path, download_dir):
        """Test a non-executable tool leaves no install behind."""
        (download_dir / "bin" / "spark-shell").chmod(0o644)
        install_path = tmp_path / "install"

        with pytest.raises(InstallAssertionFailed):
            install_version("version", "3.3.0", str(install_path), str(download_dir))

        assert not install_path.exists()

    def test_missing_download_dir(self, tmp_path):
        """Test a missing download directory fails the install."""
        install_path = tmp_path / "install"

        with pytest.raises(InstallAssertionFailed, match="spark-3.3.0"):
            install_version("version", "3.3.0", str(install_path), str(tmp_path / "nope"))

        assert not install_path.exists()

    def test_ref_install_rejected(self, tmp_path, download_dir):
        """Test ref installs are rejected."""
        install_path = tmp_path / "install"

        with pytest.raises(UnsupportedInstallType):
            install_version("ref", "v3.3.0", str(install_path), str(download_dir))

        assert not install_path.exists()

    def test_install_from_config(self, tmp_path, download_dir):
        """Test install driven by the configuration."""
        config = PluginConfig(
            install_version="3.3.0",
            install_path=str(tmp_path / "install"),
            download_path=str(download_dir),
        )

        install(config)

        assert (tmp_path / "install" / "bin" / "spark-shell").exists()
