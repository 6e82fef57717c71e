"""Tests for the asdf-spark command line entrypoint."""

import logging
from unittest.mock import patch

import pytest

from asdf_spark import main
from common.errors import ChecksumMismatch, VariantUnavailable


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "ASDF_INSTALL_TYPE",
        "ASDF_INSTALL_VERSION",
        "ASDF_INSTALL_PATH",
        "ASDF_DOWNLOAD_PATH",
        "ASDF_SPARK_HADOOP_VERSION",
        "ASDF_SPARK_WITHOUT_HADOOP",
        "ASDF_SPARK_SKIP_VERIFICATION",
        "ASDF_SPARK_ARCHIVE_URL",
        "ASDF_SPARK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestListAll:
    """Test version listing output."""

    @patch('asdf_spark.fetch_versions')
    def test_space_separated_in_order(self, mock_fetch_versions, capsys):
        """Test versions printed space separated in listing order."""
        mock_fetch_versions.return_value = ["3.3.0", "2.4.8", "3.2.1"]

        assert main(["list-all"]) == 0
        assert capsys.readouterr().out == "3.3.0 2.4.8 3.2.1\n"

    @patch('asdf_spark.fetch_versions')
    def test_uses_mirror_from_env(self, mock_fetch_versions, monkeypatch):
        """Test the archive mirror is read from the environment."""
        monkeypatch.setenv("ASDF_SPARK_ARCHIVE_URL", "https://mirror.example/spark")
        mock_fetch_versions.return_value = []

        assert main(["list-all"]) == 0
        mock_fetch_versions.assert_called_once_with("https://mirror.example/spark")


class TestLatestStable:
    """Test latest-stable output."""

    @patch('asdf_spark.fetch_versions')
    def test_with_query(self, mock_fetch_versions, capsys):
        """Test latest-stable honours the query prefix."""
        mock_fetch_versions.return_value = ["3.2.1", "3.2.4", "3.3.0", "3.4.0-rc1"]

        assert main(["latest-stable", "3.2"]) == 0
        assert capsys.readouterr().out == "3.2.4\n"


class TestDownloadAndInstall:
    """Test error propagation to the process boundary."""

    @patch('asdf_spark.download')
    def test_download_passes_env_config(self, mock_download, monkeypatch):
        """Test download receives config from the environment."""
        monkeypatch.setenv("ASDF_INSTALL_VERSION", "3.2.1")
        monkeypatch.setenv("ASDF_SPARK_WITHOUT_HADOOP", "1")

        assert main(["download"]) == 0
        config = mock_download.call_args[0][0]
        assert config.install_version == "3.2.1"
        assert config.without_hadoop is True

    @patch('asdf_spark.download')
    def test_plugin_error_exits_non_zero(self, mock_download, caplog):
        """Test plugin errors exit with a failure code."""
        mock_download.side_effect = VariantUnavailable("no without-hadoop archive")

        with caplog.at_level(logging.ERROR):
            assert main(["download"]) == 1

        assert "asdf-spark: no without-hadoop archive" in caplog.text

    @patch('asdf_spark.install')
    def test_install_failure(self, mock_install, caplog):
        """Test install failures are logged and exit non-zero."""
        mock_install.side_effect = ChecksumMismatch("Checksum validation failed!")

        with caplog.at_level(logging.ERROR):
            assert main(["install"]) == 1

        assert "Checksum validation failed!" in caplog.text

    @patch('archive.download.stream_to_file')
    @patch('archive.download.fetch_release_listing')
    def test_download_path_is_a_file(self, mock_listing, mock_stream, tmp_path,
                                     monkeypatch, caplog):
        """Test a download path blocked by a file exits non-zero."""
        blocker = tmp_path / "download"
        blocker.write_text("")
        monkeypatch.setenv("ASDF_DOWNLOAD_PATH", str(blocker))
        mock_listing.return_value = (
            '<a href="spark-3.3.0-bin-hadoop3.tgz">spark-3.3.0-bin-hadoop3.tgz</a>'
        )

        with caplog.at_level(logging.ERROR):
            assert main(["download"]) == 1

        assert "asdf-spark: Could not prepare download path" in caplog.text
        mock_stream.assert_not_called()

    def test_unknown_command(self):
        """Test an unknown command is rejected by argparse."""
        with pytest.raises(SystemExit):
            main(["uninstall"])
