"""Tests for environment-derived configuration."""

import pytest

from archive.models import SelectionPreferences
from cli_config import PluginConfig, parse_flag


@pytest.mark.parametrize("value", ["", "0", "n", "no", "f", "false"])
def test_parse_flag_falsy(value):
    assert parse_flag(value) is False


@pytest.mark.parametrize("value", ["1", "y", "yes", "true", "True", "FALSE", "No", "anything"])
def test_parse_flag_truthy(value):
    assert parse_flag(value) is True


def test_parse_flag_unset_uses_default():
    assert parse_flag(None) is False
    assert parse_flag(None, default="1") is True


class TestPluginConfigFromEnv:
    """Test building PluginConfig from asdf variables."""

    def test_defaults(self):
        """Test configuration defaults with an empty environment."""
        config = PluginConfig.from_env({})

        assert config.install_type == "version"
        assert config.install_version == "3.3.0"
        assert config.without_hadoop is False
        assert config.skip_verification is False
        assert config.hadoop_version is None
        assert config.archive_url == "https://archive.apache.org/dist/spark"

    def test_reads_asdf_variables(self):
        """Test configuration read from asdf variables."""
        config = PluginConfig.from_env({
            "ASDF_INSTALL_TYPE": "ref",
            "ASDF_INSTALL_VERSION": "3.2.1",
            "ASDF_INSTALL_PATH": "/opt/asdf/installs/spark/3.2.1",
            "ASDF_DOWNLOAD_PATH": "/opt/asdf/downloads/spark/3.2.1",
            "ASDF_SPARK_HADOOP_VERSION": "3.2",
            "ASDF_SPARK_WITHOUT_HADOOP": "yes",
            "ASDF_SPARK_SKIP_VERIFICATION": "true",
            "ASDF_SPARK_ARCHIVE_URL": "https://mirror.example/spark/",
        })

        assert config.install_type == "ref"
        assert config.install_version == "3.2.1"
        assert config.install_path == "/opt/asdf/installs/spark/3.2.1"
        assert config.download_path == "/opt/asdf/downloads/spark/3.2.1"
        assert config.skip_verification is True
        assert config.archive_url == "https://mirror.example/spark"
        assert config.preferences == SelectionPreferences(hadoop_version="3.2", without_hadoop=True)

    def test_blank_hadoop_version_is_unset(self):
        """Test a blank hadoop version counts as unset."""
        config = PluginConfig.from_env({"ASDF_SPARK_HADOOP_VERSION": "  "})
        assert config.hadoop_version is None

    def test_immutable(self):
        """Test configuration cannot be modified."""
        config = PluginConfig.from_env({})
        with pytest.raises(AttributeError):
            config.skip_verification = True
