"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FAILURE = 1


class InstallTypes(Enum):
    """Install types handed over by asdf.

    Args:
        Enum (string): Value of ASDF_INSTALL_TYPE.
    """

    VERSION = "version"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    TOOL_NAME = "spark"
    PLUGIN_NAME = "asdf-spark"
    TOOL_TEST = "spark-shell --help"
    ARCHIVE_URL = "https://archive.apache.org/dist/spark"
    DEFAULT_VERSION = "3.3.0"

    # Checksum files are tried in this order; the first one fetched wins.
    CHECKSUM_EXTENSIONS = ("sha512", "sha")
    CHECKSUM_ALGORITHM = "sha512"
    CHECKSUM_DIGEST_LENGTH = 128
    HASH_CHUNK_SIZE = 1024 * 1024

    # Boolean-like environment values that read as false (case-sensitive).
    FALSY_VALUES = frozenset({"", "0", "n", "no", "f", "false"})

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    DOWNLOAD_CHUNK_SIZE = 512 * 1024
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3

    # Environment variables
    ENV_INSTALL_TYPE = "ASDF_INSTALL_TYPE"
    ENV_INSTALL_VERSION = "ASDF_INSTALL_VERSION"
    ENV_INSTALL_PATH = "ASDF_INSTALL_PATH"
    ENV_DOWNLOAD_PATH = "ASDF_DOWNLOAD_PATH"
    ENV_HADOOP_VERSION = "ASDF_SPARK_HADOOP_VERSION"
    ENV_WITHOUT_HADOOP = "ASDF_SPARK_WITHOUT_HADOOP"
    ENV_SKIP_VERIFICATION = "ASDF_SPARK_SKIP_VERIFICATION"
    ENV_ARCHIVE_URL = "ASDF_SPARK_ARCHIVE_URL"
    ENV_LOG_LEVEL = "ASDF_SPARK_LOG_LEVEL"
