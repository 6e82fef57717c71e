"""asdf-spark - Apache Spark prebuilt binary installer for asdf

    Returns:
        int: Exit code
"""
import logging
import sys

from constants import ExitCodes, Constants
from common.errors import PluginError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import PluginConfig
from archive.download import download
from archive.install import install
from archive.listing import fetch_versions, latest_stable

logger = logging.getLogger(__name__)


def cmd_list_all(_args, config):
    """Print all versions on one line, in archive order."""
    print(" ".join(fetch_versions(config.archive_url)))


def cmd_latest_stable(args, config):
    """Print the newest stable version matching the optional query."""
    latest = latest_stable(fetch_versions(config.archive_url), args.QUERY)
    if latest:
        print(latest)


def cmd_download(_args, config):
    """Download and verify the configured version."""
    download(config)


def cmd_install(_args, config):
    """Install the downloaded version."""
    install(config)


COMMANDS = {
    "list-all": cmd_list_all,
    "latest-stable": cmd_latest_stable,
    "download": cmd_download,
    "install": cmd_install,
}


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)

    config = PluginConfig.from_env()
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action=args.COMMAND,
                install_type=config.install_type,
                version=config.install_version
            )
        )

    try:
        COMMANDS[args.COMMAND](args, config)
    except PluginError as exc:
        logger.error("%s: %s", Constants.PLUGIN_NAME, exc)
        return ExitCodes.FAILURE.value
    except OSError as exc:
        logger.error("%s: %s", Constants.PLUGIN_NAME, exc)
        return ExitCodes.FAILURE.value
    return ExitCodes.SUCCESS.value


def entrypoint():
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
