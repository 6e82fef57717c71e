"""Argument parsing functionality for asdf-spark."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog=Constants.PLUGIN_NAME,
        description=(
            "asdf plugin for Apache Spark prebuilt binary archives"
        ),
        add_help=True,
    )

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)

    subparsers = parser.add_subparsers(dest="COMMAND", metavar="COMMAND", required=True)
    subparsers.add_parser("list-all",
                          help="List every published version, space separated.")
    latest = subparsers.add_parser("latest-stable",
                                   help="Print the latest version without a pre-release tag.")
    latest.add_argument("QUERY",
                        help="Only consider versions starting with this prefix.",
                        nargs="?",
                        default="")
    subparsers.add_parser("download",
                          help="Download, verify and unpack ASDF_INSTALL_VERSION "
                               "into ASDF_DOWNLOAD_PATH.")
    subparsers.add_parser("install",
                          help="Install the unpacked release into ASDF_INSTALL_PATH.")

    return parser.parse_args(argv)
