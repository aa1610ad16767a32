"""Argument parsing functionality for plugvend."""

import argparse

from constants import Constants


def build_parser():
    """Build the argument parser (exposed for usage printing)."""
    parser = argparse.ArgumentParser(
        prog="plugvend",
        description=(
            "plugvend - vendor binary wheels into per-plugin directories"
        ),
        epilog=(
            "commands: install <package>[==version] ... | "
            "uninstall <package> ... | list"
        ),
        add_help=True,
    )

    parser.add_argument("plugin",
                        metavar="PLUGIN",
                        help="Plugin whose vendor directory is managed",
                        action="store", type=str)
    parser.add_argument("command",
                        metavar="COMMAND",
                        help="One of: " + ", ".join(Constants.SUPPORTED_COMMANDS),
                        action="store", type=str.lower)
    parser.add_argument("packages",
                        metavar="PACKAGE",
                        help="Package name, optionally pinned as name==version",
                        nargs="*",
                        default=[])
    parser.add_argument("-r", "--requirement",
                        dest="REQUIREMENT_FILES",
                        help="Install every pinned package listed in a requirements file",
                        action="append", type=str,
                        default=[])

    parser.add_argument("--runtime-version",
                        dest="RUNTIME_VERSION",
                        help=f"Target Python version (default: {Constants.DEFAULT_RUNTIME_VERSION})",
                        action="store", type=str)
    parser.add_argument("--platform",
                        dest="PLATFORM",
                        help=f"Target platform tag (default: {Constants.DEFAULT_PLATFORM})",
                        action="store", type=str)
    parser.add_argument("--index-url",
                        dest="INDEX_URL",
                        help=f"Package index JSON API base (default: {Constants.REGISTRY_URL_PYPI})",
                        action="store", type=str)
    parser.add_argument("--vendor-root",
                        dest="VENDOR_ROOT",
                        help=f"Directory holding plugin vendor directories (default: {Constants.DEFAULT_VENDOR_ROOT})",
                        action="store", type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help=f"Set the logging level (default: ${Constants.LOG_LEVEL_ENV} or INFO)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
