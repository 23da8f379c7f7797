"""Argument parsing for the latest CLI."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Args:
        argv (list, optional): Arguments to parse; defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog=Constants.PROG_NAME,
        description=(
            "Find the latest version of any command, package, or library"
        ),
        add_help=True,
    )

    parser.add_argument("packages",
                        metavar="PACKAGE",
                        help="Packages to look up, optionally prefixed with a source "
                             "(e.g. npm:react). If omitted, the project file in the "
                             "current directory is scanned.",
                        nargs="*")
    parser.add_argument("-s", "--source",
                        dest="SOURCE",
                        help="Only check a specific source (path, brew, npm, pip, go, cargo, uv, ...)",
                        action="store",
                        type=str)
    parser.add_argument("-a", "--all",
                        dest="ALL",
                        help="Show all sources where the package is found",
                        action="store_true")
    parser.add_argument("-j", "--json",
                        dest="JSON",
                        help="Output as JSON",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only show version number",
                        action="store_true")
    parser.add_argument("--no-cache",
                        dest="NO_CACHE",
                        help="Bypass cache (always fetch fresh data)",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML config file (default: ~/.config/latest/config.yml)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: $LATEST_LOG_LEVEL or WARNING)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
