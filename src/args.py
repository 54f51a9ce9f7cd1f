"""Argument parsing functionality for modpeek."""

import argparse


def _add_module_arg(parser, help_text):
    parser.add_argument("module",
                        metavar="MODULE[@VERSION]",
                        help=help_text,
                        type=str)


def _add_open_arg(parser, what):
    parser.add_argument("-o", "--open",
                        dest="OPEN",
                        help=f"Open the {what} URL in a browser instead of printing it.",
                        action="store_true")


def build_parser():
    """Build the top-level parser with one subparser per command."""
    parser = argparse.ArgumentParser(
        prog="modpeek",
        description=(
            "modpeek - list available versions of a Go module and find its "
            "source repository and issue tracker"
        ),
        add_help=True,
    )

    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="Overall timeout for the command in seconds (0 for no timeout, default 600).",
                        action="store",
                        type=float)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to YAML configuration file",
                        action="store",
                        type=str)

    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    list_p = sub.add_parser("list", help="print available versions of a module")
    _add_module_arg(list_p, "Module path, optionally with the installed version (std@go1.21.0 for Go itself).")
    list_p.add_argument("--all",
                        dest="ALL",
                        help="List all versions, not just unretracted ones newer than VERSION.",
                        action="store_true")
    list_p.add_argument("--suffix",
                        dest="SUFFIX",
                        help="Only print versions with a pre-release matching the regexp pattern.",
                        action="store",
                        type=str,
                        default="")
    list_p.add_argument("--proxy",
                        dest="PROXY",
                        help="GOPROXY-style comma separated list of module proxies.",
                        action="store",
                        type=str)

    repo_p = sub.add_parser("repo", help="print the source repository URL of a module")
    _add_module_arg(repo_p, "Module path.")
    _add_open_arg(repo_p, "repository")

    bugs_p = sub.add_parser("bugs", help="print the issue tracker URL of a module")
    _add_module_arg(bugs_p, "Module path.")
    _add_open_arg(bugs_p, "issues")

    sub.add_parser("latest-go", help="print the newest Go toolchain release")
    sub.add_parser("version", help="print the modpeek version")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)


def split_module_arg(value):
    """Split MODULE[@VERSION] into (module, version or "")."""
    module, _, version = value.partition("@")
    return module, version
