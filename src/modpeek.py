"""modpeek - Go module version lister and repository locator.

Command entry point: parses arguments, layers configuration, runs one
command under a single overall deadline and maps typed errors to exit
codes.
"""
import logging
import os
import re
import sys
import webbrowser
from importlib import metadata

from constants import Constants, ExitCodes
from common.deadline import Deadline
from common.errors import BadStatus, DecodeFailure, ModpeekError, NetworkFailure, NotFound
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args, split_module_arg
from cli_config import apply_overrides, resolve_config
from repository import resolve_repo
from versioning import latest_std_version, list_versions, select_for_display, std_versions

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging from the environment, then apply CLI overrides."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def format_versions(records) -> list:
    """Render records as tab-aligned lines: version, time, retraction."""
    rows = []
    for rec in records:
        row = [rec.version]
        if rec.published_at is not None and rec.published_at.year > 1:
            row.append(f"{rec.published_at.day:2d} {rec.published_at.strftime(Constants.TIME_FORMAT)}")
        if rec.retracted:
            if rec.retraction_reason:
                row.append(f"retracted: {rec.retraction_reason}")
            else:
                row.append("retracted")
        rows.append(row)

    widths = {}
    for row in rows:
        for i, cell in enumerate(row[:-1]):
            widths[i] = max(widths.get(i, 0), len(cell))
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i] + 2) if i < len(row) - 1 else cell for i, cell in enumerate(row)]
        lines.append("".join(cells))
    return lines


def cmd_list(args, cfg, deadline) -> int:
    module, current = split_module_arg(args.module)
    records = list_versions(module, current, args.ALL, cfg.proxies, deadline)
    selected, newer = select_for_display(records, current, args.ALL, args.SUFFIX)
    if not args.ALL and not newer:
        sys.stderr.write("no new version\n")
    for line in format_versions(selected):
        print(line)
    return ExitCodes.SUCCESS.value


def _print_or_open(url, open_browser) -> None:
    if not open_browser or not webbrowser.open(url):
        print(url)


def cmd_repo(args, cfg, deadline) -> int:
    module, _ = split_module_arg(args.module)
    res = resolve_repo(module, deadline)
    _print_or_open(res.repo_url, args.OPEN)
    return ExitCodes.SUCCESS.value


def cmd_bugs(args, cfg, deadline) -> int:
    module, _ = split_module_arg(args.module)
    res = resolve_repo(module, deadline)
    _print_or_open(res.issues_url, args.OPEN)
    return ExitCodes.SUCCESS.value


def cmd_latest_go(args, cfg, deadline) -> int:
    print(latest_std_version(std_versions(deadline)))
    return ExitCodes.SUCCESS.value


def cmd_version(args, cfg, deadline) -> int:
    try:
        print(f"modpeek {metadata.version('modpeek')}")
    except metadata.PackageNotFoundError:
        print("modpeek version unknown, not installed")
    return ExitCodes.SUCCESS.value


COMMANDS = {
    "list": cmd_list,
    "repo": cmd_repo,
    "bugs": cmd_bugs,
    "latest-go": cmd_latest_go,
    "version": cmd_version,
}


def exit_code_for(exc: ModpeekError) -> int:
    """Map a typed error to the process exit code."""
    if isinstance(exc, NotFound):
        return ExitCodes.NOT_FOUND.value
    if isinstance(exc, (NetworkFailure, BadStatus)):
        return ExitCodes.CONNECTION_ERROR.value
    if isinstance(exc, DecodeFailure):
        return ExitCodes.DECODE_ERROR.value
    return ExitCodes.USAGE_ERROR.value


def run(argv=None) -> int:
    """Parse argv, run the command and return its exit code."""
    args = parse_args(argv)
    _setup_logging(args)

    cfg = resolve_config(args)
    apply_overrides(cfg)
    deadline = Deadline(cfg.deadline_sec)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action=args.command,
                proxies=len(cfg.proxies),
                deadline=cfg.deadline_sec,
            )
        )

    try:
        return COMMANDS[args.command](args, cfg, deadline)
    except ModpeekError as exc:
        logger.error("%s", exc)
        return exit_code_for(exc)
    except re.error as exc:
        logger.error("invalid --suffix pattern: %s", exc)
        return ExitCodes.USAGE_ERROR.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
