from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .api import dumps, serialize_result
from .bootstrap import configure_logging
from .commands import CommandExecutor, CommandResult, describe_event
from .config import ensure_data_dir, get_settings
from .services import ServiceContext

logger = logging.getLogger(__name__)

PROMPT = "timeboard> "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Timeboard calendar command line interface.")
    parser.add_argument(
        "--mode",
        choices=("interactive", "headless", "gui"),
        default="interactive",
        help=(
            "Read commands from the terminal (default) or from a command file. "
            "The desktop GUI is not part of this build, so no arguments start the interactive prompt."
        ),
    )
    parser.add_argument("file", nargs="?", help="Command file executed in headless mode.")
    parser.add_argument("--output", choices=("text", "json"), default="text")
    parser.add_argument("--log-level", default=None, help="Override TIMEBOARD_LOG_LEVEL.")
    return parser


def emit(result: CommandResult, output: str, stream: TextIO) -> None:
    if output == "json":
        print(dumps(serialize_result(result)), file=stream)
        return
    print(result.message, file=stream)
    for event in result.events:
        print(f"  - {describe_event(event)}", file=stream)


def run_headless(
    executor: CommandExecutor,
    path: str,
    output: str = "text",
    stream: Optional[TextIO] = None,
) -> int:
    """Execute a command file; failed commands are reported and skipped."""

    stream = stream or sys.stdout
    try:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        print(f"Error: cannot read command file {path}: {exc}", file=sys.stderr)
        return 1

    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            result = executor.run_line(line)
        except OSError as exc:
            logger.error("I/O failure on line %d of %s: %s", number, path, exc)
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        emit(result, output, stream)
        if result.exit_requested:
            return 0

    logger.warning("Command file %s did not end with an exit command", path)
    return 0


def run_interactive(
    executor: CommandExecutor,
    output: str = "text",
    source: Optional[TextIO] = None,
    stream: Optional[TextIO] = None,
) -> int:
    source = source or sys.stdin
    stream = stream or sys.stdout
    interactive = source.isatty()
    while True:
        if interactive:
            print(PROMPT, end="", file=stream, flush=True)
        raw = source.readline()
        if not raw:
            return 0
        if not raw.strip():
            continue
        try:
            result = executor.run_line(raw)
        except OSError as exc:
            print(f"Error: {exc}", file=stream)
            continue
        emit(result, output, stream)
        if result.exit_requested:
            return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    ensure_data_dir()
    configure_logging(args.log_level or settings.logging.level)
    logger.info("Timeboard CLI starting in %s mode", args.mode)

    if args.mode == "gui":
        print("GUI mode is not available in this build.", file=sys.stderr)
        return 2
    if args.mode == "headless" and not args.file:
        parser.error("headless mode requires a command file")

    context = ServiceContext(settings=settings)
    context.ensure_default_calendar()
    executor = CommandExecutor(context)

    if args.mode == "headless":
        return run_headless(executor, args.file, args.output)
    return run_interactive(executor, args.output)


if __name__ == "__main__":
    sys.exit(main())
