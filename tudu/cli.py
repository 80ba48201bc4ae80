"""
Command-line entry point.

Usage:
    tudu                  Open the todo list
    tudu --list           Print todos without starting the UI
    tudu --file PATH      Use another todo file
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tudu import __version__
from tudu.config import LOG_LEVELS, Settings
from tudu.errors import ConfigError, StorageError
from tudu.models import Task
from tudu.storage import TaskStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None, level: str) -> None:
    """Log to ``log_file`` if given; the terminal itself belongs to the UI."""
    package_logger = logging.getLogger("tudu")
    package_logger.setLevel(level)
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)


def format_task(task: Task) -> str:
    if task.recurring:
        marker = "[∞]"
    elif task.completed:
        marker = "[x]"
    else:
        marker = "[ ]"
    line = f"{marker} {task.name}"
    if task.due_at:
        line += f"  (due {task.due_at:%Y-%m-%d %H:%M})"
    return line


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tudu", description="Terminal todo list")
    parser.add_argument("--file", type=Path, help="Todo file (default: $TUDU_FILE or XDG data dir)")
    parser.add_argument(
        "--poll-timeout",
        type=float,
        metavar="SECONDS",
        help="Seconds between idle ticks of the main loop",
    )
    parser.add_argument("--log-file", type=Path, help="Write logs to this file")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level (default: WARNING)")
    parser.add_argument("--list", action="store_true", help="Print todos and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment first, then command-line flags."""
    settings = Settings.from_env()
    if args.file:
        settings.data_file = args.file.expanduser()
    if args.poll_timeout is not None:
        if args.poll_timeout <= 0:
            raise ConfigError("--poll-timeout must be positive")
        settings.poll_timeout = args.poll_timeout
    if args.log_file:
        settings.log_file = args.log_file.expanduser()
    if args.log_level:
        settings.log_level = args.log_level
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args)
    except ConfigError as e:
        parser.error(str(e))

    configure_logging(settings.log_file, settings.log_level)
    store = TaskStore(settings.data_file)

    try:
        tasks = store.load()
    except StorageError as e:
        logger.error("Load failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.list:
        if not tasks:
            print(f"No todos in {settings.data_file}")
        for task in tasks:
            print(format_task(task))
        return 0

    from tudu.tui.app import run

    return run(tasks, store, settings)


if __name__ == "__main__":
    sys.exit(main())
