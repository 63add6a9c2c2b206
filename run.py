"""Launcher for the game save backup scheduler.

Zips the game's save directory at a fixed interval while the game is
running. Runs until interrupted or until a backup fails.

Usage:
    python run.py
    python run.py --config config/config.json
    python run.py --base-dir D:/Games/backup
"""

import argparse
import logging
import os
import signal
import sys
import threading
from pathlib import Path

from src.backup.errors import ConfigurationError
from src.backup.scheduler import BackupScheduler, describe
from src.config.settings import AppContext, load_settings, prepare_output_dir

PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_CONFIG = os.path.join("config", "config.json")

logger = logging.getLogger("save_backup")


def default_base_dir() -> Path:
    """The launcher's directory in a source checkout, else the working directory."""
    if (PROJECT_ROOT / "pyproject.toml").is_file():
        return PROJECT_ROOT
    return Path.cwd()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Periodically back up game saves while the game runs",
    )
    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG,
        help="Path to config.json, relative to the base directory "
             "(default: config/config.json)",
    )
    parser.add_argument(
        "--base-dir",
        default=None,
        help="Directory relative paths are resolved against "
             "(default: the launcher's directory in a source checkout, "
             "otherwise the current directory)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv=None, checker=None, stop_event=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    base_dir = Path(args.base_dir) if args.base_dir else default_base_dir()
    context = AppContext(base_dir=base_dir.resolve())
    try:
        settings = load_settings(str(context.resolve(args.config)))
        output_dir = prepare_output_dir(context.output_dir(settings))
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1

    stop_event = stop_event or threading.Event()
    scheduler = BackupScheduler(
        settings, context, checker=checker, stop_event=stop_event,
    )

    def handle_signal(signum, frame):
        logger.info("Received signal %s, shutting down...", signum)
        stop_event.set()

    previous = {
        signum: signal.signal(signum, handle_signal)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }

    logger.info(describe(settings, output_dir))
    try:
        result = scheduler.run()
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
    if result is not None and result.failed:
        logger.error("Stopping after fatal error: %s", result.error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
