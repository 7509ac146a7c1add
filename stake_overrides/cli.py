"""
cli.py

Command-line host for the stake overrides updater.

    stake-overrides run --source overrides.yaml
    stake-overrides show https://example.com/overrides.yaml
"""

import argparse
import json
import logging
import signal
import sys
import threading
import time
from typing import List, Optional

from .errors import OverridesError
from .log import init_logging
from .readers import read_overrides
from .settings import Settings
from .snapshot import SharedOverrides
from .updater import StakedNodesOverridesUpdater

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stake-overrides",
        description="Keep per-address stake weight overrides in sync with their source",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to a .env file with STAKE_OVERRIDES_* settings (default: .env)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the updater until stopped")
    run_parser.add_argument(
        "--source",
        default=None,
        help="Path or URL of the overrides document (default: STAKE_OVERRIDES_SOURCE)",
    )
    run_parser.add_argument(
        "--run-seconds",
        type=float,
        default=None,
        help="Stop after N seconds (useful for smoke testing).",
    )

    show_parser = subparsers.add_parser("show", help="Load a source once and print it as JSON")
    show_parser.add_argument("source", help="Path or URL of the overrides document")

    return parser


def _install_signal_handlers(exit_flag: threading.Event) -> None:
    def handle_exit(signum, frame):
        logger.info("Received signal %s, shutting down...", signum)
        exit_flag.set()

    signal.signal(signal.SIGINT, handle_exit)
    signal.signal(signal.SIGTERM, handle_exit)


def run(settings: Settings, source: Optional[str], run_seconds: Optional[float] = None) -> int:
    exit_flag = threading.Event()
    if threading.current_thread() is threading.main_thread():
        _install_signal_handlers(exit_flag)

    shared = SharedOverrides()
    updater = StakedNodesOverridesUpdater(
        exit_flag,
        shared,
        source or settings.source,
        reload_period=settings.reload_period,
        poll_interval=settings.poll_interval,
        http_timeout=settings.http_timeout,
    ).start()

    deadline = None if run_seconds is None else time.monotonic() + run_seconds
    # Join in short slices so signal handlers get a chance to run
    while updater.is_alive() and not exit_flag.is_set():
        if deadline is not None and time.monotonic() >= deadline:
            break
        updater.join(timeout=0.2)

    exit_flag.set()
    updater.join()

    current = shared.read()
    logger.info(
        "Updater finished with %d stake overrides (auto_reload=%s)",
        len(current.stake_map),
        current.auto_reload,
    )
    return 0


def show(settings: Settings, source: str) -> int:
    try:
        overrides = read_overrides(source, timeout=settings.http_timeout)
    except OverridesError as e:
        logger.error("Error loading config for staked nodes weights: %s", e)
        return 1
    print(json.dumps(overrides.to_dict(), indent=2, sort_keys=True))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env(dotenv_path=args.env_file)
    init_logging(settings.log_level, settings.log_file)

    if args.command == "run":
        code = run(settings, args.source, args.run_seconds)
    else:
        code = show(settings, args.source)
    sys.exit(code)


if __name__ == "__main__":
    main()
