"""
updater.py

Background thread that keeps the shared stake overrides fresh by
re-reading their source at most once per reload period.
"""

import logging
import threading
import time
from functools import partial
from typing import Callable, Optional

from .errors import OverridesError
from .models import StakedNodesOverrides
from .readers import DEFAULT_HTTP_TIMEOUT, read_overrides
from .snapshot import SharedOverrides

logger = logging.getLogger(__name__)

DEFAULT_RELOAD_PERIOD = 60.0
DEFAULT_POLL_INTERVAL = 0.001
THREAD_NAME = "stake-overrides-updater"


class ReloadTimer:
    """Tracks the last reload attempt; a failed attempt counts too."""

    def __init__(self, period: float, clock: Callable[[], float] = time.monotonic):
        self.period = period
        self._clock = clock
        self.last_attempt: Optional[float] = None

    def due(self) -> bool:
        if self.last_attempt is None:
            return True
        return self._clock() - self.last_attempt >= self.period

    def mark(self) -> None:
        self.last_attempt = self._clock()


class StakedNodesOverridesUpdater:
    """
    Polls an overrides source and publishes each successful load into a
    ``SharedOverrides`` slot.

    The loop exits when ``exit_flag`` is set or when a load reports
    ``auto_reload: false``. Without a locator the thread exits at once.
    Reload failures are logged and retried after the next reload period;
    any other exception ends the thread and is re-raised by ``join()``.
    """

    def __init__(
        self,
        exit_flag: threading.Event,
        shared: SharedOverrides,
        locator: Optional[str] = None,
        *,
        reload_period: float = DEFAULT_RELOAD_PERIOD,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        reader: Optional[Callable[[str], StakedNodesOverrides]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._exit = exit_flag
        self._shared = shared
        self._locator = locator
        self._poll_interval = poll_interval
        self._reader = reader or partial(read_overrides, timeout=http_timeout)
        self._timer = ReloadTimer(reload_period, clock)
        self._sleep = sleep
        self._thread: Optional[threading.Thread] = None
        self._fault: Optional[BaseException] = None

    def start(self) -> "StakedNodesOverridesUpdater":
        """Spawn the updater thread and return immediately."""
        if self._thread is not None:
            raise RuntimeError("Updater already started")
        self._thread = threading.Thread(target=self._run, name=THREAD_NAME, daemon=True)
        self._thread.start()
        return self

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        """
        Wait for the updater thread to finish.

        Re-raises the exception that terminated the thread abnormally, if
        any. Ordinary reload failures never surface here.
        """
        if self._thread is None:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            return
        fault, self._fault = self._fault, None
        if fault is not None:
            raise fault

    def _run(self) -> None:
        try:
            self._watch_loop()
        except BaseException as e:
            logger.critical("Stake overrides updater crashed", exc_info=True)
            self._fault = e

    def _watch_loop(self) -> None:
        if self._locator is None:
            logger.debug("No stake overrides source configured; updater idle")
            return

        logger.info("Stake overrides updater started for %s", self._locator)
        auto_reload = True
        while not self._exit.is_set() and auto_reload:
            overrides = self._try_reload()
            if overrides is not None:
                self._shared.publish(overrides)
                auto_reload = overrides.auto_reload
                logger.debug("Config for staked nodes weights has been loaded.")
                logger.info(
                    "Loaded %d stake overrides (auto_reload=%s)",
                    len(overrides.stake_map),
                    overrides.auto_reload,
                )
            self._sleep(self._poll_interval)

        if auto_reload:
            logger.info("Stake overrides updater stopped by exit signal")
        else:
            logger.info("Stake overrides auto-reload disabled; updater stopped")

    def _try_reload(self) -> Optional[StakedNodesOverrides]:
        if not self._timer.due():
            return None
        self._timer.mark()

        try:
            return self._reader(self._locator)
        except OverridesError as e:
            logger.error("Error loading config for staked nodes weights: %s", e)
            return None
