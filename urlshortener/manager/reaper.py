"""
Background reaper: periodically evicts expired and exhausted links.

Responsibilities:
    - Fire a cleanup callable at a fixed rate on a daemon thread
    - Keep running when a cleanup raises (the error is logged and counted)
    - Stop promptly and idempotently; an in-flight cleanup completes first

The first fire happens one full interval after `start()`.
"""

import logging
import threading
import time
from datetime import timedelta
from typing import Callable, Optional

from ..errors import InvalidConfiguration

log = logging.getLogger("urlshortener.reaper")

DEFAULT_STOP_TIMEOUT = 5.0


class Reaper:
    """
    Fixed-rate scheduler around `LinkService.cleanup`.

    Attributes:
        runs (int): Number of cleanups attempted.
        errors (int): Number of cleanups that raised.
        last_removed (int): Links removed by the most recent successful cleanup.
        last_error (Optional[BaseException]): Most recent cleanup failure.
    """

    def __init__(self, cleanup: Callable[[], int], interval: timedelta, name: str = "link-reaper"):
        if interval <= timedelta(0):
            raise InvalidConfiguration(f"Cleanup interval must be positive, got {interval}")
        self._cleanup = cleanup
        self.interval = interval
        self.name = name
        self.runs = 0
        self.errors = 0
        self.last_removed = 0
        self.last_error: Optional[BaseException] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Start the worker thread. Calling it while running does nothing."""
        with self._lock:
            if self._thread is not None:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
        log.info("Cleanup service started (interval: %s)", self.interval)

    def stop(self, timeout: float = DEFAULT_STOP_TIMEOUT) -> None:
        """Cancel pending fires and join the worker for at most `timeout` seconds."""
        with self._lock:
            thread, self._thread = self._thread, None
        if thread is None:
            return
        self._stop_event.set()
        thread.join(timeout)
        if thread.is_alive():
            log.warning("Cleanup thread did not stop within %.1fs", timeout)
        else:
            log.info("Cleanup service stopped")

    def run_once(self) -> int:
        """
        Run one guarded cleanup.

        Returns:
            int: Links removed, or 0 when the cleanup raised.
        """
        self.runs += 1
        try:
            removed = self._cleanup()
        except Exception as exc:
            self.errors += 1
            self.last_error = exc
            log.exception("Error during link cleanup")
            return 0
        self.last_removed = removed
        if removed:
            log.info("[cleanup] Removed %d expired/inactive link(s)", removed)
        return removed

    def _run(self) -> None:
        period = self.interval.total_seconds()
        next_fire = time.monotonic() + period
        while not self._stop_event.wait(max(0.0, next_fire - time.monotonic())):
            self.run_once()
            next_fire += period
            now = time.monotonic()
            if next_fire < now:
                # fell behind by more than a period; skip the missed fires
                next_fire = now + period

    def __enter__(self) -> "Reaper":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
