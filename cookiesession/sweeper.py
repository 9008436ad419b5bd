"""Background thread that runs a callback at a fixed interval."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)


class PeriodicSweeper:
    """Run ``callback`` now and then every ``interval`` seconds until stopped.

    The next run is scheduled only after the previous one returns, so runs
    never overlap. A failing run is logged and the loop carries on.
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        interval: float,
        *,
        name: str = "session-gc",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._callback = callback
        self._interval = interval
        self._name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._start_lock = threading.Lock()
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start the loop. Returns False if it was already started."""
        with self._start_lock:
            if self._thread is not None:
                return False
            self._thread = threading.Thread(target=self._loop, name=self._name, daemon=True)
            self._thread.start()
        logger.info("%s: started (interval=%ss)", self._name, self._interval)
        return True

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("%s: did not stop within %ss", self._name, timeout)
                return
        logger.info("%s: stopped after %d runs", self._name, self.runs)

    def _loop(self) -> None:
        while not self._stop.is_set():
            try:
                self._callback()
            except Exception:
                logger.exception("%s: run failed", self._name)
            self.runs += 1
            if self._stop.wait(self._interval):
                break
