"""Fixed-interval task runner used by the change watcher.

No external scheduler library is required — stdlib ``time`` and
``signal`` only.  The clock and sleep functions are injectable so tests
can drive ticks without waiting.

Typical usage::

    from provider_ranker.scheduler import PeriodicTask
    task = PeriodicTask("poll", watcher.poll, interval_s=5.0)
    task.run()  # blocks until Ctrl-C

Semantics:
  - The first tick fires one interval after ``run()`` starts.
  - Ticks never overlap: the callback runs synchronously, and the next
    deadline is measured from when the previous tick finished.
  - An exception raised by one tick is logged and does not stop the loop.
"""

from __future__ import annotations

import logging
import platform
import signal
import time
from typing import Callable, Optional

log = logging.getLogger(__name__)


class PeriodicTask:
    """Runs ``callback`` every ``interval_s`` seconds until stopped.

    Parameters
    ----------
    name:
        Label used in log lines.
    callback:
        Zero-argument callable executed once per tick.  Its return value is
        ignored.
    interval_s:
        Seconds between the end of one tick and the start of the next.
    clock:
        Monotonic time source.  Defaults to ``time.monotonic``.
    sleep:
        Blocking sleep function.  Defaults to ``time.sleep``.
    """

    def __init__(
        self,
        name: str,
        callback: Callable[[], object],
        interval_s: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval_s <= 0:
            raise ValueError(f"interval_s must be positive, got {interval_s}.")
        self.name = name
        self.callback = callback
        self.interval_s = interval_s
        self._clock = clock
        self._sleep = sleep
        self._running = False
        self.tick_count = 0
        self.failure_count = 0

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the loop to exit after the current tick."""
        self._running = False

    def tick(self) -> bool:
        """Run the callback once.  Returns ``True`` if it completed without error."""
        self.tick_count += 1
        try:
            self.callback()
            return True
        except Exception as exc:
            self.failure_count += 1
            log.error("[%s] Tick %d failed: %s", self.name, self.tick_count, exc, exc_info=True)
            return False

    def run(
        self,
        max_ticks: Optional[int] = None,
        install_signal_handlers: bool = False,
    ) -> int:
        """Start the loop.  Blocks until ``stop()``, a signal, or ``max_ticks``.

        Args:
            max_ticks: Stop after this many ticks (``None`` = run forever).
            install_signal_handlers: Stop cleanly on SIGINT (and SIGTERM on
                Linux/macOS).  Only valid from the main thread.

        Returns:
            Number of ticks executed by this call.
        """
        self._running = True

        previous_handlers: dict[int, object] = {}
        if install_signal_handlers:
            def _shutdown(signum, frame):  # noqa: ANN001
                log.info("Signal %d received — stopping %s.", signum, self.name)
                self.stop()

            signums = [signal.SIGINT]
            if platform.system() != "Windows":
                signums.append(signal.SIGTERM)
            for signum in signums:
                previous_handlers[signum] = signal.signal(signum, _shutdown)

        log.info("[%s] Started (interval %.1fs).", self.name, self.interval_s)

        executed = 0
        next_run = self._clock() + self.interval_s
        try:
            while self._running and (max_ticks is None or executed < max_ticks):
                delay = next_run - self._clock()
                if delay > 0:
                    self._sleep(delay)
                if not self._running:
                    break

                self.tick()
                executed += 1
                next_run = self._clock() + self.interval_s
        finally:
            self._running = False
            for signum, handler in previous_handlers.items():
                if handler is not None:
                    signal.signal(signum, handler)

        log.info("[%s] Stopped after %d ticks.", self.name, executed)
        return executed
