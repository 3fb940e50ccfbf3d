"""
Change watcher: keeps the engine in sync with an externally edited store.

Each tick reads the whole provider set and compares its serialized form
with the last set the engine applied.  Only a difference triggers a
re-score and re-render; identical reads cost one store read and one string
comparison.

A tick that finds no data or a malformed payload changes nothing: the
store logs the problem and the engine keeps its last-good view.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from provider_ranker.config import DEFAULT_POLL_INTERVAL_MS
from provider_ranker.engine import RankingEngine
from provider_ranker.models.provider import ProviderRecord, dump_record_set
from provider_ranker.scheduler import PeriodicTask
from provider_ranker.store.base import ProviderStore

logger = logging.getLogger(__name__)


def fingerprint(records: Sequence[ProviderRecord]) -> str:
    """Order-sensitive serialized form used for change detection."""
    return dump_record_set(list(records))


class ChangeWatcher:
    """Polls ``store`` and feeds changed provider sets to ``engine``.

    Attributes:
        store:        Provider store to poll.
        engine:       Engine that owns the applied set.
        interval_ms:  Poll period in milliseconds.
        change_count: Number of ticks that applied a new set.
    """

    def __init__(
        self,
        store: ProviderStore,
        engine: RankingEngine,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.store = store
        self.engine = engine
        self.interval_ms = interval_ms
        self.change_count = 0
        self._last_fingerprint: Optional[str] = None
        self._task = PeriodicTask(
            "provider-watcher", self.poll, interval_ms / 1000.0, clock=clock, sleep=sleep
        )

    @property
    def task(self) -> PeriodicTask:
        return self._task

    def load_initial(self) -> None:
        """First load: apply whatever the store holds, or an empty set.

        Absent or unreadable data is not an error here; the engine starts
        empty and reports zero providers.
        """
        records = self.store.read()
        if records is None:
            logger.info("No provider data in store; starting with an empty set.")
            records = []
        self._apply(records)

    def poll(self) -> bool:
        """One tick.  Returns ``True`` if a changed set was applied."""
        records = self.store.read()
        if records is None:
            logger.debug("Poll: no readable provider data; keeping current view.")
            return False

        if fingerprint(records) == self._last_fingerprint:
            logger.debug("Poll: provider set unchanged (%d records).", len(records))
            return False

        logger.info("Provider set changed (%d records); refreshing.", len(records))
        self._apply(records)
        self.change_count += 1
        return True

    def run(
        self,
        max_ticks: Optional[int] = None,
        install_signal_handlers: bool = False,
    ) -> int:
        """Poll on the configured interval until stopped.  Returns ticks executed."""
        return self._task.run(
            max_ticks=max_ticks, install_signal_handlers=install_signal_handlers
        )

    def stop(self) -> None:
        self._task.stop()

    def _apply(self, records: Sequence[ProviderRecord]) -> None:
        self.engine.apply(records)
        self._last_fingerprint = fingerprint(records)
