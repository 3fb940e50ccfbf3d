"""SQLite-backed key-value store (one ``kv_store`` row per key)."""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from provider_ranker.db.connection import get_connection
from provider_ranker.store.base import ProviderStore, StoreReadError

logger = logging.getLogger(__name__)


class SqliteStore(ProviderStore):
    """Provider store backed by the ``kv_store`` table of a SQLite file.

    A connection is opened per call, so a long-running watcher never holds
    a lock between polls.
    """

    backend_name = "sqlite"

    def __init__(
        self,
        db_path: str,
        key: str = "providers",
        busy_timeout_ms: int = 5000,
    ) -> None:
        super().__init__(key=key)
        self.db_path = db_path
        self.busy_timeout_ms = busy_timeout_ms

    def _read_raw(self) -> Optional[str]:
        try:
            with get_connection(self.db_path, busy_timeout_ms=self.busy_timeout_ms) as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?;", (self.key,)
                ).fetchone()
        except (sqlite3.Error, OSError) as exc:
            raise StoreReadError(f"Cannot read {self.db_path}: {exc}") from exc
        return row["value"] if row is not None else None

    def _write_raw(self, payload: str) -> None:
        with get_connection(self.db_path, busy_timeout_ms=self.busy_timeout_ms) as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value      = excluded.value,
                    updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now');
                """,
                (self.key, payload),
            )
