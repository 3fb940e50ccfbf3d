"""
SQLite connection management for the key-value provider store.

``get_connection()`` is a context manager that:
  - Creates the database file (and parent directories) on demand.
  - Sets a busy timeout so a poll that lands during an admin write waits
    instead of failing immediately.
  - Optionally enables WAL so readers never block the writer.
  - Commits on clean exit, rolls back on exception, always closes.

Usage::

    from provider_ranker.db.connection import get_connection

    with get_connection("data/store/providers.db") as conn:
        conn.execute("SELECT value FROM kv_store WHERE key = ?", ("providers",))
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

logger = logging.getLogger(__name__)

KV_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
"""


@contextmanager
def get_connection(
    db_path: str,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Generator[sqlite3.Connection, None, None]:
    """Yield a configured SQLite connection with the ``kv_store`` table present.

    Args:
        db_path: Database file path, or ``":memory:"``.
        wal_mode: Enable WAL journal mode.
        busy_timeout_ms: Lock wait before ``OperationalError``.

    Yields:
        An open ``sqlite3.Connection`` using ``sqlite3.Row`` rows.

    Raises:
        sqlite3.OperationalError: If the database cannot be opened or is locked.
    """
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)
    conn.row_factory = sqlite3.Row

    try:
        conn.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)};")
        if wal_mode and db_path != ":memory:":
            conn.execute("PRAGMA journal_mode = WAL;")
        conn.executescript(KV_SCHEMA)

        yield conn
        conn.commit()

    except Exception:
        conn.rollback()
        raise

    finally:
        conn.close()
