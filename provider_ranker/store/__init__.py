"""
Provider store backends.

Modules
-------
base        : ProviderStore ABC + StoreReadError — parsing and error recovery.
json_file   : JsonFileStore — local-storage style JSON object file.
sqlite_store: SqliteStore — ``kv_store`` table via ``db.connection``.

``build_store(config)`` picks the backend named in ``[store]``.
"""

from __future__ import annotations

from provider_ranker.config import StoreConfig
from provider_ranker.store.base import ProviderStore, StoreReadError
from provider_ranker.store.json_file import JsonFileStore
from provider_ranker.store.sqlite_store import SqliteStore

__all__ = [
    "JsonFileStore",
    "ProviderStore",
    "SqliteStore",
    "StoreReadError",
    "build_store",
]


def build_store(config: StoreConfig) -> ProviderStore:
    """Construct the store backend described by ``config``."""
    if config.backend == "sqlite":
        return SqliteStore(
            config.path, key=config.key, busy_timeout_ms=config.busy_timeout_ms
        )
    return JsonFileStore(config.path, key=config.key)
