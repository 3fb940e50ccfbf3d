"""
JSON-file key-value store.

The file is a single JSON object mapping keys to *serialized* payload
strings, the same shape a browser's local storage has::

    {"providers": "[{\\"id\\": 1, \\"name\\": \\"Acme\\", ...}]"}

A missing file or a missing key both mean "no data yet".
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from provider_ranker.store.base import ProviderStore, StoreReadError

logger = logging.getLogger(__name__)


class JsonFileStore(ProviderStore):
    """Provider store backed by one JSON file on disk."""

    backend_name = "json"

    def __init__(self, path: str | Path, key: str = "providers") -> None:
        super().__init__(key=key)
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as exc:
            raise StoreReadError(f"Cannot read store file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreReadError(
                f"Store file {self.path} must hold a JSON object, got {type(data).__name__}."
            )
        return data

    def _read_raw(self) -> Optional[str]:
        value = self._read_all().get(self.key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StoreReadError(
                f"Value under key '{self.key}' must be a serialized string."
            )
        return value

    def _write_raw(self, payload: str) -> None:
        try:
            data = self._read_all()
        except StoreReadError:
            logger.warning("Overwriting unreadable store file %s.", self.path)
            data = {}
        data[self.key] = payload

        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so a concurrent poll never sees a half-written file.
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)
