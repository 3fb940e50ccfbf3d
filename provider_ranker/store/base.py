"""
Abstract key-value store holding the serialized provider set.

The admin side writes a JSON array of provider objects under a fixed key
(``"providers"`` by default); the ranker only ever reads it back.  Backends
implement two primitives, ``_read_raw()`` and ``_write_raw()``; parsing,
validation and error recovery live here so every backend behaves the same.

Read contract
-------------
- ``load()``  strict: returns the records, ``None`` when the key is absent,
  raises ``StoreReadError`` for an unreadable backend or a payload that
  fails to parse or validate.
- ``read()``  lenient: same as ``load()`` but logs a ``StoreReadError`` and
  returns ``None``.  This is what the watcher polls; a bad payload leaves
  the last-good state in place.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from provider_ranker.models.provider import (
    ProviderRecord,
    dump_record_set,
    parse_record_set,
)

logger = logging.getLogger(__name__)


class StoreReadError(Exception):
    """Raised when the stored payload is unreadable or malformed."""


class ProviderStore(ABC):
    """Base class for provider store backends.

    Attributes:
        key: Logical key the provider payload is stored under.
    """

    backend_name: str  # Override in subclass

    def __init__(self, key: str = "providers") -> None:
        self.key = key

    # ── Backend primitives ────────────────────────────────────────────────────

    @abstractmethod
    def _read_raw(self) -> Optional[str]:
        """Return the raw payload string, or ``None`` if the key is absent.

        Backend I/O failures should be raised as ``StoreReadError``.
        """

    @abstractmethod
    def _write_raw(self, payload: str) -> None:
        """Persist ``payload`` under ``self.key``, replacing any previous value."""

    # ── Public API ────────────────────────────────────────────────────────────

    def load(self) -> Optional[list[ProviderRecord]]:
        """Strict read.  See module docstring.

        Raises:
            StoreReadError: On backend failure or malformed payload.
        """
        raw = self._read_raw()
        if raw is None:
            return None
        try:
            return parse_record_set(raw)
        except ValueError as exc:
            raise StoreReadError(
                f"Malformed provider payload under key '{self.key}': {exc}"
            ) from exc

    def read(self) -> Optional[list[ProviderRecord]]:
        """Lenient read used by the watcher; never raises ``StoreReadError``."""
        try:
            return self.load()
        except StoreReadError as exc:
            logger.warning("[%s] Error reading provider data: %s", self.backend_name, exc)
            return None

    def write(self, records: Sequence[ProviderRecord]) -> None:
        """Replace the stored provider set with ``records``."""
        payload = dump_record_set(list(records))
        self._write_raw(payload)
        logger.info(
            "[%s] Wrote %d providers under key '%s'.",
            self.backend_name, len(records), self.key,
        )
