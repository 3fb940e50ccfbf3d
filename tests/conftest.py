"""
Shared pytest fixtures for the provider ranker test suite.

Provides:
  - ``sample_records``: the two-provider set from the scoring docs
    (A scores 81.0, B scores 77.5).
  - ``RecordingPresenter``: a ``Presenter`` that records every call.
  - ``FakeClock``: manual time source + sleep for scheduler tests.
  - ``json_store`` / ``sqlite_store``: file-backed stores under ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from provider_ranker.models.provider import ProviderRecord
from provider_ranker.presenter import Presenter
from provider_ranker.store.json_file import JsonFileStore
from provider_ranker.store.sqlite_store import SqliteStore


# ── Test doubles ──────────────────────────────────────────────────────────────

class RecordingPresenter(Presenter):
    """Presenter that stores each call as ``(method, args)`` in ``calls``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []

    def render(self, providers, best_id) -> None:
        self.calls.append(("render", (tuple(providers), best_id)))

    def render_stats(self, stats) -> None:
        self.calls.append(("render_stats", (stats,)))

    def render_chart(self, providers) -> None:
        self.calls.append(("render_chart", (tuple(providers),)))

    def report_no_data(self, message) -> None:
        self.calls.append(("report_no_data", (message,)))

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def last(self, method: str) -> tuple:
        for name, args in reversed(self.calls):
            if name == method:
                return args
        raise AssertionError(f"{method} was never called")


class FakeClock:
    """Monotonic clock that only advances when ``sleep()`` is called."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def sample_records() -> list[ProviderRecord]:
    """A (10, 8, 5d, 100) and B (20, 10, 2d, 50)."""
    return [
        ProviderRecord(id=1, name="A", price=10, quality=8, time=5, capacity=100),
        ProviderRecord(id=2, name="B", price=20, quality=10, time=2, capacity=50),
    ]


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def json_store(tmp_path: Path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "store" / "providers.json")


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SqliteStore:
    return SqliteStore(str(tmp_path / "store" / "providers.db"))
