"""
Presenter boundary: the engine's only way of showing anything.

The engine calls these hooks after every successful (re)score and never
looks at how (or whether) they render.  ``ConsolePresenter`` is the
terminal implementation used by the CLI; tests use a recording fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

import typer

from provider_ranker.models.provider import ProviderId, ProviderStats, ScoredProvider
from provider_ranker.reporting.formatters import (
    format_breakdown_chart,
    format_ranking_table,
    format_stats_summary,
)


class Presenter(ABC):
    """Rendering surface consumed by ``RankingEngine``."""

    @abstractmethod
    def render(
        self,
        providers: Sequence[ScoredProvider],
        best_id:   Optional[ProviderId],
    ) -> None:
        """Render the ranking table (``providers`` already sorted)."""

    @abstractmethod
    def render_stats(self, stats: ProviderStats) -> None:
        """Render the header aggregates."""

    @abstractmethod
    def render_chart(self, providers: Sequence[ScoredProvider]) -> None:
        """Render the per-criterion breakdown chart (non-empty input only)."""

    @abstractmethod
    def report_no_data(self, message: str) -> None:
        """Tell the user there is nothing to visualize."""


class ConsolePresenter(Presenter):
    """Writes formatted ASCII output through ``echo`` (``typer.echo`` by default)."""

    def __init__(self, echo: Callable[..., None] = typer.echo) -> None:
        self._echo = echo

    def render(self, providers, best_id) -> None:
        self._echo(format_ranking_table(providers, best_id))

    def render_stats(self, stats) -> None:
        self._echo(format_stats_summary(stats))

    def render_chart(self, providers) -> None:
        self._echo(format_breakdown_chart(providers))

    def report_no_data(self, message) -> None:
        self._echo(f"[WARN] {message}", err=True)
