"""
Ranking engine: the single owner of the in-memory provider set.

``RankingEngine`` holds the last-applied record set and the ``RankedView``
derived from it.  ``apply()`` runs Normalizer → Scorer → Ranker on a new
set and swaps both references in one step; nothing is ever mutated in
place, so a reader always sees a complete, consistent view.

After every apply the presenter (if any) is asked to re-render the table
and stats, and the chart too while the chart view is open.

Usage::

    engine = RankingEngine(presenter=ConsolePresenter())
    view = engine.apply(store.read() or [])
    engine.show_chart()
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from provider_ranker.models.provider import ProviderRecord
from provider_ranker.presenter import Presenter
from provider_ranker.reporting.formatters import NO_DATA_MESSAGE
from provider_ranker.scoring.ranker import RankedView, rank_providers
from provider_ranker.scoring.scorer import score_providers

logger = logging.getLogger(__name__)


class RankingEngine:
    """Owns the provider set, its ranked view and the chart-visibility flag.

    Attributes:
        presenter:     Rendering surface, or ``None`` for headless use.
        chart_visible: Whether the breakdown chart is currently open.
    """

    def __init__(self, presenter: Optional[Presenter] = None) -> None:
        self.presenter = presenter
        self.chart_visible = False
        self._records: tuple[ProviderRecord, ...] = ()
        self._view: RankedView = RankedView()

    # ── Read access ───────────────────────────────────────────────────────────

    @property
    def records(self) -> tuple[ProviderRecord, ...]:
        """The last-applied raw record set (input order)."""
        return self._records

    @property
    def view(self) -> RankedView:
        """The ranked view derived from ``records``."""
        return self._view

    # ── Updates ───────────────────────────────────────────────────────────────

    def apply(self, records: Sequence[ProviderRecord]) -> RankedView:
        """Replace the record set, re-score, re-rank and notify the presenter.

        An empty set skips scoring and yields an empty view with zero stats.
        """
        new_records = tuple(records)
        view = rank_providers(score_providers(new_records))

        # Swap both references together.
        self._records, self._view = new_records, view

        if view.best is not None:
            logger.info(
                "Ranked %d providers; best=%r (%.1f).",
                len(view.providers), view.best.name, view.best.score,
            )
        else:
            logger.info("Ranked %d providers.", len(view.providers))

        self._notify()
        return view

    def show_chart(self) -> bool:
        """Open the breakdown chart.

        Returns:
            ``True`` if the chart was rendered, ``False`` when there are no
            providers (the presenter reports "no data" instead).
        """
        if self._view.is_empty:
            if self.presenter is not None:
                self.presenter.report_no_data(NO_DATA_MESSAGE)
            return False

        self.chart_visible = True
        if self.presenter is not None:
            self.presenter.render_chart(self._view.providers)
        return True

    def hide_chart(self) -> None:
        self.chart_visible = False

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _notify(self) -> None:
        if self.presenter is None:
            return
        view = self._view
        self.presenter.render(view.providers, view.best_id)
        self.presenter.render_stats(view.stats)
        if self.chart_visible and not view.is_empty:
            self.presenter.render_chart(view.providers)
