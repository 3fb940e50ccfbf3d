"""
Tests for provider_ranker/scoring/ranker.py and scoring/stats.py.

What we test
------------
sort_providers():
  - Score descending.
  - Equal scores keep input order (stable sort).
  - Unscored records fall back to case-insensitive name order.
  - Input sequence is not modified.

select_best():
  - Strictly greatest score wins.
  - Ties go to the first record in the original (unsorted) sequence.
  - Empty input / unscored input -> None.
  - A score of 0 is still a valid candidate.

rank_providers():
  - Worked example -> [A (best), B].
  - Empty input -> empty view, no best, zero stats.

compute_stats():
  - Count and averages with the documented rounding.
  - Empty input -> all zero.
"""

from __future__ import annotations

import pytest

from provider_ranker.models.provider import ProviderRecord, ProviderStats, ScoredProvider
from provider_ranker.scoring.ranker import (
    RankedView,
    rank_providers,
    select_best,
    sort_providers,
)
from provider_ranker.scoring.scorer import score_providers
from provider_ranker.scoring.stats import compute_stats


# ── Helpers ────────────────────────────────────────────────────────────────────

def _scored(id: int, score: float, name: str | None = None) -> ScoredProvider:
    return ScoredProvider(
        id=id,
        name=name or f"P{id}",
        price=10.0,
        quality=5.0,
        time=3.0,
        capacity=10.0,
        score=score,
        breakdown=(score, 0.0, 0.0, 0.0),
    )


def _raw(id: int, name: str) -> ProviderRecord:
    return ProviderRecord(id=id, name=name, price=1, quality=1, time=1, capacity=1)


# ── sort_providers ─────────────────────────────────────────────────────────────

class TestSortProviders:
    def test_sorted_by_score_descending(self):
        items = [_scored(1, 10.0), _scored(2, 50.0), _scored(3, 30.0)]
        assert [sp.id for sp in sort_providers(items)] == [2, 3, 1]

    def test_equal_scores_keep_input_order(self):
        items = [_scored(5, 40.0), _scored(2, 40.0), _scored(8, 40.0)]
        assert [sp.id for sp in sort_providers(items)] == [5, 2, 8]

    def test_unscored_records_sorted_by_name(self):
        items = [_raw(1, "charlie"), _raw(2, "Alpha"), _raw(3, "bravo")]
        assert [r.name for r in sort_providers(items)] == ["Alpha", "bravo", "charlie"]

    def test_input_not_modified(self):
        items = [_scored(1, 10.0), _scored(2, 50.0)]
        sort_providers(items)
        assert [sp.id for sp in items] == [1, 2]


# ── select_best ────────────────────────────────────────────────────────────────

class TestSelectBest:
    def test_strict_maximum_wins(self):
        items = [_scored(1, 10.0), _scored(2, 90.0), _scored(3, 30.0)]
        assert select_best(items).id == 2

    def test_tie_goes_to_first_encountered(self):
        items = [_scored(1, 10.0), _scored(7, 90.0, "Zed"), _scored(3, 90.0, "Abe")]
        assert select_best(items).id == 7

    def test_tie_is_not_alphabetical(self):
        items = [_scored(1, 55.5, "Zulu"), _scored(2, 55.5, "Alpha")]
        assert select_best(items).name == "Zulu"

    def test_empty_returns_none(self):
        assert select_best([]) is None

    def test_unscored_returns_none(self):
        assert select_best([_raw(1, "A"), _raw(2, "B")]) is None

    def test_zero_score_is_still_selected(self):
        assert select_best([_scored(4, 0.0)]).id == 4


# ── rank_providers ─────────────────────────────────────────────────────────────

class TestRankProviders:
    def test_worked_example(self, sample_records):
        view = rank_providers(score_providers(sample_records))
        assert [sp.name for sp in view.providers] == ["A", "B"]
        assert [sp.score for sp in view.providers] == [81.0, 77.5]
        assert view.best_id == 1
        assert view.best.name == "A"

    def test_best_uses_unsorted_order(self):
        # Sorted order and input order agree on score but not on position.
        view = rank_providers([_scored(1, 20.0), _scored(2, 60.0), _scored(3, 60.0)])
        assert view.best_id == 2
        assert [sp.id for sp in view.providers] == [2, 3, 1]

    def test_empty_input(self):
        view = rank_providers([])
        assert view == RankedView()
        assert view.is_empty
        assert view.best_id is None
        assert view.best is None
        assert view.stats == ProviderStats()

    def test_stats_attached(self, sample_records):
        view = rank_providers(score_providers(sample_records))
        assert view.stats.total == 2


# ── compute_stats ──────────────────────────────────────────────────────────────

class TestComputeStats:
    def test_averages(self, sample_records):
        stats = compute_stats(sample_records)
        assert stats.total == 2
        assert stats.avg_quality == pytest.approx(9.0)
        assert stats.avg_price == pytest.approx(15.0)
        assert stats.avg_time == 4     # 3.5 rounds up

    def test_rounding(self):
        records = [
            ProviderRecord(id=1, name="A", price=10.005, quality=7.25, time=1, capacity=1),
            ProviderRecord(id=2, name="B", price=10.0, quality=7.0, time=1, capacity=1),
            ProviderRecord(id=3, name="C", price=10.0, quality=7.0, time=2, capacity=1),
        ]
        stats = compute_stats(records)
        assert stats.avg_quality == pytest.approx(7.1)
        assert stats.avg_time == 1

    def test_missing_values_count_as_zero(self):
        records = [
            ProviderRecord(id=1, name="A", price=20, quality=None, time=None),
            ProviderRecord(id=2, name="B", price=None, quality=6, time=4),
        ]
        stats = compute_stats(records)
        assert stats.avg_price == pytest.approx(10.0)
        assert stats.avg_quality == pytest.approx(3.0)
        assert stats.avg_time == 2

    def test_empty(self):
        assert compute_stats([]) == ProviderStats(
            total=0, avg_quality=0.0, avg_price=0.0, avg_time=0
        )
