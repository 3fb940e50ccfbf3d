"""
Provider ranker: display ordering and "best provider" selection.

Usage flow
----------
1. score_providers(records)            -> tuple[ScoredProvider, ...]  (input order)
2. rank_providers(scored)              -> RankedView
       .providers  sorted by score descending
       .best_id    id of the best provider, or None
       .stats      ProviderStats for the header

Ordering
--------
Score descending.  When either side of a comparison has no score yet (a
raw ``ProviderRecord``), the pair is ordered by name, case-insensitively.
The sort is stable, so equal scores keep their input order.

Best selection
--------------
A left-to-right fold over the *unsorted* input: the running best is only
replaced by a strictly greater score.  Ties for the top score therefore go
to whichever provider came first in the input, not to the alphabetically
first one.

A score of 0 is a valid (lowest) score here; only the presentation layer
shows it as "Not Rated".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Optional, Sequence, Union

from provider_ranker.models.provider import (
    ProviderId,
    ProviderRecord,
    ProviderStats,
    ScoredProvider,
)
from provider_ranker.scoring.stats import compute_stats

Rankable = Union[ProviderRecord, ScoredProvider]


@dataclass(frozen=True)
class RankedView:
    """One refresh cycle's output, handed to the presenter as a unit.

    Attributes:
        providers: Scored providers in display order.
        best_id:   Id of the best provider; ``None`` when there are none.
        stats:     Header aggregates for the same record set.
    """

    providers: tuple[ScoredProvider, ...] = ()
    best_id:   Optional[ProviderId] = None
    stats:     ProviderStats = field(default_factory=ProviderStats)

    @property
    def is_empty(self) -> bool:
        return not self.providers

    @property
    def best(self) -> Optional[ScoredProvider]:
        for sp in self.providers:
            if sp.id == self.best_id:
                return sp
        return None


def _score_of(item: Rankable) -> Optional[float]:
    return getattr(item, "score", None)


def _compare(a: Rankable, b: Rankable) -> int:
    score_a, score_b = _score_of(a), _score_of(b)
    if score_a is not None and score_b is not None:
        # Higher score first.
        return (score_b > score_a) - (score_b < score_a)
    name_a, name_b = (a.name.casefold(), a.name), (b.name.casefold(), b.name)
    return (name_a > name_b) - (name_a < name_b)


def sort_providers(items: Sequence[Rankable]) -> list[Rankable]:
    """Return a new list in display order; ``items`` is not modified."""
    return sorted(items, key=cmp_to_key(_compare))


def select_best(items: Sequence[Rankable]) -> Optional[Rankable]:
    """Return the provider with the strictly greatest score (first wins on ties).

    Returns ``None`` for an empty sequence or when the first item has no
    score yet.
    """
    if not items or _score_of(items[0]) is None:
        return None

    best = items[0]
    for current in items[1:]:
        current_score = _score_of(current)
        if current_score is not None and current_score > best.score:
            best = current
    return best


def rank_providers(scored: Sequence[ScoredProvider]) -> RankedView:
    """Build the ``RankedView`` for a freshly scored set (input order)."""
    if not scored:
        return RankedView()

    best = select_best(scored)
    return RankedView(
        providers=tuple(sort_providers(scored)),
        best_id=best.id if best is not None else None,
        stats=compute_stats(scored),
    )
