"""Header aggregates: provider count and mean quality, price and lead time."""

from __future__ import annotations

import math
from statistics import fmean
from typing import Sequence

from provider_ranker.models.provider import ProviderRecord, ProviderStats


def compute_stats(records: Sequence[ProviderRecord]) -> ProviderStats:
    """Summarize ``records``; an empty set yields all-zero stats.

    Missing values count as 0.  ``avg_quality`` is rounded to one decimal,
    ``avg_price`` to two and ``avg_time`` to whole days (halves round up).
    """
    if not records:
        return ProviderStats()

    return ProviderStats(
        total=len(records),
        avg_quality=round(fmean(r.quality or 0.0 for r in records), 1),
        avg_price=round(fmean(r.price or 0.0 for r in records), 2),
        avg_time=math.floor(fmean(r.time or 0.0 for r in records) + 0.5),
    )
