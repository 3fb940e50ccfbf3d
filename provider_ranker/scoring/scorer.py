"""
Provider scoring: converts a ProviderRecord + CriteriaReference into a
ScoredProvider with a total score and a per-criterion breakdown.

Score formula (weighted sum, range 0–100)
-----------------------------------------
    total = (
        price_score        # min_price / (price or 1)        * 30
        + quality_score    # (quality or 0) / max_quality    * 35
        + time_score       # min_time / (time or 1)          * 20
        + capacity_score   # (capacity or 0) / max_capacity  * 15
    )

The weights are a published part of the formula: quality counts most,
capacity least.  Changing one changes every score users have seen.

Missing values
--------------
Lower-is-better fields (price, time) fall back to 1, so a missing price
neither divides by zero nor inflates the score toward infinity.
Higher-is-better fields (quality, capacity) fall back to 0, so missing data
earns nothing on that axis.  The asymmetry is intentional.

Each component is clamped to ``[0, weight]``.  The clamp bites whenever a
lower-is-better value that counts as 1 (missing, zero or a real value below
1) sits under a set minimum above it: prices ``[4, None]`` give the missing
one ``4 / 1 * 30 = 120``, clamped to 30.  The floored reference (see
``normalizer``) produces the same case, e.g. prices ``[0, 0.5]``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from provider_ranker.models.provider import (
    CriteriaReference,
    ProviderRecord,
    ScoredProvider,
)
from provider_ranker.scoring.normalizer import compute_reference

logger = logging.getLogger(__name__)

_RECORD_FIELDS = set(ProviderRecord.model_fields)

PRICE_WEIGHT    = 30.0
QUALITY_WEIGHT  = 35.0
TIME_WEIGHT     = 20.0
CAPACITY_WEIGHT = 15.0

# Criterion → weight, in breakdown order.
CRITERIA_WEIGHTS: dict[str, float] = {
    "price":    PRICE_WEIGHT,
    "quality":  QUALITY_WEIGHT,
    "time":     TIME_WEIGHT,
    "capacity": CAPACITY_WEIGHT,
}


@dataclass(frozen=True)
class ScoreComponents:
    """Weighted contribution of each criterion to one provider's score.

    Attributes:
        price_score:    0–30, cheaper is better.
        quality_score:  0–35, linear in quality.
        time_score:     0–20, shorter lead time is better.
        capacity_score: 0–15, linear in capacity.
    """

    price_score:    float
    quality_score:  float
    time_score:     float
    capacity_score: float

    @property
    def total(self) -> float:
        """Weighted total rounded to one decimal place."""
        return round(
            self.price_score
            + self.quality_score
            + self.time_score
            + self.capacity_score,
            1,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.price_score, self.quality_score, self.time_score, self.capacity_score)


def compute_components(
    record:    ProviderRecord,
    reference: CriteriaReference,
) -> ScoreComponents:
    """Compute the four weighted components for one record."""
    price_score    = reference.min_price / (record.price or 1) * PRICE_WEIGHT
    quality_score  = (record.quality or 0) / reference.max_quality * QUALITY_WEIGHT
    time_score     = reference.min_time / (record.time or 1) * TIME_WEIGHT
    capacity_score = (record.capacity or 0) / reference.max_capacity * CAPACITY_WEIGHT

    return ScoreComponents(
        price_score=_clamp(price_score, 0.0, PRICE_WEIGHT),
        quality_score=_clamp(quality_score, 0.0, QUALITY_WEIGHT),
        time_score=_clamp(time_score, 0.0, TIME_WEIGHT),
        capacity_score=_clamp(capacity_score, 0.0, CAPACITY_WEIGHT),
    )


def score_provider(
    record:    ProviderRecord,
    reference: CriteriaReference,
) -> ScoredProvider:
    """Score one record against the reference values of its set.

    Args:
        record:    The provider to score.
        reference: ``compute_reference()`` output for the set ``record`` came from.

    Returns:
        A new ``ScoredProvider``; ``record`` is left untouched.
    """
    components = compute_components(record, reference)
    return ScoredProvider(
        **record.model_dump(include=_RECORD_FIELDS),
        score=components.total,
        breakdown=components.as_tuple(),
    )


def score_providers(records: Sequence[ProviderRecord]) -> tuple[ScoredProvider, ...]:
    """Score a whole record set, preserving input order.

    An empty set short-circuits: no reference is computed and an empty
    tuple is returned.
    """
    if not records:
        logger.debug("No provider records; skipping scoring.")
        return ()

    reference = compute_reference(records)
    scored = tuple(score_provider(rec, reference) for rec in records)
    logger.debug("Scored %d providers.", len(scored))
    return scored


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
