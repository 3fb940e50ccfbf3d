"""
Reference values a scoring pass normalizes against.

For lower-is-better criteria (price, lead time) the reference is the set
minimum; for higher-is-better criteria (quality, capacity) it is the set
maximum.  An aggregate of exactly 0 is floored to 1 so the scorer never
divides by zero.  The floor is arithmetic, not a data-quality signal.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from provider_ranker.models.provider import CriteriaReference, ProviderRecord

logger = logging.getLogger(__name__)

REFERENCE_FLOOR = 1.0


def compute_reference(records: Sequence[ProviderRecord]) -> CriteriaReference:
    """Compute the per-criterion reference values for ``records``.

    Missing values are left out of an aggregate.  A criterion missing on
    every record falls back to the floor value.

    Raises:
        ValueError: If ``records`` is empty.  Callers skip scoring instead.
    """
    if not records:
        raise ValueError("Cannot compute reference values for an empty record set.")

    reference = CriteriaReference(
        min_price=_floored(_aggregate(min, (r.price for r in records))),
        max_quality=_floored(_aggregate(max, (r.quality for r in records))),
        min_time=_floored(_aggregate(min, (r.time for r in records))),
        max_capacity=_floored(_aggregate(max, (r.capacity for r in records))),
    )
    logger.debug("Reference values for %d records: %s", len(records), reference)
    return reference


def _aggregate(
    fn: Callable[[Iterable[float]], float],
    values: Iterable[Optional[float]],
) -> float:
    present = [v for v in values if v is not None]
    return fn(present) if present else 0.0


def _floored(value: float) -> float:
    return REFERENCE_FLOOR if value == 0 else value
