"""
Provider domain models.

``ProviderRecord`` is the raw entry as written to the store by the admin
side.  ``ScoredProvider`` is the derived, read-only result of one scoring
pass; a refresh never mutates a previous pass, it builds a fresh tuple.

``CriteriaReference`` holds the per-criterion best-in-set values a scoring
pass normalizes against.  It lives only as long as that pass.

``ProviderStats`` carries the header aggregates.  All models are frozen.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

ProviderId = Union[int, str]


class ProviderRecord(BaseModel):
    """One supplier/provider entry read from the store.

    Attributes:
        id: Opaque identifier, unique within a record set.
        name: Display name.
        price: Unit price in currency units (lower is better).
        quality: Quality rating on a 0–10 scale (higher is better).
        time: Lead time in days (lower is better).
        capacity: Supply capacity in units (higher is better).

    Numeric attributes may be absent from a stored payload; the scorer
    decides how an absent value counts.
    """

    model_config = ConfigDict(frozen=True)

    id: ProviderId
    name: str
    price: Optional[float] = Field(default=None, ge=0)
    quality: Optional[float] = Field(default=None, ge=0, le=10)
    time: Optional[float] = Field(default=None, ge=0)
    capacity: Optional[float] = Field(default=None, ge=0)


class ScoredProvider(ProviderRecord):
    """A ``ProviderRecord`` plus its weighted score.

    Attributes:
        score: Weighted total in [0, 100], rounded to one decimal.
        breakdown: ``(price, quality, time, capacity)`` contributions,
            unrounded.  They sum to ``score`` within rounding.
    """

    score: float = Field(ge=0, le=100)
    breakdown: tuple[float, float, float, float]

    @property
    def is_rated(self) -> bool:
        return self.score > 0


class CriteriaReference(BaseModel):
    """Best-in-set reference values for one scoring pass (each >= 1 when floored)."""

    model_config = ConfigDict(frozen=True)

    min_price: float
    max_quality: float
    min_time: float
    max_capacity: float


class ProviderStats(BaseModel):
    """Summary figures shown above the ranking table."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    avg_quality: float = 0.0
    avg_price: float = 0.0
    avg_time: int = 0


RECORD_LIST_ADAPTER: TypeAdapter[list[ProviderRecord]] = TypeAdapter(list[ProviderRecord])


def check_unique_ids(records: list[ProviderRecord]) -> list[ProviderRecord]:
    """Return ``records`` unchanged, or raise ``ValueError`` on a repeated id."""
    seen: set[ProviderId] = set()
    for rec in records:
        if rec.id in seen:
            raise ValueError(f"Duplicate provider id {rec.id!r} in record set.")
        seen.add(rec.id)
    return records


def parse_record_set(payload: str | bytes) -> list[ProviderRecord]:
    """Parse a serialized JSON array into validated records.

    Raises:
        ValueError: If the payload is not valid JSON, is not an array of
            provider objects (``pydantic.ValidationError``), or repeats an id.
    """
    return check_unique_ids(RECORD_LIST_ADAPTER.validate_json(payload))


def dump_record_set(records: list[ProviderRecord]) -> str:
    """Serialize records to the JSON array format the store holds."""
    return RECORD_LIST_ADAPTER.dump_json(list(records)).decode("utf-8")
