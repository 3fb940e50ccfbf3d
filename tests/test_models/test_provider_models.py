"""Tests for provider_ranker/models/provider.py."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from provider_ranker.models.provider import (
    ProviderRecord,
    ScoredProvider,
    dump_record_set,
    parse_record_set,
)


def _payload(*records: dict) -> str:
    return json.dumps(list(records))


class TestProviderRecord:
    def test_valid_record(self):
        rec = ProviderRecord(id=1, name="Acme", price=9.5, quality=7, time=3, capacity=40)
        assert rec.quality == 7.0

    def test_string_id_allowed(self):
        assert ProviderRecord(id="sup-001", name="Acme").id == "sup-001"

    def test_numeric_fields_optional(self):
        rec = ProviderRecord(id=1, name="Acme")
        assert rec.price is None and rec.capacity is None

    def test_quality_above_ten_rejected(self):
        with pytest.raises(ValidationError):
            ProviderRecord(id=1, name="Acme", quality=11)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            ProviderRecord(id=1, name="Acme", price=-1)

    def test_frozen(self):
        rec = ProviderRecord(id=1, name="Acme")
        with pytest.raises(ValidationError):
            rec.name = "Other"


class TestScoredProvider:
    def test_zero_score_is_not_rated(self):
        sp = ScoredProvider(id=1, name="A", score=0.0, breakdown=(0.0, 0.0, 0.0, 0.0))
        assert not sp.is_rated

    def test_score_above_100_rejected(self):
        with pytest.raises(ValidationError):
            ScoredProvider(id=1, name="A", score=100.5, breakdown=(100.5, 0, 0, 0))


class TestParseRecordSet:
    def test_parses_array(self):
        records = parse_record_set(_payload(
            {"id": 1, "name": "A", "price": 10, "quality": 8, "time": 5, "capacity": 100},
            {"id": 2, "name": "B", "price": 20, "quality": 10, "time": 2, "capacity": 50},
        ))
        assert [r.name for r in records] == ["A", "B"]
        assert records[1].time == 2.0

    def test_empty_array(self):
        assert parse_record_set("[]") == []

    def test_invalid_json_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_record_set("[{not json")

    def test_non_array_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_record_set('{"id": 1, "name": "A"}')

    def test_duplicate_ids_raise_value_error(self):
        with pytest.raises(ValueError, match="Duplicate provider id"):
            parse_record_set(_payload({"id": 1, "name": "A"}, {"id": 1, "name": "B"}))

    def test_dump_preserves_order(self):
        records = [ProviderRecord(id=2, name="B"), ProviderRecord(id=1, name="A")]
        assert [r["id"] for r in json.loads(dump_record_set(records))] == [2, 1]
