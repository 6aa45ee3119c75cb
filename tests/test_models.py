"""Unit tests for the pydantic document models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from cattle_text.config import METRIC_FIELDS
from cattle_text.models import Dataset, MetricRecord, StateBucket, TemplateSet


@pytest.fixture
def record() -> MetricRecord:
    return MetricRecord(category="Bulls", stock_group="Breeding Stock", offered="12")


class TestMetricRecord:
    """Tests for MetricRecord fields and constraints."""

    def test_unfilled_fields_default_none(self, record):
        assert record.clearance is None
        assert record.is_complete is False

    def test_complete(self):
        values = {name: "x" for name in METRIC_FIELDS}
        full = MetricRecord(category="Bulls", stock_group="Breeding Stock", **values)
        assert full.is_complete is True

    def test_empty_category_rejected(self):
        with pytest.raises(ValidationError):
            MetricRecord(category="", stock_group="Steers")

    def test_serialized_key_order(self, record):
        keys = list(record.model_dump())
        assert keys == ["category", "stock_group", *METRIC_FIELDS]

    def test_extra_fields_kept(self):
        rec = MetricRecord(category="Bulls", stock_group="Breeding Stock", price_index="101")
        assert rec.model_dump()["price_index"] == "101"


class TestDataset:
    """Tests for Dataset shape and invariants."""

    def test_duplicate_state_rejected(self, record):
        with pytest.raises(ValidationError, match="Duplicate state bucket"):
            Dataset(
                states=[
                    StateBucket(state="NSW", categories=[record]),
                    StateBucket(state="NSW", categories=[record]),
                ]
            )

    def test_json_shape(self, record):
        ds = Dataset(national=[record], states=[StateBucket(state="QLD", categories=[record])])
        dumped = ds.model_dump(mode="json")
        assert list(dumped) == ["updated_at", "national", "states"]
        assert dumped["states"][0]["state"] == "QLD"
        assert dumped["national"][0]["offered"] == "12"

    def test_stamped_returns_copy(self, record):
        ds = Dataset(national=[record])
        when = datetime(2026, 10, 17, 6, 30, tzinfo=timezone.utc)
        stamped = ds.stamped(when)
        assert stamped.updated_at == "2026-10-17T06:30:00+00:00"
        assert ds.updated_at is None
        assert stamped.national == ds.national

    def test_stamped_default_now(self):
        stamped = Dataset().stamped()
        assert datetime.fromisoformat(stamped.updated_at).tzinfo is not None

    def test_category_count(self, record):
        ds = Dataset(
            national=[record, record],
            states=[StateBucket(state="SA", categories=[record])],
        )
        assert ds.category_count == 3

    def test_state_lookup(self, record):
        ds = Dataset(states=[StateBucket(state="WA", categories=[record])])
        assert ds.state("WA").categories == [record]
        assert ds.state("NT") is None


class TestTemplateSet:
    def test_to_json(self):
        text = TemplateSet().stamped(datetime(2026, 1, 1, tzinfo=timezone.utc)).to_json()
        assert '"templates": []' in text
        assert "2026-01-01T00:00:00+00:00" in text
