"""Pydantic v2 models for the cattle market metrics dataset.

MetricRecord holds one category row; unfilled metric fields are None.
Dataset enforces that each state appears in at most one bucket.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

from .document import Document


class MetricRecord(BaseModel):
    """One category's metrics under a single region."""

    # Extra fields are kept so an overridden metric field order can add names.
    model_config = ConfigDict(extra="allow")

    category: str = Field(min_length=1)
    stock_group: str = Field(min_length=1)
    offered: str | None = None
    weight_range: str | None = None
    avg_weight: str | None = None
    dollar_head_range: str | None = None
    avg_dollar_head: str | None = None
    dollar_change: str | None = None
    c_kg_range: str | None = None
    avg_c_kg: str | None = None
    c_kg_change: str | None = None
    clearance: str | None = None

    @property
    def is_complete(self) -> bool:
        """True if every metric field was filled."""
        values = self.model_dump(exclude={"category", "stock_group"})
        return all(v is not None for v in values.values())


class StateBucket(BaseModel):
    """All category records collected under one state code."""

    state: str = Field(min_length=1)
    categories: list[MetricRecord] = Field(default_factory=list)


class Dataset(Document):
    """Parsed metrics page: national records plus per-state buckets."""

    national: list[MetricRecord] = Field(default_factory=list)
    states: list[StateBucket] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_states_unique(self) -> Self:
        """A state code must not be split across two buckets."""
        seen: set[str] = set()
        for bucket in self.states:
            if bucket.state in seen:
                raise ValueError(f"Duplicate state bucket for {bucket.state!r}")
            seen.add(bucket.state)
        return self

    def state(self, code: str) -> StateBucket | None:
        """Return the bucket for a state code, or None."""
        for bucket in self.states:
            if bucket.state == code:
                return bucket
        return None

    @property
    def category_count(self) -> int:
        return len(self.national) + sum(len(b.categories) for b in self.states)
