"""Label classifier: Region, Category or plain data.

Classification is closed-list exact matching only. A line that merely
resembles a category (e.g. "Steers 0-200") is data, never a boundary.
"""

import enum
from dataclasses import dataclass

from cattle_text.config import DEFAULT_CONFIG, ParserConfig
from cattle_text.normalizer import clean_line, strip_count_suffix


class LabelKind(enum.Enum):
    REGION = "region"
    CATEGORY = "category"
    DATA = "data"


@dataclass(frozen=True)
class Label:
    """Classification result for one line."""

    kind: LabelKind
    value: str  # canonical region code, category name, or the cleaned line

    @property
    def is_boundary(self) -> bool:
        """Region and category lines end a metric consumption window."""
        return self.kind is not LabelKind.DATA


def classify(line: str, config: ParserConfig = DEFAULT_CONFIG) -> Label:
    """Classify a line against the region alias table and category list.

    The cleaned line is tried first, then its count-suffix-stripped form
    ("National 50" -> "National"). Region lookup is case-insensitive;
    category lookup is exact.
    """
    cleaned = clean_line(line)
    stripped = strip_count_suffix(cleaned)
    candidates = (cleaned,) if stripped == cleaned else (cleaned, stripped)

    for candidate in candidates:
        region = config.region_lookup.get(candidate.casefold())
        if region is not None:
            return Label(LabelKind.REGION, region)
        if candidate in config.category_set:
            return Label(LabelKind.CATEGORY, candidate)

    return Label(LabelKind.DATA, cleaned)


def stock_group(category: str, config: ParserConfig = DEFAULT_CONFIG) -> str:
    """Derive the coarse stock group (Steers / Heifers / Breeding Stock)."""
    for prefix, group in config.stock_group_prefixes:
        if category.startswith(prefix):
            return group
    return config.default_stock_group
