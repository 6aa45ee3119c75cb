"""Parser tables and host configuration for the cattle text scraper.

The parser's behaviour is driven entirely by four tables -- the junk-line
predicate, the region alias table, the known category list and the metric
field order. They live on ``ParserConfig`` so that source-format drift can
be absorbed by editing data (or a JSON tables file) instead of code.
"""

import json
import logging
from dataclasses import dataclass, replace
from functools import cached_property
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from cattle_text.exceptions import ConfigError

logger = logging.getLogger(__name__)

NATIONAL = "National"

# Lines that are pure UI chrome and carry no data value.
UI_CHROME_EXACT: tuple[str, ...] = ("Select Row",)

JUNK_EXACT: tuple[str, ...] = UI_CHROME_EXACT + (
    # Column header restatements
    "State",
    "Stock Group",
    "Category",
    "Stock Category",
    "Offered",
    "Weight Range",
    "Avg Weight",
    "$/Head Range",
    "Avg $/Head",
    "$ Change",
    "c/kg Range",
    "Avg c/kg",
    "c/kg Change",
    "Change",
    "Clearance",
    # Stock group headers repeated on every row
    "Steers",
    "Heifers",
    "Breeding Stock",
)

JUNK_SUBSTRINGS: tuple[str, ...] = (
    "Scroll",
    "Press Enter",
    "Additional Conditional Formatting",
    "Applied filters",
    "Species is Cattle",
    "Date ",
)

# Surface form (case-insensitive) -> canonical region code.
REGION_ALIASES: dict[str, str] = {
    "National": NATIONAL,
    "Australia": NATIONAL,
    "NSW": "NSW",
    "New South Wales": "NSW",
    "QLD": "QLD",
    "Queensland": "QLD",
    "VIC": "VIC",
    "Victoria": "VIC",
    "SA": "SA",
    "South Australia": "SA",
    "TAS": "TAS",
    "Tasmania": "TAS",
    "WA": "WA",
    "Western Australia": "WA",
    "NT": "NT",
    "Northern Territory": "NT",
}

CATEGORIES: tuple[str, ...] = (
    "Steers 0-200kg",
    "Steers 200-280kg",
    "Steers 280-330kg",
    "Steers 330-400kg",
    "Steers 400kg +",
    "Heifers 0-200kg",
    "Heifers 200-280kg",
    "Heifers 280-330kg",
    "Heifers 330-400kg",
    "Heifers 400kg +",
    "Cows & Calves",
    "PTIC Cows",
    "PTIC Cows & Calves",
    "PTIC Heifers",
    "NSM Cows",
    "NSM Heifers",
    "Joined Cows",
    "Joined Heifers",
    "Unjoined Heifers",
    "Mixed Sex Weaners",
    "Cows Not Stated",
    "Bulls",
)

METRIC_FIELDS: tuple[str, ...] = (
    "offered",
    "weight_range",
    "avg_weight",
    "dollar_head_range",
    "avg_dollar_head",
    "dollar_change",
    "c_kg_range",
    "avg_c_kg",
    "c_kg_change",
    "clearance",
)

# Category-name prefix -> stock group; anything else is DEFAULT_STOCK_GROUP.
STOCK_GROUP_PREFIXES: tuple[tuple[str, str], ...] = (
    ("Steers", "Steers"),
    ("Heifers", "Heifers"),
)
DEFAULT_STOCK_GROUP = "Breeding Stock"

# Record keys set by the assembler itself, never by positional consumption.
RESERVED_RECORD_KEYS = frozenset({"category", "stock_group"})


@dataclass(frozen=True)
class ParserConfig:
    """Lookup tables for the line normalizer, classifier and assembler.

    Instances are immutable so a single config can be shared by any number
    of parse runs. Use ``with_overrides()`` or ``load_tables()`` to derive
    an adjusted copy.
    """

    junk_exact: tuple[str, ...] = JUNK_EXACT
    junk_substrings: tuple[str, ...] = JUNK_SUBSTRINGS
    # (surface form, canonical code) pairs; a JSON tables file gives a mapping.
    region_aliases: tuple[tuple[str, str], ...] = tuple(REGION_ALIASES.items())
    categories: tuple[str, ...] = CATEGORIES
    metric_fields: tuple[str, ...] = METRIC_FIELDS
    stock_group_prefixes: tuple[tuple[str, str], ...] = STOCK_GROUP_PREFIXES
    default_stock_group: str = DEFAULT_STOCK_GROUP

    @cached_property
    def junk_set(self) -> frozenset[str]:
        return frozenset(self.junk_exact)

    @cached_property
    def category_set(self) -> frozenset[str]:
        return frozenset(self.categories)

    @cached_property
    def region_lookup(self) -> dict[str, str]:
        """Alias table keyed by casefolded surface form."""
        return {alias.casefold(): code for alias, code in self.region_aliases}

    @cached_property
    def canonical_regions(self) -> tuple[str, ...]:
        """Distinct canonical region codes, in alias-table order."""
        return tuple(dict.fromkeys(code for _, code in self.region_aliases))

    def with_overrides(self, **tables) -> "ParserConfig":
        """Return a copy with the given tables replaced.

        Raises:
            ConfigError: If a table name is unknown or a value is invalid.
        """
        try:
            parsed = TablesFile.model_validate(tables)
        except ValidationError as e:
            raise ConfigError(f"Invalid parser tables: {e}") from e

        updates = {}
        for name, value in parsed.model_dump(exclude_none=True).items():
            if name == "region_aliases":
                updates[name] = tuple(value.items())
            elif name == "stock_group_prefixes":
                updates[name] = tuple((prefix, group) for prefix, group in value)
            elif isinstance(value, list):
                updates[name] = tuple(value)
            else:
                updates[name] = value
        return replace(self, **updates)


class TablesFile(BaseModel):
    """Schema for a JSON tables override file. Every key is optional."""

    model_config = ConfigDict(extra="forbid")

    junk_exact: list[str] | None = None
    junk_substrings: list[str] | None = None
    region_aliases: dict[str, str] | None = None
    categories: list[str] | None = None
    metric_fields: list[str] | None = None
    stock_group_prefixes: list[tuple[str, str]] | None = None
    default_stock_group: str | None = None

    @field_validator("metric_fields")
    @classmethod
    def validate_metric_fields(cls, v: list[str] | None) -> list[str] | None:
        """Field names must be distinct and must not shadow record keys."""
        if v is not None:
            reserved = set(v) & RESERVED_RECORD_KEYS
            if reserved:
                raise ValueError(
                    f"metric_fields must not contain {sorted(reserved)}"
                )
            if len(set(v)) != len(v):
                raise ValueError("metric_fields must not repeat a name")
        return v


DEFAULT_CONFIG = ParserConfig()

# The template page has no column headers, and its stock labels can be bare
# group names ("Steers"), so only UI chrome is dropped there.
TEMPLATE_CONFIG = ParserConfig(junk_exact=UI_CHROME_EXACT)


def load_tables(path: str | Path, base: ParserConfig | None = None) -> ParserConfig:
    """Load a JSON tables file and apply it on top of ``base``.

    Args:
        path: JSON file whose keys are any subset of the ParserConfig tables.
        base: Config to override (default: DEFAULT_CONFIG).

    Raises:
        ConfigError: If the file is missing, not JSON, or fails validation.
    """
    base = base or DEFAULT_CONFIG
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Tables file not found: {path}", source=str(path)) from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read tables file {path}: {e}", source=str(path)) from e

    if not isinstance(raw, dict):
        raise ConfigError(
            f"Tables file {path} must contain a JSON object, got {type(raw).__name__}",
            source=str(path),
        )

    config = base.with_overrides(**raw)
    logger.info("Loaded parser tables from %s (%s)", path, ", ".join(sorted(raw)) or "no keys")
    return config


@dataclass
class AppConfig:
    """Host settings for a single CLI run."""

    # Directory for output JSON and logs
    data_dir: str = "data"

    # Output document names (relative to data_dir)
    output_file: str = "text-metrics.json"
    templates_file: str = "text-message-templates.json"

    # Write the output even when only updated_at would change
    write_unchanged: bool = False
