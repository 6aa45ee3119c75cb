"""Tests for parser tables and the JSON tables override file."""

import json
from dataclasses import FrozenInstanceError

import pytest

from cattle_text.config import (
    DEFAULT_CONFIG,
    METRIC_FIELDS,
    AppConfig,
    ParserConfig,
    load_tables,
)
from cattle_text.exceptions import ConfigError


class TestParserConfig:
    """Tests for defaults and derived lookups."""

    def test_defaults(self):
        config = ParserConfig()
        assert config.metric_fields == METRIC_FIELDS
        assert len(config.metric_fields) == 10
        assert "Select Row" in config.junk_set

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_CONFIG.categories = ()

    def test_region_lookup_casefolded(self):
        assert DEFAULT_CONFIG.region_lookup["victoria"] == "VIC"

    def test_with_overrides_returns_copy(self):
        config = DEFAULT_CONFIG.with_overrides(categories=["Bulls"])
        assert config.categories == ("Bulls",)
        assert "Steers 0-200kg" in DEFAULT_CONFIG.category_set
        assert "Steers 0-200kg" not in config.category_set

    def test_unknown_table_rejected(self):
        with pytest.raises(ConfigError, match="Invalid parser tables"):
            DEFAULT_CONFIG.with_overrides(colours=["red"])

    def test_wrong_type_rejected(self):
        with pytest.raises(ConfigError):
            DEFAULT_CONFIG.with_overrides(categories="Bulls")

    def test_hashable(self):
        config = DEFAULT_CONFIG.with_overrides(region_aliases={"Qld.": "QLD"})
        assert isinstance(config.region_aliases, tuple)
        assert isinstance(hash(config), int)
        assert {DEFAULT_CONFIG: "default"}[ParserConfig()] == "default"

    def test_region_alias_override_lookups(self):
        config = DEFAULT_CONFIG.with_overrides(region_aliases={"Qld.": "QLD", "NT": "NT"})
        assert config.region_lookup == {"qld.": "QLD", "nt": "NT"}
        assert config.canonical_regions == ("QLD", "NT")

    @pytest.mark.parametrize("name", ["category", "stock_group"])
    def test_metric_field_shadowing_record_key_rejected(self, name):
        with pytest.raises(ConfigError, match="must not contain"):
            DEFAULT_CONFIG.with_overrides(metric_fields=["offered", name])

    def test_repeated_metric_field_rejected(self):
        with pytest.raises(ConfigError, match="must not repeat"):
            DEFAULT_CONFIG.with_overrides(metric_fields=["offered", "offered"])


class TestLoadTables:
    """Tests for loading overrides from a JSON file."""

    def test_partial_override(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"region_aliases": {"Vic.": "VIC", "National": "National"}}))
        config = load_tables(path)
        assert config.region_lookup == {"vic.": "VIC", "national": "National"}
        assert config.categories == DEFAULT_CONFIG.categories

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_tables(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Cannot read"):
            load_tables(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text("[]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_tables(path)

    def test_base_respected(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"junk_substrings": ["Tooltip"]}))
        base = DEFAULT_CONFIG.with_overrides(categories=["Bulls"])
        config = load_tables(path, base)
        assert config.categories == ("Bulls",)
        assert config.junk_substrings == ("Tooltip",)


class TestAppConfig:
    def test_defaults(self):
        app = AppConfig()
        assert app.data_dir == "data"
        assert app.output_file == "text-metrics.json"
        assert app.write_unchanged is False
