"""Tests for the post-parse report."""

import logging

from cattle_text.assembler import assemble
from cattle_text.report import build_report, format_report, log_report

LINES = [
    "Steers 0-200kg", "1",
    "NSW", "Bulls", "2",
    "NSW", "PTIC Cows", "3",
    "QLD", "NSM Cows", "4",
    "WA",
]


class TestBuildReport:
    def test_counts(self):
        report = build_report(assemble(LINES))
        assert report.national_count == 1
        assert report.state_counts == {"NSW": 2, "QLD": 1}
        assert report.category_count == 4
        assert report.region_count == 3

    def test_missing_regions_in_canonical_order(self):
        report = build_report(assemble(LINES))
        assert report.missing_regions == ["VIC", "SA", "TAS", "WA", "NT"]

    def test_national_missing(self):
        report = build_report(assemble(["NSW", "Bulls", "1"]))
        assert "National" in report.missing_regions
        assert report.region_count == 1

    def test_incomplete_count(self):
        assert build_report(assemble(LINES)).incomplete_count == 4


class TestOutput:
    def test_missing_regions_logged_as_warnings(self, caplog):
        with caplog.at_level(logging.INFO, logger="cattle_text.report"):
            log_report(build_report(assemble(LINES)))
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert "No categories found for WA" in warnings
        assert len(warnings) == 5

    def test_format(self):
        text = format_report(build_report(assemble(LINES)))
        assert "National:    1" in text
        assert "NSW:         2" in text
        assert "Missing:     VIC, SA, TAS, WA, NT" in text
