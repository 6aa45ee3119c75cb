"""Post-parse summary for a metrics Dataset.

An expected region that produced zero categories is the clearest sign
that the report layout changed upstream, so those are logged as warnings.
"""

import logging
from dataclasses import dataclass, field

from cattle_text.config import DEFAULT_CONFIG, NATIONAL, ParserConfig
from cattle_text.models import Dataset

logger = logging.getLogger(__name__)


@dataclass
class ParseReport:
    """Counts of what a parse run found."""

    national_count: int
    state_counts: dict[str, int] = field(default_factory=dict)
    missing_regions: list[str] = field(default_factory=list)
    incomplete_count: int = 0

    @property
    def region_count(self) -> int:
        return len(self.state_counts) + (1 if self.national_count else 0)

    @property
    def category_count(self) -> int:
        return self.national_count + sum(self.state_counts.values())


def build_report(dataset: Dataset, config: ParserConfig = DEFAULT_CONFIG) -> ParseReport:
    """Summarize a dataset against the canonical region set."""
    state_counts = {b.state: len(b.categories) for b in dataset.states}
    found = set(state_counts)
    if dataset.national:
        found.add(NATIONAL)

    records = list(dataset.national)
    for bucket in dataset.states:
        records.extend(bucket.categories)

    return ParseReport(
        national_count=len(dataset.national),
        state_counts=state_counts,
        missing_regions=[r for r in config.canonical_regions if r not in found],
        incomplete_count=sum(not r.is_complete for r in records),
    )


def log_report(report: ParseReport) -> None:
    logger.info(
        "Parsed %d categories across %d regions (national: %d)",
        report.category_count, report.region_count, report.national_count,
    )
    for state, count in report.state_counts.items():
        logger.info("  %s: %d", state, count)
    if report.incomplete_count:
        logger.info("%d categories have missing fields", report.incomplete_count)
    for region in report.missing_regions:
        logger.warning("No categories found for %s", region)


def format_report(report: ParseReport) -> str:
    """Format a report into a human-readable summary block."""
    lines = [
        "=" * 40,
        "Parse complete",
        "-" * 40,
        f"National:    {report.national_count}",
    ]
    for state, count in report.state_counts.items():
        lines.append(f"{state + ':':<12} {count}")
    lines.append("-" * 40)
    lines.append(f"Categories:  {report.category_count}")
    lines.append(f"Incomplete:  {report.incomplete_count}")
    if report.missing_regions:
        lines.append(f"Missing:     {', '.join(report.missing_regions)}")
    lines.append("=" * 40)
    return "\n".join(lines)
