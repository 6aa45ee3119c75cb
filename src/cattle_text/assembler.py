"""Hierarchical record assembler for the metrics page.

Provides:
- assemble: single forward pass over lines -> Dataset
- consume_metrics: bounded positional consumer for one category row
- parse_text / parse_rows: normalize raw captures, then assemble

The rendered report has no field delimiters: after a category label, the
position of a value in the token stream is the only signal of which
metric it is. Consumption stops at the next region or category label.

Malformed content never raises. Short rows yield None fields, categories
seen before any region label fall into ``national``, and region labels
that never precede a category produce no state bucket.
"""

import logging
from collections.abc import Iterable, Sequence

from cattle_text.classifier import LabelKind, classify, stock_group
from cattle_text.config import DEFAULT_CONFIG, NATIONAL, ParserConfig
from cattle_text.exceptions import InputContractError
from cattle_text.models import Dataset, MetricRecord, StateBucket
from cattle_text.normalizer import EMPTY_CELL, is_junk, normalize_rows, normalize_text

logger = logging.getLogger(__name__)


def consume_metrics(
    lines: Sequence[str],
    start: int,
    config: ParserConfig = DEFAULT_CONFIG,
) -> tuple[dict[str, str | None], int]:
    """Fill metric fields positionally from ``lines[start:]``.

    Stops at the first region/category line or once every field is filled.
    Junk lines are skipped without using a field slot; an EMPTY_CELL
    placeholder uses a slot and leaves that field None.

    Returns:
        Tuple of (field name -> value or None, number of lines advanced over).
        The boundary line that stopped consumption is not counted.
    """
    fields: dict[str, str | None] = dict.fromkeys(config.metric_fields)
    slot = 0
    pos = start

    while pos < len(lines) and slot < len(config.metric_fields):
        if lines[pos] == EMPTY_CELL:
            # Hidden grid cell: the slot is used, the value stays None.
            slot += 1
            pos += 1
            continue
        label = classify(lines[pos], config)
        if label.is_boundary:
            break
        if not is_junk(label.value, config):
            fields[config.metric_fields[slot]] = label.value
            slot += 1
        pos += 1

    return fields, pos - start


def assemble(lines: Sequence[str], config: ParserConfig = DEFAULT_CONFIG) -> Dataset:
    """Assemble a line sequence into a Dataset in one forward pass.

    Args:
        lines: Ordered text lines (normalized, or raw -- each line is
            cleaned before classification).
        config: Parser tables.

    Returns:
        Dataset with ``updated_at`` left unset.

    Raises:
        InputContractError: If ``lines`` is None, a bare string, or holds
            non-string items.
    """
    lines = _as_line_list(lines)

    current_region = NATIONAL
    national: list[MetricRecord] = []
    buckets: dict[str, list[MetricRecord]] = {}

    pos = 0
    while pos < len(lines):
        label = classify(lines[pos], config)
        pos += 1

        if label.kind is LabelKind.REGION:
            current_region = label.value
            if current_region != NATIONAL:
                # Lookup-or-insert: a repeated label must not reset the bucket.
                buckets.setdefault(current_region, [])
            continue

        if label.kind is not LabelKind.CATEGORY:
            continue

        fields, consumed = consume_metrics(lines, pos, config)
        pos += consumed

        record = MetricRecord(
            category=label.value,
            stock_group=stock_group(label.value, config),
            **fields,
        )
        filled = sum(v is not None for v in fields.values())
        if filled < len(fields):
            logger.debug(
                "Incomplete row for %s / %s: %d of %d fields",
                current_region, label.value, filled, len(fields),
            )

        if current_region == NATIONAL:
            national.append(record)
        else:
            buckets.setdefault(current_region, []).append(record)

    states = [
        StateBucket(state=code, categories=records)
        for code, records in buckets.items()
        if records
    ]
    dropped = [code for code, records in buckets.items() if not records]
    if dropped:
        logger.debug("Regions with no categories dropped: %s", ", ".join(dropped))

    return Dataset(national=national, states=states)


def parse_text(blob: str, config: ParserConfig = DEFAULT_CONFIG) -> Dataset:
    """Normalize a visible-text dump and assemble it."""
    if not isinstance(blob, str):
        raise InputContractError(
            f"parse_text expects a text dump, got {type(blob).__name__}"
        )
    return assemble(normalize_text(blob, config), config)


def parse_rows(
    rows: Iterable[Sequence[str | None]], config: ParserConfig = DEFAULT_CONFIG
) -> Dataset:
    """Flatten per-row cell arrays and assemble them."""
    if rows is None or isinstance(rows, (str, bytes)):
        raise InputContractError(
            f"parse_rows expects a sequence of rows, got {type(rows).__name__}"
        )
    return assemble(normalize_rows(rows, config), config)


def _as_line_list(lines: Sequence[str]) -> list[str]:
    """Validate the upstream contract: an ordered collection of strings."""
    if lines is None or isinstance(lines, (str, bytes)):
        raise InputContractError(
            f"Expected a sequence of lines, got {type(lines).__name__}"
        )
    try:
        result = list(lines)
    except TypeError as e:
        raise InputContractError(
            f"Expected a sequence of lines, got {type(lines).__name__}"
        ) from e
    for i, line in enumerate(result):
        if not isinstance(line, str):
            raise InputContractError(
                f"Line {i} is {type(line).__name__}, expected str"
            )
    return result
