"""Line normalizer for text captured from the rendered Power BI report.

Provides:
- clean_line: Unicode/dash/whitespace normalization of one line
- is_junk: configuration-driven UI chrome predicate
- normalize_text: full innerText dump -> ordered list of data-bearing lines
- normalize_rows: per-row cell arrays -> the same flat line sequence, with
  hidden cells kept as EMPTY_CELL placeholders
- strip_count_suffix: recover a canonical label from "Label 50"

All functions are pure. Line order is preserved: the assembler assigns
metric fields by position, so reordering here would corrupt records.
"""

import re
import unicodedata
from collections.abc import Iterable, Sequence

from cattle_text.config import DEFAULT_CONFIG, ParserConfig

_DASHES_RE = re.compile("[\u2010-\u2015\u2212]")
_WHITESPACE_RE = re.compile(r"\s+")
# Power BI appends a row count to some labels, e.g. "National 50".
_COUNT_SUFFIX_RE = re.compile(r"^(.*\S)\s+\d+$")
# Placeholder for a hidden grid cell: occupies a metric field slot, stored as None.
EMPTY_CELL = "\u2400"


def clean_line(text: str) -> str:
    """Normalize one raw line: NFKD, canonical dashes, single spaces, trimmed."""
    text = unicodedata.normalize("NFKD", text)
    text = _DASHES_RE.sub("-", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_junk(line: str, config: ParserConfig = DEFAULT_CONFIG) -> bool:
    """True if a cleaned line is UI chrome rather than report content."""
    if not line or line in config.junk_set:
        return True
    return any(fragment in line for fragment in config.junk_substrings)


def strip_count_suffix(label: str) -> str:
    """Drop a trailing whitespace-and-digits row count from a label.

    Only used for classification -- data values keep their original text.
    """
    match = _COUNT_SUFFIX_RE.match(label)
    return match.group(1) if match else label


def normalize_lines(
    lines: Iterable[str], config: ParserConfig = DEFAULT_CONFIG
) -> list[str]:
    """Clean each line and drop junk, preserving order."""
    cleaned = (clean_line(line) for line in lines)
    return [line for line in cleaned if not is_junk(line, config)]


def normalize_text(blob: str, config: ParserConfig = DEFAULT_CONFIG) -> list[str]:
    """Split a visible-text dump into cleaned, data-bearing lines."""
    return normalize_lines(blob.splitlines(), config)


def normalize_rows(
    rows: Iterable[Sequence[str | None]], config: ParserConfig = DEFAULT_CONFIG
) -> list[str]:
    """Flatten per-row cell arrays into one ordered line sequence.

    ``None`` or blank cells (hidden conditional-formatting cells) become
    EMPTY_CELL so that the values after them keep their field positions.
    """
    lines: list[str] = []
    for row in rows:
        for cell in row:
            line = clean_line(cell) if cell is not None else ""
            if not line:
                lines.append(EMPTY_CELL)
            elif not is_junk(line, config):
                lines.append(line)
    return lines
