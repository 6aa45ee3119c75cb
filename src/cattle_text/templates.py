"""Parser for the "Text Message Template" report page.

The page renders one row per stock category as three consecutive lines:
category label, $/head message, c/kg message. Rows are recognised by
shape -- the second line mentions a dollar amount and the third a c/kg
figure -- so stray chrome between rows is skipped.
"""

import logging
from collections.abc import Sequence

from cattle_text.config import TEMPLATE_CONFIG, ParserConfig
from cattle_text.exceptions import InputContractError
from cattle_text.models import TemplateRecord, TemplateSet
from cattle_text.normalizer import normalize_text

logger = logging.getLogger(__name__)


def _looks_like_row(head: str, c_kg: str) -> bool:
    return "$" in head and "c" in c_kg.lower()


def parse_templates(lines: Sequence[str]) -> TemplateSet:
    """Scan normalized lines as (stock, head, c_kg) triples.

    On a match the cursor jumps past the whole triple; otherwise it
    advances by one line.
    """
    if lines is None or isinstance(lines, (str, bytes)):
        raise InputContractError(
            f"Expected a sequence of lines, got {type(lines).__name__}"
        )

    templates: list[TemplateRecord] = []
    pos = 0
    while pos + 2 < len(lines):
        stock, head, c_kg = lines[pos], lines[pos + 1], lines[pos + 2]
        if _looks_like_row(head, c_kg):
            templates.append(
                TemplateRecord(
                    price_stock_category=stock,
                    text_head=head,
                    text_c_kg=c_kg,
                )
            )
            pos += 3
        else:
            pos += 1

    logger.debug("Matched %d template rows from %d lines", len(templates), len(lines))
    return TemplateSet(templates=templates)


def parse_templates_text(blob: str, config: ParserConfig = TEMPLATE_CONFIG) -> TemplateSet:
    """Normalize a visible-text dump of the template page and parse it."""
    if not isinstance(blob, str):
        raise InputContractError(
            f"parse_templates_text expects a text dump, got {type(blob).__name__}"
        )
    return parse_templates(normalize_text(blob, config))
