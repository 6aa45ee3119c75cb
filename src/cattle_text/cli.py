"""CLI entry point for cattle-text.

Provides ``main()`` as the entry point for the ``cattle-text`` console
script and ``run(args)``, which sets up logging, loads the parser tables,
reads a capture, parses it, reports, and writes the JSON output.

Usage::

    cattle-text capture.txt                       # metrics page text dump
    cattle-text rows.json                         # metrics page grid rows
    cattle-text page2.txt --page templates        # text message templates
    cattle-text capture.txt --tables tables.json  # override parser tables
"""

import argparse
import logging
import sys
from pathlib import Path

from cattle_text.assembler import parse_rows, parse_text
from cattle_text.config import DEFAULT_CONFIG, TEMPLATE_CONFIG, AppConfig, load_tables
from cattle_text.exceptions import CattleTextError
from cattle_text.logging_config import setup_logging
from cattle_text.models import Document
from cattle_text.report import build_report, format_report, log_report
from cattle_text.sources import load_capture, read_text_capture
from cattle_text.storage import JsonStore, has_changed
from cattle_text.templates import parse_templates_text

logger = logging.getLogger(__name__)


def _document_name(value: str) -> str:
    """argparse type for --output: a bare file name inside --data-dir."""
    if not value or Path(value).name != value or value in (".", ".."):
        raise argparse.ArgumentTypeError(
            f"{value!r} must be a file name without directories"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the cattle-text CLI."""
    parser = argparse.ArgumentParser(
        prog="cattle-text",
        description="Parse a captured Power BI cattle market report into JSON",
    )
    parser.add_argument(
        "capture",
        help="Captured page: visible text (.txt) or grid rows (.json)",
    )
    parser.add_argument(
        "--page",
        choices=("metrics", "templates"),
        default="metrics",
        help="Report page the capture came from (default: metrics)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default="data",
        help="Directory for JSON output and logs (default: data)",
    )
    parser.add_argument(
        "--output",
        type=_document_name,
        default=None,
        help="Output file name inside --data-dir "
             "(default: text-metrics.json / text-message-templates.json)",
    )
    parser.add_argument(
        "--tables",
        type=str,
        default=None,
        help="JSON file overriding parser tables (junk lines, regions, categories, fields)",
    )
    parser.add_argument(
        "--force-write",
        action="store_true",
        help="Write output even if nothing but updated_at changed",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show DEBUG output on the console",
    )
    return parser


def _parse_capture(args: argparse.Namespace, app: AppConfig) -> tuple[Document, str]:
    """Acquire and parse the capture; return (document, output name)."""
    if args.page == "templates":
        config = load_tables(args.tables, TEMPLATE_CONFIG) if args.tables else TEMPLATE_CONFIG
        document = parse_templates_text(read_text_capture(args.capture), config)
        logger.info("Parsed %d text message templates", len(document.templates))
        return document, args.output or app.templates_file

    config = load_tables(args.tables) if args.tables else DEFAULT_CONFIG
    capture = load_capture(args.capture)
    if isinstance(capture, str):
        document = parse_text(capture, config)
    else:
        document = parse_rows(capture, config)

    report = build_report(document, config)
    log_report(report)
    logger.info("\n%s", format_report(report))
    return document, args.output or app.output_file


def run(args: argparse.Namespace) -> int:
    """Run one parse; return the process exit code."""
    app = AppConfig(data_dir=args.data_dir, write_unchanged=args.force_write)
    log_file = setup_logging(
        data_dir=app.data_dir,
        console_level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )
    logger.info(
        "Starting cattle-text: capture=%s, page=%s, data_dir=%s, log=%s",
        args.capture, args.page, app.data_dir, log_file,
    )

    try:
        document, name = _parse_capture(args, app)
    except CattleTextError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    store = JsonStore(app.data_dir)
    try:
        if not app.write_unchanged and not has_changed(store.load_or_none(name), document):
            logger.info("No changes since last run -- %s left untouched", name)
            return 0
        path = store.save(document.stamped(), name)
    except (OSError, ValueError) as e:
        logger.error("Cannot write %s to %s: %s", name, app.data_dir, e)
        return 1
    logger.info("Wrote %s", path)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the cattle-text console script."""
    args = build_parser().parse_args(argv)
    try:
        code = run(args)
    finally:
        logging.shutdown()
    sys.exit(code)


if __name__ == "__main__":
    main()
