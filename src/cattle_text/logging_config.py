"""Logging configuration for cattle-text runs.

Console shows INFO+ (DEBUG with ``--verbose``) in a short format; an
optional per-run log file under ``{data_dir}/logs/`` always captures DEBUG,
which includes the assembler's incomplete-row and dropped-region notes.
"""

import logging
from datetime import datetime
from pathlib import Path

_CONSOLE_FORMAT = "%(asctime)s %(levelname)-5s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def setup_logging(
    data_dir: str = "data",
    console_level: int = logging.INFO,
    log_to_file: bool = True,
) -> Path | None:
    """Attach console (and optionally file) handlers to the root logger.

    Existing root handlers are cleared first so repeated calls (e.g. in
    tests) do not duplicate output.

    Returns:
        Path to the run's log file, or None when ``log_to_file`` is False.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(console)

    if not log_to_file:
        return None

    log_dir = Path(data_dir) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"run-{datetime.now():%Y-%m-%d-%H%M%S}.log"

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    root.addHandler(file_handler)

    return log_file
