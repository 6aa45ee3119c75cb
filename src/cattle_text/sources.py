"""Line sources: load a captured report page for the parser.

A capture is what the browser step saved after the report finished
rendering -- either the frame's visible text (``.txt``) or its grid rows
as a JSON array of cell arrays (``.json``, hidden cells as ``null``).

Every failure to produce content raises AcquisitionError; the parser is
never invoked on a capture that could not be read.
"""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from cattle_text.exceptions import AcquisitionError

logger = logging.getLogger(__name__)

Rows = list[list[str | None]]

_ROWS_ADAPTER = TypeAdapter(Rows)


def _read(path: Path) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise AcquisitionError(f"Capture not found: {path}", source=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise AcquisitionError(f"Cannot read capture {path}: {e}", source=str(path)) from e
    if not text.strip():
        raise AcquisitionError(
            f"Capture {path} is empty -- report content never rendered?",
            source=str(path),
        )
    return text


def read_text_capture(path: str | Path) -> str:
    """Return the visible-text dump stored at ``path``."""
    path = Path(path)
    text = _read(path)
    logger.debug("Read text capture %s (%d chars)", path, len(text))
    return text


def read_row_capture(path: str | Path) -> Rows:
    """Return the grid rows stored at ``path``.

    Raises:
        AcquisitionError: If the file is missing, empty, not JSON, or not
            an array of string/null arrays, or holds no rows.
    """
    path = Path(path)
    text = _read(path)
    try:
        rows = _ROWS_ADAPTER.validate_json(text)
    except ValidationError as e:
        raise AcquisitionError(
            f"Capture {path} is not an array of row cell arrays: {e}",
            source=str(path),
        ) from e
    if not rows:
        raise AcquisitionError(f"Capture {path} contains no rows", source=str(path))
    logger.debug("Read row capture %s (%d rows)", path, len(rows))
    return rows


def load_capture(path: str | Path) -> str | Rows:
    """Load a capture, dispatching on suffix: ``.json`` rows, else text."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return read_row_capture(path)
    return read_text_capture(path)
