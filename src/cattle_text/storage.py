"""Filesystem storage for parsed JSON documents.

Saves documents as indented UTF-8 JSON under a base directory and loads
the previous run's output for no-op detection::

    base_dir/
      text-metrics.json
      text-message-templates.json
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

# Keys that change on every run and are ignored when diffing documents.
VOLATILE_KEYS = frozenset({"updated_at"})


class JsonStore:
    """JSON save/load/exists filesystem layer.

    Usage::

        store = JsonStore("data")
        previous = store.load_or_none("text-metrics.json")
        if has_changed(previous, dataset):
            store.save(dataset, "text-metrics.json")
    """

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def save(self, document: BaseModel, name: str) -> Path:
        """Write a model as indented JSON and return the file path."""
        file_path = self._build_path(name)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        return file_path

    def load(self, name: str) -> dict[str, Any]:
        """Load a saved document as a plain dict.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a JSON object.
        """
        file_path = self._build_path(name)
        if not file_path.exists():
            raise FileNotFoundError(f"No saved document {name!r}: {file_path}")
        data = json.loads(file_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Saved document {file_path} is not a JSON object")
        return data

    def load_or_none(self, name: str) -> dict[str, Any] | None:
        """Like load(), but None if the file is missing or unreadable."""
        try:
            return self.load(name)
        except (FileNotFoundError, ValueError):
            return None

    def exists(self, name: str) -> bool:
        return self._build_path(name).exists()

    def _build_path(self, name: str) -> Path:
        """Resolve a document name inside base_dir.

        Raises:
            ValueError: If the name is empty or escapes base_dir.
        """
        if not name or Path(name).name != name:
            raise ValueError(f"Invalid document name {name!r}")
        return self.base_dir / name


def _comparable(document: BaseModel | dict[str, Any] | None) -> dict[str, Any] | None:
    if document is None:
        return None
    if isinstance(document, BaseModel):
        document = document.model_dump(mode="json")
    return {k: v for k, v in document.items() if k not in VOLATILE_KEYS}


def has_changed(
    previous: BaseModel | dict[str, Any] | None,
    current: BaseModel | dict[str, Any],
) -> bool:
    """True unless both documents match once ``updated_at`` is ignored."""
    return _comparable(previous) != _comparable(current)
