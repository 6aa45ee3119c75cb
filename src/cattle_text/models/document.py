"""Base model for top-level output documents."""

from datetime import datetime, timezone

from pydantic import BaseModel


class Document(BaseModel):
    """A parsed document whose ``updated_at`` is stamped by the host.

    Parsers leave ``updated_at`` as None so that parsing the same lines
    twice yields identical documents.
    """

    updated_at: str | None = None

    def stamped(self, when: datetime | None = None):
        """Return a copy with ``updated_at`` set (default: now, UTC)."""
        when = when or datetime.now(timezone.utc)
        return self.model_copy(update={"updated_at": when.isoformat()})

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)
