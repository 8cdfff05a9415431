"""
Loader for exported message collections.

Reads the ``{"key": "%...sha256", "value": {...}}`` records produced by
feed exports, either as a single JSON array or as JSON Lines, and validates
them against the ``MessageRecord`` model.

Usage::

    from causalsort.loader import MessageLoader, to_triples

    records = MessageLoader().load(Path("feed.jsonl"))
    order = causal_sort(to_triples(records))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from causalsort.identifiers import HashTarget, Multihash

__all__ = ["MessageRecord", "MessageLoader", "to_triples"]

logger = logging.getLogger(__name__)


class MessageRecord(BaseModel):
    """One exported message: its identifier text and its body."""

    model_config = ConfigDict(extra="ignore")

    key: str = Field(..., min_length=1, description="Message identifier (%...sha256)")
    value: Any = Field(None, description="Message body as decoded JSON")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Require a canonical message identifier."""
        mh = Multihash.from_legacy(v)
        if mh.target is not HashTarget.MESSAGE:
            raise ValueError(f"expected a message identifier, got {mh.target.name.lower()}")
        return v

    @property
    def identifier(self) -> Multihash:
        return Multihash.from_legacy(self.key)


class MessageLoader:
    """Loads message records from JSON or JSON Lines files."""

    def load(self, path: Path) -> List[MessageRecord]:
        """Load records from a file.

        Args:
            path: Path to a JSON array or JSON Lines file.

        Returns:
            Validated records in file order.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is neither JSON nor JSON Lines.
            pydantic.ValidationError: If a record does not match the schema.
        """
        if not path.exists():
            raise FileNotFoundError(f"Message file not found: {path}")

        records = self.load_from_string(path.read_text(encoding="utf-8"))
        logger.debug("Loaded %d message(s) from %s", len(records), path)
        return records

    def load_from_string(self, text: str) -> List[MessageRecord]:
        """Load records from JSON array or JSON Lines text."""
        stripped = text.lstrip()
        if stripped.startswith("["):
            raw = json.loads(stripped)
        else:
            raw = [json.loads(line) for line in text.splitlines() if line.strip()]
        return [MessageRecord.model_validate(item) for item in raw]


def to_triples(records: List[MessageRecord]) -> Iterator[tuple[Multihash, str, Any]]:
    """Yield ``(identifier, key_text, body)`` triples for ``causal_sort``."""
    for record in records:
        yield record.identifier, record.key, record.value
