"""
Pydantic v2 result models for causal sorting.

All models use ``extra="forbid"`` to reject unknown keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["SortResult"]


class SortResult(BaseModel):
    """Outcome of sorting one collection of messages.

    ``order`` holds the caller keys, causally newest first. The counts
    describe the reference graph the order was derived from.
    """

    model_config = ConfigDict(extra="forbid")

    order: list[Any] = Field(
        default_factory=list,
        description="Caller keys, newest first",
    )
    message_count: int = Field(
        0, ge=0, description="Number of message entries supplied"
    )
    node_count: int = Field(
        0, ge=0, description="Distinct identifiers seen, supplied or referenced"
    )
    edge_count: int = Field(
        0, ge=0, description="Reference edges inserted (duplicates included)"
    )
    reference_only_count: int = Field(
        0, ge=0, description="Identifiers referenced but not supplied"
    )
    duplicate_count: int = Field(
        0, ge=0, description="Entries whose identifier had already been supplied"
    )

    def summary(self) -> str:
        """Return a one-line summary string."""
        return (
            f"Sorted {len(self.order)} message(s): "
            f"{self.node_count} nodes, {self.edge_count} edges, "
            f"{self.reference_only_count} reference-only, "
            f"{self.duplicate_count} duplicate(s)"
        )
