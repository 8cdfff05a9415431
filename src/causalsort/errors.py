"""
Exceptions raised by causalsort.

Malformed message bodies and strings that merely look like identifiers are
never errors; they simply contribute no references. The errors below are the
conditions a caller has to decide a policy for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from causalsort.identifiers import Multihash

__all__ = [
    "CausalSortError",
    "IdentifierError",
    "CausalCycleError",
    "DuplicateIdentifierError",
]


class CausalSortError(Exception):
    """Base class for all causalsort errors."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the error for JSON output."""
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class IdentifierError(CausalSortError, ValueError):
    """Raised when text is not a valid content-address identifier."""


class CausalCycleError(CausalSortError):
    """Raised when message references form a cycle.

    Honest messages cannot reference each other in a loop: that would need a
    broken hash function or a message whose hash was known before it was
    written. A cycle means the input is corrupt, so the whole sort fails.
    """

    def __init__(self, cycle: List["Multihash"]) -> None:
        self.cycle = list(cycle)
        rendered = " -> ".join(str(mh) for mh in self.cycle)
        if self.cycle:
            rendered = f"{rendered} -> {self.cycle[0]}"
        super().__init__(
            f"Reference cycle across {len(self.cycle)} message(s): {rendered}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["cycle"] = [str(mh) for mh in self.cycle]
        return data


class DuplicateIdentifierError(CausalSortError):
    """Raised when the same identifier is supplied twice and duplicates are rejected."""

    def __init__(self, identifier: "Multihash", first_key: Any, duplicate_key: Any) -> None:
        self.identifier = identifier
        self.first_key = first_key
        self.duplicate_key = duplicate_key
        super().__init__(
            f"Identifier {identifier} supplied more than once "
            f"(keys {first_key!r} and {duplicate_key!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["identifier"] = str(self.identifier)
        data["first_key"] = repr(self.first_key)
        data["duplicate_key"] = repr(self.duplicate_key)
        return data
