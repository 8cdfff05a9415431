"""
causalsort - Causal ordering of content-addressed messages.

Messages in an append-only log cannot trust each other's timestamps, but
they can reference each other by hash. A message that embeds the hash of
another must have been written after it. causalsort uses those references
to order a collection of messages from causally newest to oldest, which is
enough to rebuild reply chains and threads.

Key Features:
- Reference extraction from arbitrarily nested JSON bodies
- Deterministic topological ordering (Kahn's algorithm, FIFO tie-break)
- Reference cycles reported as a typed error, never silently broken
- Referenced-but-missing messages shape the order without appearing in it

Example usage:
    from causalsort import Multihash, causal_sort

    root = Multihash.from_legacy("%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256")
    reply = Multihash.from_legacy("%reply1K7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256")

    causal_sort([
        (root, 1, "{}"),
        (reply, 2, '{"root": "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256"}'),
    ])
    # [2, 1]
"""

from causalsort.errors import (
    CausalCycleError,
    CausalSortError,
    DuplicateIdentifierError,
    IdentifierError,
)
from causalsort.extract import extract_references, parse_body
from causalsort.identifiers import HashTarget, Multihash
from causalsort.models import SortResult
from causalsort.sort import CausalSorter, causal_sort

__version__ = "0.1.0"
__all__ = [
    # Sorting
    "causal_sort",
    "CausalSorter",
    "SortResult",
    # Extraction
    "extract_references",
    "parse_body",
    # Identifiers
    "Multihash",
    "HashTarget",
    # Errors
    "CausalSortError",
    "CausalCycleError",
    "DuplicateIdentifierError",
    "IdentifierError",
    "__version__",
]
