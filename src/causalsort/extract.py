"""
Reference extraction from structured message bodies.

A message body is a JSON document. Any string anywhere inside it that parses
as a content-address identifier is a reference to another message (or blob)
the message depends on. Keys are never references, and numbers, booleans
and nulls are skipped.

Usage::

    from causalsort.extract import extract_references, parse_body

    refs = extract_references(parse_body(raw_json))
"""

from __future__ import annotations

import json
import logging
from typing import Any, List

from causalsort.identifiers import Multihash

__all__ = ["extract_references", "parse_body"]

logger = logging.getLogger(__name__)


def parse_body(raw: Any) -> Any:
    """Decode a raw message body into JSON-native Python values.

    ``str`` and ``bytes`` are decoded as JSON. Anything that fails to decode
    becomes ``None``, which carries no references. Values that are already
    decoded (dicts, lists, ...) are returned unchanged.

    Args:
        raw: Raw JSON text or bytes, or an already-decoded value

    Returns:
        The decoded value, or None if decoding failed
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        return raw
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        logger.debug("Unparseable message body treated as empty: %s", exc)
        return None


def extract_references(body: Any) -> List[Multihash]:
    """Collect every identifier embedded in a structured value.

    Walks the value depth-first. A string that starts with an identifier is a
    reference (text after the suffix is ignored). Lists are visited in
    order and dicts value by value in iteration order. The result follows
    visit order and may contain duplicates.

    The walk keeps its own stack, so deeply nested bodies are safe.

    Args:
        body: A JSON-native value (see ``parse_body``)

    Returns:
        Identifiers in depth-first visit order
    """
    refs: List[Multihash] = []
    stack: List[Any] = [body]

    while stack:
        value = stack.pop()
        if isinstance(value, str):
            mh = Multihash.try_parse(value, allow_trailing=True)
            if mh is not None:
                refs.append(mh)
        elif isinstance(value, (list, tuple)):
            stack.extend(reversed(value))
        elif isinstance(value, dict):
            stack.extend(reversed(list(value.values())))

    return refs
