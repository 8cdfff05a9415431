"""
Causal sorting of content-addressed messages.

If message B embeds the hash of message A, then B must have been published
after A, assuming that:

- the hash function is not broken,
- nobody guessed the hash of A before A was published,
- nobody is a time traveller.

``causal_sort`` builds a graph of these references and returns the caller's
messages newest first. A message nothing references yet is the newest and
comes first; the message every thread grows from comes last. Referenced
messages the caller did not supply shape the order but are left out of it.

Usage::

    from causalsort import causal_sort

    order = causal_sort([
        (root_id, "root", root_json),
        (reply_id, "reply", reply_json),
    ])
    # ["reply", "root"]
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from causalsort.config import get_config, validate_duplicate_policy
from causalsort.errors import CausalCycleError, DuplicateIdentifierError
from causalsort.extract import extract_references, parse_body
from causalsort.graph import CausalGraph
from causalsort.identifiers import Multihash
from causalsort.models import SortResult
from causalsort.otel import emit_cycle_detected, emit_sort_result

__all__ = ["CausalSorter", "causal_sort", "MessageTriple"]

logger = logging.getLogger(__name__)

MessageTriple = Tuple[Multihash, Any, Any]


class CausalSorter:
    """Sorts messages from causally newest to oldest.

    Args:
        duplicate_policy: ``keep_first`` keeps the first caller key for a
            repeated identifier and merges the references of later copies;
            ``reject`` raises ``DuplicateIdentifierError``. Defaults to the
            configured policy.
        emit_telemetry: Emit OTel span events. Defaults to configuration.

    Raises:
        ValueError: If ``duplicate_policy`` is not a known policy
    """

    def __init__(
        self,
        duplicate_policy: Optional[str] = None,
        emit_telemetry: Optional[bool] = None,
    ) -> None:
        config = get_config()
        if duplicate_policy is None:
            self._duplicate_policy = config.duplicate_policy
        else:
            self._duplicate_policy = validate_duplicate_policy(duplicate_policy)
        self._emit_telemetry = (
            config.emit_telemetry if emit_telemetry is None else emit_telemetry
        )

    def sort(self, messages: Iterable[MessageTriple]) -> SortResult:
        """Sort ``(identifier, caller_key, raw_body)`` triples.

        Args:
            messages: Triples of the message identifier, an opaque caller key
                and the raw JSON body (``str``/``bytes`` or decoded value)

        Returns:
            ``SortResult`` whose ``order`` lists caller keys newest first

        Raises:
            CausalCycleError: If the references form a cycle
            DuplicateIdentifierError: If an identifier repeats and the
                policy is ``reject``
        """
        graph = CausalGraph()
        owners: Dict[int, Any] = {}
        message_count = 0
        duplicate_count = 0

        for identifier, key, raw in messages:
            message_count += 1
            refs = extract_references(parse_body(raw))

            node = graph.node_for(identifier)
            if node in owners:
                duplicate_count += 1
                if self._duplicate_policy == "reject":
                    raise DuplicateIdentifierError(identifier, owners[node], key)
                logger.warning(
                    "Duplicate identifier %s: keeping key %r, ignoring key %r",
                    identifier,
                    owners[node],
                    key,
                )
            else:
                owners[node] = key

            for ref in refs:
                graph.add_edge(node, graph.node_for(ref))

        try:
            traversal = graph.topological_order()
        except CausalCycleError as exc:
            if self._emit_telemetry:
                emit_cycle_detected(exc)
            raise

        order: List[Any] = [owners[node] for node in traversal if node in owners]

        result = SortResult(
            order=order,
            message_count=message_count,
            node_count=graph.node_count,
            edge_count=graph.edge_count,
            reference_only_count=graph.node_count - len(owners),
            duplicate_count=duplicate_count,
        )
        logger.debug(
            "Causal sort: %d messages, %d nodes, %d edges",
            message_count,
            graph.node_count,
            graph.edge_count,
        )
        if self._emit_telemetry:
            emit_sort_result(result)
        return result


def causal_sort(messages: Iterable[MessageTriple]) -> List[Any]:
    """Return caller keys ordered from causally newest to oldest.

    Concurrent messages (no reference path between them) keep the order in
    which their identifiers were first seen. See ``CausalSorter.sort`` for
    arguments and errors.
    """
    return CausalSorter().sort(messages).order
