"""
OTel span event emission helpers for causal sorting.

All functions are guarded by ``_HAS_OTEL`` so they degrade gracefully
when OTel is not installed.

Usage::

    from causalsort.otel import emit_sort_result, emit_cycle_detected

    emit_sort_result(result)
    emit_cycle_detected(error)
"""

from __future__ import annotations

import logging

from causalsort.errors import CausalCycleError
from causalsort.models import SortResult

try:
    from opentelemetry import trace as otel_trace

    _HAS_OTEL = True
except ImportError:  # pragma: no cover
    _HAS_OTEL = False

logger = logging.getLogger(__name__)


def _add_span_event(name: str, attributes: dict[str, str | int | float | bool]) -> None:
    """Add an event to the current OTel span if available."""
    if not _HAS_OTEL:
        return
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)


def emit_sort_result(result: SortResult) -> None:
    """Emit a span event summarising a completed sort.

    Event name: ``causal.sort.complete``
    """
    attrs: dict[str, str | int | float | bool] = {
        "sort.messages": result.message_count,
        "sort.ordered": len(result.order),
        "sort.nodes": result.node_count,
        "sort.edges": result.edge_count,
        "sort.reference_only": result.reference_only_count,
        "sort.duplicates": result.duplicate_count,
    }

    logger.debug(result.summary())

    _add_span_event("causal.sort.complete", attrs)


def emit_cycle_detected(error: CausalCycleError) -> None:
    """Emit a span event for a reference cycle.

    Event name: ``causal.sort.cycle``
    """
    attrs: dict[str, str | int | float | bool] = {
        "sort.cycle_length": len(error.cycle),
        "sort.cycle": ",".join(str(mh) for mh in error.cycle),
    }

    logger.warning("Causal sort aborted: %s", error)

    _add_span_event("causal.sort.cycle", attrs)
