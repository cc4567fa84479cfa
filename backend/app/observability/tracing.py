"""Request and job tracing via Opik, with log output when it is disabled."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Dict, Iterator, Optional

from app.observability import client as opik_client

logger = logging.getLogger(__name__)


def _start_trace(name: str, span: Dict[str, Any]):
    client = opik_client.get_opik_client()
    if client is None:
        return None
    try:
        return client.trace(name=name, input=dict(span), metadata=dict(span), tags=["performance-tracker"])
    except Exception:
        logger.warning("Could not open Opik trace %s", name, exc_info=True)
        return None


def _end_trace(opik_trace, span: Dict[str, Any], elapsed_ms: float, error: Exception | None = None) -> None:
    if opik_trace is None:
        return
    output: Dict[str, Any] = {"latency_ms": elapsed_ms}
    if error is not None:
        output["error"] = f"{type(error).__name__}: {error}"
    try:
        opik_trace.end(output=output, metadata=dict(span))
    except Exception:
        logger.warning("Could not close Opik trace", exc_info=True)


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Iterator[Dict[str, Any]]:
    """
    Trace the wrapped block.

    The yielded dict is the span metadata; callers may add keys to it before the block exits.
    Exceptions are recorded on the trace and re-raised unchanged.
    """
    span: Dict[str, Any] = dict(metadata or {})
    if request_id:
        span["request_id"] = request_id
    opik_trace = _start_trace(name, span)
    start = perf_counter()
    try:
        yield span
    except Exception as exc:
        elapsed_ms = (perf_counter() - start) * 1000
        logger.warning("span %s failed after %.2fms metadata=%s", name, elapsed_ms, span)
        _end_trace(opik_trace, span, elapsed_ms, error=exc)
        raise
    elapsed_ms = (perf_counter() - start) * 1000
    logger.debug("span %s finished in %.2fms metadata=%s", name, elapsed_ms, span)
    _end_trace(opik_trace, span, elapsed_ms)
