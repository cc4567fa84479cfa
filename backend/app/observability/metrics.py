"""Metric emission to Opik feedback scores, mirrored to the log."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.observability import client as opik_client

logger = logging.getLogger(__name__)


def log_metric(name: str, value: float, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Emit a single metric sample."""
    fields = {key: val for key, val in (metadata or {}).items() if val is not None}
    extras = " ".join(f"{key}={val}" for key, val in sorted(fields.items()))
    logger.info("metric %s=%s %s", name, value, extras)

    client = opik_client.get_opik_client()
    if client is None:
        return
    try:
        metric_trace = client.trace(name=f"metric.{name}", metadata=fields, tags=["metric"])
        metric_trace.log_feedback_score(name=name, value=float(value))
        metric_trace.end()
    except Exception:
        logger.warning("Could not send metric %s to Opik", name, exc_info=True)
