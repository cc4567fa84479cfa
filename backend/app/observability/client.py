"""Opik client lifecycle; observability stays optional."""
from __future__ import annotations

import logging

import opik

from app.core.config import settings

logger = logging.getLogger(__name__)

_client: opik.Opik | None = None
_initialized = False


def init_opik() -> opik.Opik | None:
    """Create the shared Opik client when enabled and configured."""
    global _client, _initialized
    _initialized = True

    if not settings.opik_enabled:
        logger.info("Opik disabled; traces and metrics go to the log only.")
        _client = None
        return None
    if not settings.opik_api_key:
        logger.warning("OPIK_ENABLED=true but OPIK_API_KEY is missing; observability disabled.")
        _client = None
        return None

    try:
        _client = opik.Opik(project_name=settings.opik_project, api_key=settings.opik_api_key)
    except Exception:
        logger.exception("Failed to initialize Opik client; observability disabled.")
        _client = None
        return None

    logger.info("Opik client initialized (project=%s)", settings.opik_project)
    return _client


def get_opik_client() -> opik.Opik | None:
    """Return the shared client, initializing it on first use."""
    if not _initialized:
        return init_opik()
    return _client
