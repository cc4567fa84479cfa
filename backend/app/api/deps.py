"""FastAPI dependencies for source snapshots and local timezone."""
from __future__ import annotations

from datetime import tzinfo
from zoneinfo import ZoneInfo

from fastapi import HTTPException, status

from app.api.schemas.records import SourceSnapshot
from app.core.config import settings
from app.services.snapshot_loader import load_snapshot


def get_snapshot() -> SourceSnapshot:
    """Load the configured snapshot export for read-only GET endpoints."""
    if not settings.snapshot_path:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="No snapshot source configured")
    try:
        return load_snapshot(settings.snapshot_path)
    except FileNotFoundError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Snapshot source unavailable")
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def get_local_timezone() -> tzinfo:
    return ZoneInfo(settings.local_timezone)
