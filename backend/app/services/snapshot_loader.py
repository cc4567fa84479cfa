"""Read-only loading of exported source collections."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from app.api.schemas.records import SourceSnapshot

logger = logging.getLogger(__name__)

# Export keys used by the tracker's storage layer.
STORAGE_KEYS = {
    "todos": "tasks",
    "dailyRatings": "ratings",
    "weeklyPlans": "plans",
    "negativeThoughts": "thoughts",
}


def parse_snapshot(payload: Dict[str, Any]) -> SourceSnapshot:
    """Validate an export dict (storage keys or snapshot field names) into a SourceSnapshot."""
    if not isinstance(payload, dict):
        raise ValueError("Snapshot export must be a JSON object")

    data: Dict[str, Any] = {}
    for key, value in payload.items():
        field_name = STORAGE_KEYS.get(key, key)
        if field_name in SourceSnapshot.model_fields:
            data[field_name] = value if value is not None else []

    try:
        return SourceSnapshot.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid snapshot records: {exc.error_count()} error(s)") from exc


def load_snapshot(path: str | Path) -> SourceSnapshot:
    """Load a snapshot from a JSON export file; never writes."""
    snapshot_path = Path(path)
    if not snapshot_path.is_file():
        raise FileNotFoundError(f"Snapshot file not found: {snapshot_path}")

    try:
        payload = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Snapshot file {snapshot_path} is not valid JSON") from exc

    snapshot = parse_snapshot(payload)
    logger.info(
        "Loaded snapshot from %s tasks=%s ratings=%s plans=%s thoughts=%s",
        snapshot_path,
        len(snapshot.tasks),
        len(snapshot.ratings),
        len(snapshot.plans),
        len(snapshot.thoughts),
    )
    return snapshot
