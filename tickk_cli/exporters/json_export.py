"""JSON export helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tickk_cli.core.classify import to_record
from tickk_cli.core.models import ClassificationResult


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    return path


def build_records(
    classified: Sequence[Tuple[str, ClassificationResult]],
    timestamp: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """Store records sharing one capture timestamp."""
    moment = timestamp or datetime.now(timezone.utc)
    return [to_record(text, result, timestamp=moment) for text, result in classified]


def write_records(
    path: Path,
    classified: Sequence[Tuple[str, ClassificationResult]],
    timestamp: Optional[datetime] = None,
) -> Path:
    """Write classified utterances as {text, category, timestamp} records."""
    return write_json(path, build_records(classified, timestamp=timestamp))
