"""Filesystem helpers used around the scanner."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def ensure_dir(path: Path) -> Path:
    """Create the directory if it does not exist and return it."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def read_record_body(path: Path) -> bytes:
    """Return the raw bytes of a file holding one record body."""

    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_bytes()


def write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(obj, handle, indent=2)


def now_iso() -> str:
    """Return current UTC timestamp as ISO string."""

    return datetime.now(timezone.utc).isoformat()
