"""Tabular reports of scan results."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable

import pandas as pd

from ..logging_utils import get_logger

logger = get_logger("report")

REPORT_COLUMNS = (
    "path",
    "expected_line_length",
    "sequence_length",
    "error_count",
    "consistent",
)


def write_report(rows: Iterable[Dict[str, Any]], path: Path) -> pd.DataFrame:
    """Write one CSV row per scanned file and return the frame."""
    frame = pd.DataFrame(list(rows), columns=list(REPORT_COLUMNS))
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False)
    logger.info("Report with %s rows written to %s", len(frame), path)
    return frame
