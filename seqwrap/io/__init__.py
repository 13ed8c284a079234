"""IO helpers for seqwrap hosts."""

from .paths import ensure_dir, now_iso, read_record_body, write_json
from .report import REPORT_COLUMNS, write_report

__all__ = [
    "ensure_dir",
    "now_iso",
    "read_record_body",
    "write_json",
    "write_report",
    "REPORT_COLUMNS",
]
