"""seqwrap - line-wrapping checks for sequence record bodies."""

from .scanner import ScanResult, scan, scan_text

__all__ = ["ScanResult", "scan", "scan_text", "__version__"]

__version__ = "0.1.0"
