"""Defaults and environment configuration for seqwrap."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import find_dotenv, load_dotenv

DEFAULT_REPORT_DIR = Path("data") / "reports"

ENV_LINE_WIDTH = "SEQWRAP_LINE_WIDTH"
ENV_REPORT_DIR = "SEQWRAP_REPORT_DIR"

PathLike = Union[str, Path]


class ConfigError(ValueError):
    """Raised when an environment value cannot be interpreted."""


@dataclass(slots=True)
class ScanDefaults:
    """Fallback values for the scan and report commands."""

    line_width: int = 60
    report_dir: Path = DEFAULT_REPORT_DIR
    report_name: str = "scan_report.csv"
    manifest_name: str = "scan_manifest.json"


SCAN_DEFAULTS = ScanDefaults()


@dataclass
class RuntimeConfig:
    line_width: int
    report_dir: Path
    env_file: Optional[Path] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            ENV_LINE_WIDTH: str(self.line_width),
            ENV_REPORT_DIR: str(self.report_dir),
            "env_file": str(self.env_file) if self.env_file else None,
        }


def find_env_file(start_path: Optional[PathLike] = None) -> Optional[Path]:
    """Search for the closest .env file starting from start_path or CWD."""
    if start_path is None:
        found = find_dotenv(usecwd=True)
        return Path(found) if found else None
    search_root = Path(start_path).resolve()
    for candidate_dir in (search_root, *search_root.parents):
        candidate = candidate_dir / ".env"
        if candidate.is_file():
            return candidate
    return None


def collect_runtime_config(start_path: Optional[PathLike] = None) -> RuntimeConfig:
    """Source the nearest .env (without overriding the environment) and read settings."""
    env_path = find_env_file(start_path)
    if env_path:
        load_dotenv(env_path, override=False)

    env = os.environ
    return RuntimeConfig(
        line_width=_parse_width(env.get(ENV_LINE_WIDTH)),
        report_dir=Path(env[ENV_REPORT_DIR]) if env.get(ENV_REPORT_DIR) else SCAN_DEFAULTS.report_dir,
        env_file=env_path,
    )


def _parse_width(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return SCAN_DEFAULTS.line_width
    try:
        width = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{ENV_LINE_WIDTH} must be an integer, got {raw!r}") from exc
    if width < 0:
        raise ConfigError(f"{ENV_LINE_WIDTH} must be >= 0, got {width}")
    return width
