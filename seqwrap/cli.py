"""Command-line interface for seqwrap."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

from . import __version__
from .config import SCAN_DEFAULTS, ConfigError, RuntimeConfig, collect_runtime_config
from .io import ensure_dir, now_iso, read_record_body, write_json, write_report
from .logging_utils import configure_logging, get_logger
from .scanner import ScanResult, scan

Handler = Callable[[argparse.Namespace], int]

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INCONSISTENT = 2


def build_parser(runtime: RuntimeConfig | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqwrap",
        description="Check that sequence record bodies are wrapped at a fixed line width.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    parser.set_defaults(runtime=runtime)
    subparsers = parser.add_subparsers(dest="command", required=True)

    line_width = runtime.line_width if runtime else SCAN_DEFAULTS.line_width
    report_dir = runtime.report_dir if runtime else SCAN_DEFAULTS.report_dir

    _add_scan_parser(subparsers, line_width)
    _add_report_parser(subparsers, line_width, report_dir)
    return parser


def _add_width_argument(parser: argparse.ArgumentParser, line_width: int) -> None:
    parser.add_argument(
        "--line-width",
        type=_non_negative_int,
        default=line_width,
        help=f"Expected residues per wrapped line (default: {line_width}).",
    )


def _add_scan_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser], line_width: int) -> None:
    parser = subparsers.add_parser("scan", help="Scan record bodies and print (length, errors).")
    parser.add_argument("inputs", nargs="+", type=Path, help="Files, each holding one record body.")
    _add_width_argument(parser, line_width)
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per file instead of tab-separated text.",
    )
    parser.set_defaults(handler=_handle_scan)


def _add_report_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser], line_width: int, report_dir: Path
) -> None:
    parser = subparsers.add_parser("report", help="Write a CSV report and manifest for several record bodies.")
    parser.add_argument("inputs", nargs="+", type=Path, help="Files, each holding one record body.")
    _add_width_argument(parser, line_width)
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=report_dir,
        help=f"Directory for report outputs (default: {report_dir}).",
    )
    parser.set_defaults(handler=_handle_report)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _scan_path(path: Path, line_width: int) -> ScanResult:
    logger = get_logger()
    buffer = read_record_body(path)
    result = scan(buffer, line_width)
    logger.debug("%s: %s bytes, %s residues, %s errors", path, len(buffer), *result)
    if not result.is_consistent:
        logger.warning("%s: %s line width irregularities (expected %s)", path, result.error_count, line_width)
    return result


def _handle_scan(args: argparse.Namespace) -> int:
    if args.line_width == 0:
        get_logger().warning("Line width 0 makes every non-blank line a mismatch")
    status = EXIT_OK
    for path in args.inputs:
        result = _scan_path(path, args.line_width)
        if args.json:
            payload = {"path": str(path), **result.as_dict()}
            print(json.dumps(payload))
        else:
            print(f"{path}\t{result.sequence_length}\t{result.error_count}")
        if not result.is_consistent:
            status = EXIT_INCONSISTENT
    return status


def _handle_report(args: argparse.Namespace) -> int:
    logger = get_logger()
    out_dir = ensure_dir(args.out_dir)
    rows: List[Dict[str, Any]] = []
    for path in args.inputs:
        result = _scan_path(path, args.line_width)
        rows.append(
            {
                "path": str(path),
                "expected_line_length": args.line_width,
                "sequence_length": result.sequence_length,
                "error_count": result.error_count,
                "consistent": result.is_consistent,
            }
        )

    report_path = out_dir / SCAN_DEFAULTS.report_name
    manifest_path = out_dir / SCAN_DEFAULTS.manifest_name
    write_report(rows, report_path)
    inconsistent = sum(1 for row in rows if not row["consistent"])
    write_json(
        manifest_path,
        {
            "params": {
                "inputs": [str(path) for path in args.inputs],
                "line_width": args.line_width,
                "out_dir": str(out_dir),
            },
            "counts": {
                "files": len(rows),
                "inconsistent_files": inconsistent,
                "total_residues": sum(row["sequence_length"] for row in rows),
            },
            "report_path": str(report_path),
            "config": args.runtime.as_dict() if args.runtime else None,
            "version": __version__,
            "timestamp": now_iso(),
        },
    )
    logger.info("Scan manifest -> %s", manifest_path)
    return EXIT_INCONSISTENT if inconsistent else EXIT_OK


def main(argv: list[str] | None = None) -> int:
    config_error: ConfigError | None = None
    try:
        runtime: RuntimeConfig | None = collect_runtime_config()
    except ConfigError as exc:
        config_error = exc
        runtime = None

    # --help and --version exit inside parse_args, before config is required
    parser = build_parser(runtime)
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    logger = get_logger()
    if config_error is not None:
        logger.error(str(config_error))
        return EXIT_FAILURE
    if runtime.env_file:
        logger.debug("Loaded environment from %s", runtime.env_file)
    handler: Handler = args.handler

    try:
        return handler(args)
    except FileNotFoundError as exc:
        logger.error(str(exc))
        return EXIT_FAILURE
    except Exception:  # pragma: no cover - safety net
        logger.exception("Unexpected error")
        return EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
