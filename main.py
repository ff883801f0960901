# main.py

"""
Orchestrator: read params (JSON + CLI), collect files, fix extensions from content, write the ZIP (and optional CSV).
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from extfix.config import DEFAULT_ARCHIVE_NAME
from extfix.errors import ArchiveError, BatchValidationError
from extfix.model import FileRecord, ProcessingOutcome, ProcessingSummary, Status
from extfix.pipeline import execute
from extfix.report import write_csv
from extfix.state import RunContext
from extfix.walk import collect_files

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s.%(funcName)s: %(message)s"


def load_config(path: Path | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        print(f"[WARN] Failed to read config {path}: {exc}", file=sys.stderr)
        return {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = argparse.ArgumentParser(
        description="Fix image extensions based on file content and pack the folder into a ZIP."
    )
    p.add_argument("--input", type=str, help="Input file or directory (recursive).")
    p.add_argument("--output", type=str, help=f"Path to the ZIP archive (default: {DEFAULT_ARCHIVE_NAME}).")
    p.add_argument("--report", type=str, help="Optional path to a CSV report of every file.")
    p.add_argument("--config", type=str, help="Optional JSON config (flags override).")
    p.add_argument("--quiet", action="store_true", help="Do not print one line per file.")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return p.parse_args(argv)


def _setup_logging(verbose: bool) -> None:
    """Configure the root logger for console output on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _get_effective_config(args: argparse.Namespace) -> Tuple[Dict[str, Any], Path]:
    """Load CLI + JSON configuration, giving precedence to CLI flags."""
    script_dir = Path(__file__).parent
    default_config_path = script_dir / "params.json"
    config_path = Path(args.config) if args.config else default_config_path
    cfg = load_config(config_path if config_path.exists() else None)
    return cfg, config_path


def _resolve_paths(args: argparse.Namespace, cfg: Dict[str, Any], config_path: Path) -> Tuple[Path, Path, Path | None]:
    """Resolve and validate input and output paths."""
    input_str = args.input or cfg.get("input", "")
    if not input_str:
        print(f"[ERR] --input is required (or set 'input' in {config_path.name}).", file=sys.stderr)
        raise SystemExit(2)
    input_path = Path(input_str)
    if not input_path.exists():
        print(f"[ERR] Input not found: {input_path}", file=sys.stderr)
        raise SystemExit(2)

    output_path = Path(args.output or cfg.get("output", DEFAULT_ARCHIVE_NAME))
    report_str = args.report or cfg.get("report", "")
    report_path = Path(report_str) if report_str else None
    return input_path, output_path, report_path


def _drop_own_output(records: List[FileRecord], outputs: List[Path | None]) -> List[FileRecord]:
    """Leave out files this tool writes itself (archive, report) when they sit inside the input."""
    own = {p.resolve() for p in outputs if p}
    return [r for r in records if not (isinstance(r.source, Path) and r.source.resolve() in own)]


def _print_progress(summary: ProcessingSummary, outcome: ProcessingOutcome) -> None:
    """Print one line per processed file."""
    counter = f"[{summary.processed}/{summary.total} {summary.percent}%]"
    if outcome.status is Status.FIXED:
        print(f"{counter} FIXED {outcome.original_path} -> {outcome.new_name} "
              f"(Detected: {outcome.detected.name})")
    elif outcome.error:
        print(f"{counter} OK    {outcome.original_path} (unreadable, kept as is)")
    else:
        print(f"{counter} OK    {outcome.original_path}")


def _print_summary(
    output_path: Path,
    report_path: Path | None,
    summary: ProcessingSummary,
    skipped: int
) -> None:
    """Print summary information to stdout."""
    print(f"[INFO] Done in {summary.elapsed:.1f}s. Total: {summary.total} | Fixed: {summary.fixed} | Skipped: {skipped}")
    print(f"[INFO] Archive: {output_path.resolve()}")
    if report_path:
        print(f"[INFO] Report: {report_path.resolve()}")


def main(argv: list[str] | None = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    _setup_logging(args.verbose)
    cfg, config_path = _get_effective_config(args)
    input_path, output_path, report_path = _resolve_paths(args, cfg, config_path)

    print(f"[INFO] Scanning: {input_path}")
    records, skipped = collect_files(input_path)
    records = _drop_own_output(records, [output_path, report_path])

    context = RunContext()
    try:
        result = execute(records, context, on_progress=None if args.quiet else _print_progress)
    except BatchValidationError as exc:
        print(f"[ERR] {exc}", file=sys.stderr)
        return 2
    except ArchiveError:
        print(f"[ERR] {context.error_message}", file=sys.stderr)
        return 3

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(context.archive or b"")
        if report_path:
            write_csv(report_path, result.outcomes)
    except OSError as exc:
        print(f"[ERR] Failed to write output: {exc}", file=sys.stderr)
        return 3

    _print_summary(output_path, report_path, result.summary, len(skipped))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
