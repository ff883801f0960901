# extfix/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable

from .model import ProcessingOutcome
from .rename import current_extension

HEADER = [
    "original_path", "final_path", "current_ext", "detected_ext",
    "detected_mime", "status", "error",
]


def write_csv(out_path: Path, outcomes: Iterable[ProcessingOutcome]) -> None:
    """Write the outcome log to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        outcomes (Iterable[ProcessingOutcome]): Outcome log, in processing order.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for o in outcomes:
            writer.writerow([
                o.original_path,
                o.final_path,
                current_extension(o.original_path),
                o.detected.extension,
                o.detected.mime,
                o.status.value,
                o.error,
            ])
