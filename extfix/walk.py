# extfix/walk.py

from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterator, List, Tuple

from .config import SKIP_PREFIXES
from .model import FileRecord

logger = logging.getLogger(__name__)


def should_skip(rel_path: str) -> bool:
    """Return True for dotfiles and anything under a system-metadata folder."""
    return any(seg.startswith(SKIP_PREFIXES) for seg in rel_path.split("/") if seg)


def iter_files(root: Path) -> Iterator[Path]:
    """Iterate over all files in a path, recursively if it's a directory.

    Files are yielded in a stable, sorted order.

    Args:
        root (Path): File or directory to scan.

    Yields:
        Path: Paths to each file found.
    """
    if root.is_file():
        yield root
        return

    for p in sorted(root.rglob("*")):
        if p.is_file():
            yield p


def collect_files(root: Path) -> Tuple[List[FileRecord], List[str]]:
    """Build the input batch for a folder, the way a folder picker would.

    Relative paths start with the folder's own name and use '/' separators,
    e.g. ``album/sub/pic.png``. Content is referenced, not loaded.

    Args:
        root (Path): File or directory selected by the user.

    Returns:
        Tuple[List[FileRecord], List[str]]: Kept records, and the relative paths
        that were filtered out.
    """
    root = root.resolve()
    base = root.parent
    records: List[FileRecord] = []
    skipped: List[str] = []
    for fp in iter_files(root):
        rel = fp.relative_to(base).as_posix()
        inner = fp.relative_to(root).as_posix() if root.is_dir() else fp.name
        if should_skip(inner):
            skipped.append(rel)
            continue
        records.append(FileRecord(path=rel, source=fp))
    logger.info("Collected %d file(s) from %s, skipped %d", len(records), root, len(skipped))
    return records, skipped
