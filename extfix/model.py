# extfix/model.py

from __future__ import annotations
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Union


# Opaque content handle: raw bytes held in memory, or a file read lazily.
ContentSource = Union[bytes, Path]


class DetectedFormat(str, Enum):
    """Image format identified from a file's leading bytes."""
    PNG = "png"
    JPEG = "jpg"
    GIF = "gif"
    WEBP = "webp"
    UNKNOWN = "unknown"

    @property
    def extension(self) -> str:
        """Canonical extension without the dot; empty for UNKNOWN."""
        return "" if self is DetectedFormat.UNKNOWN else self.value

    @property
    def mime(self) -> str:
        return _FORMAT_MIME.get(self, "application/octet-stream")


_FORMAT_MIME = {
    DetectedFormat.PNG: "image/png",
    DetectedFormat.JPEG: "image/jpeg",
    DetectedFormat.GIF: "image/gif",
    DetectedFormat.WEBP: "image/webp",
}


class Status(str, Enum):
    """Decision taken for one file."""
    FIXED = "fixed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class FileRecord:
    """One input file: relative path ('/'-separated) and its content handle."""
    path: str
    source: ContentSource = field(repr=False)

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ProcessingOutcome:
    """Represents a row in the outcome log."""
    original_path: str
    original_name: str
    detected: DetectedFormat
    status: Status
    final_path: str
    error: str = ""   # prefix read failure, if any

    @property
    def new_name(self) -> str:
        return self.final_path.rsplit("/", 1)[-1]


@dataclass
class ProcessingSummary:
    """Running counters for a batch; only ever incremented."""
    total: int
    fixed: int = 0
    processed: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: float | None = None

    @property
    def finished(self) -> bool:
        return self.end_time is not None

    @property
    def elapsed(self) -> float:
        """Seconds since the run started (frozen once finalized)."""
        end = self.end_time if self.end_time is not None else time.time()
        return max(0.0, end - self.start_time)

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 0
        # halves round up
        return (self.processed * 100 + self.total // 2) // self.total

    def record(self, status: Status) -> None:
        self.processed += 1
        if status is Status.FIXED:
            self.fixed += 1

    def finalize(self) -> None:
        if self.end_time is None:
            self.end_time = time.time()


@dataclass(frozen=True)
class ArchiveEntry:
    """A (final path, original content) pair handed to the archive assembler."""
    path: str
    source: ContentSource = field(repr=False)


@dataclass
class BatchResult:
    """Everything one pipeline pass produces."""
    outcomes: List[ProcessingOutcome]
    entries: List[ArchiveEntry]
    summary: ProcessingSummary
