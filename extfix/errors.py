# extfix/errors.py

from __future__ import annotations


class ExtFixError(Exception):
    """Base class for all errors raised by extfix."""


class FileReadError(ExtFixError):
    """A file's content could not be read.

    Raised per file; the pipeline absorbs it and records the file as unidentifiable.
    """

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        detail = f": {type(cause).__name__}: {cause}" if cause else ""
        super().__init__(f"Cannot read {path}{detail}")


class BatchValidationError(ExtFixError):
    """The input batch was rejected before processing started (empty, duplicate paths)."""


class ArchiveError(ExtFixError):
    """Archive assembly failed; the run yields no archive."""


class BatchCancelled(ExtFixError):
    """The run was stopped between two files at the caller's request."""

    def __init__(self, processed: int):
        self.processed = processed
        super().__init__(f"Cancelled after {processed} file(s)")
