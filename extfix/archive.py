# extfix/archive.py

from __future__ import annotations
import io
import logging
import zipfile
from typing import Iterable, Set

from .errors import ArchiveError, ExtFixError
from .filetype import read_content
from .model import ArchiveEntry, ContentSource

logger = logging.getLogger(__name__)


class ArchiveAssembler:
    """Builds a ZIP archive in memory, one entry at a time.

    Entry paths use '/' to encode directories and must be unique. Nothing is
    returned until `finalize()`: the archive is either complete or not produced.
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression)
        self._paths: Set[str] = set()
        self._closed = False

    def __len__(self) -> int:
        return len(self._paths)

    def add(self, path: str, content: ContentSource) -> None:
        """Add one entry.

        Args:
            path (str): Path inside the archive.
            content (ContentSource): Bytes, or a file whose full content is stored.

        Raises:
            ArchiveError: On a duplicate path, a closed archive, or any read/write failure.
        """
        if self._closed:
            raise ArchiveError("Archive already finalized")
        if path in self._paths:
            raise ArchiveError(f"Duplicate archive path: {path}")
        try:
            self._zip.writestr(path, read_content(content, path))
        except (ExtFixError, OSError, zipfile.BadZipFile, ValueError) as exc:
            raise ArchiveError(f"Failed to add {path}: {exc}") from exc
        self._paths.add(path)

    def finalize(self) -> bytes:
        """Close the archive and return it as a single blob."""
        if self._closed:
            raise ArchiveError("Archive already finalized")
        self._closed = True
        try:
            self._zip.close()
        except (OSError, ValueError) as exc:
            raise ArchiveError(f"Failed to finalize archive: {exc}") from exc
        blob = self._buffer.getvalue()
        logger.info("Archive built: %d entries, %d bytes", len(self._paths), len(blob))
        return blob


def build_archive(entries: Iterable[ArchiveEntry]) -> bytes:
    """Build a ZIP blob from an ordered sequence of entries.

    Raises:
        ArchiveError: If any entry cannot be stored.
    """
    assembler = ArchiveAssembler()
    for entry in entries:
        assembler.add(entry.path, entry.source)
    return assembler.finalize()
