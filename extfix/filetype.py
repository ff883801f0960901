# extfix/filetype.py

from __future__ import annotations
import logging
from pathlib import Path

from .errors import FileReadError
from .model import ContentSource, DetectedFormat

logger = logging.getLogger(__name__)

# Bytes needed to evaluate every signature below (RIFF....WEBP is the longest).
SIGNATURE_LENGTH = 12


# --- reading -------------------------------------------------------------------


def read_prefix(source: ContentSource, size: int = SIGNATURE_LENGTH, label: str = "") -> bytes:
    """Read at most `size` leading bytes from a content handle.

    Only the requested bytes are read, never the whole file.

    Args:
        source (ContentSource): In-memory bytes or a path on disk.
        size (int): Number of bytes wanted.
        label (str): Name used in the error message (defaults to the source path).

    Returns:
        bytes: The prefix; shorter than `size` when the file is.

    Raises:
        FileReadError: If the source cannot be read.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source[:size])
    try:
        with Path(source).open("rb") as f:
            return f.read(size)
    except OSError as exc:
        raise FileReadError(label or str(source), exc) from exc


def read_content(source: ContentSource, label: str = "") -> bytes:
    """Read the full content of a handle."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    try:
        return Path(source).read_bytes()
    except OSError as exc:
        raise FileReadError(label or str(source), exc) from exc


# --- sniffers ------------------------------------------------------------------


def _is_png(head: bytes) -> bool:
    return head[:4] == b"\x89PNG"


def _is_jpeg(head: bytes) -> bool:
    return head[:3] == b"\xFF\xD8\xFF"


def _is_gif(head: bytes) -> bool:
    # GIF87a and GIF89a share these four bytes
    return head[:4] == b"GIF8"


def _is_webp(head: bytes) -> bool:
    return len(head) >= 12 and head[:4] == b"RIFF" and head[8:12] == b"WEBP"


_SNIFFERS = (
    (_is_png, DetectedFormat.PNG),
    (_is_jpeg, DetectedFormat.JPEG),
    (_is_gif, DetectedFormat.GIF),
    (_is_webp, DetectedFormat.WEBP),
)


# --- public API ----------------------------------------------------------------


def detect(prefix: bytes) -> DetectedFormat:
    """Identify the image format of a file from its leading bytes.

    Never raises: anything not matching a known signature, including a prefix
    too short to compare, is UNKNOWN.

    Args:
        prefix (bytes): First bytes of the file (SIGNATURE_LENGTH is enough).

    Returns:
        DetectedFormat: The matching format, or UNKNOWN.
    """
    head = bytes(prefix or b"")
    for sniff, fmt in _SNIFFERS:
        if sniff(head):
            return fmt
    return DetectedFormat.UNKNOWN


def detect_source(source: ContentSource, label: str = "") -> DetectedFormat:
    """Read the bounded prefix of a content handle and detect its format.

    Raises:
        FileReadError: If the prefix cannot be read.
    """
    fmt = detect(read_prefix(source, SIGNATURE_LENGTH, label))
    logger.debug("Detected %s for %s", fmt.name, label or "<bytes>")
    return fmt
