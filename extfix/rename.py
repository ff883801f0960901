# extfix/rename.py

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from .model import DetectedFormat, Status

SEPARATOR = "/"

# Extensions accepted as already correct besides the canonical one.
_SYNONYMS = {
    DetectedFormat.JPEG: {"jpeg"},
}


@dataclass(frozen=True)
class Decision:
    """Result of applying the path policy to one file."""
    final_path: str
    status: Status


def split_segments(path: str) -> List[str]:
    """Split a relative path into its ordered segments."""
    return path.split(SEPARATOR)


def join_segments(segments: List[str]) -> str:
    return SEPARATOR.join(segments)


def split_name(name: str) -> Tuple[str, str]:
    """Split a file name into (stem, extension) on its last dot.

    The extension is returned as written (no dot, case kept). A name with no dot,
    or whose only dot is the leading one, has no extension.
    """
    idx = name.rfind(".")
    if idx <= 0:
        return name, ""
    return name[:idx], name[idx + 1:]


def current_extension(path: str) -> str:
    """Return the lower-cased extension of the last path segment ('' if none)."""
    name = split_segments(path)[-1]
    idx = name.rfind(".")
    return name[idx + 1:].lower() if idx >= 0 else ""


def is_match(extension: str, detected: DetectedFormat) -> bool:
    """Check whether an extension is acceptable for a detected format."""
    if detected is DetectedFormat.UNKNOWN:
        return False
    ext = extension.lower()
    return ext == detected.extension or ext in _SYNONYMS.get(detected, ())


def replace_name(path: str, new_name: str) -> str:
    """Replace the last segment of a path, keeping every directory segment verbatim."""
    segments = split_segments(path)
    segments[-1] = new_name
    return join_segments(segments)


def decide(original_path: str, detected: DetectedFormat) -> Decision:
    """Decide whether a file must be renamed and compute its final path.

    Unidentified content is never renamed. Otherwise the extension of the last
    segment is replaced by the canonical one for the detected format, unless it
    already matches (``jpeg`` is accepted for JPEG).

    Args:
        original_path (str): Relative path as supplied, '/'-separated.
        detected (DetectedFormat): Format found in the file's content.

    Returns:
        Decision: Final path and FIXED/UNCHANGED status.
    """
    if detected is DetectedFormat.UNKNOWN:
        return Decision(original_path, Status.UNCHANGED)

    if is_match(current_extension(original_path), detected):
        return Decision(original_path, Status.UNCHANGED)

    name = split_segments(original_path)[-1]
    stem = name[:name.rfind(".")] if "." in name else name
    if not stem:
        stem = name
    new_name = f"{stem}.{detected.extension}"
    return Decision(replace_name(original_path, new_name), Status.FIXED)


def with_suffix_index(path: str, index: int) -> str:
    """Append `_<index>` to the stem of the last segment.

    ``album/pic.gif`` with index 2 becomes ``album/pic_2.gif``.
    """
    stem, ext = split_name(split_segments(path)[-1])
    new_name = f"{stem}_{index}.{ext}" if ext else f"{stem}_{index}"
    return replace_name(path, new_name)
