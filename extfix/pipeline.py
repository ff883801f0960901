# extfix/pipeline.py

"""
Batch pipeline: detect each file's real format, decide its final path, and
collect everything the archive needs, strictly in input order.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Set

from .archive import build_archive
from .config import GENERIC_ERROR_MESSAGE
from .errors import ArchiveError, BatchCancelled, BatchValidationError, FileReadError
from .filetype import detect_source
from .model import (
    ArchiveEntry,
    BatchResult,
    DetectedFormat,
    FileRecord,
    ProcessingOutcome,
    ProcessingSummary,
    Status,
)
from .rename import decide, with_suffix_index
from .state import RunContext, RunState

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProcessingSummary, ProcessingOutcome], None]
CancelCheck = Callable[[], bool]


def validate_batch(files: Sequence[FileRecord]) -> None:
    """Reject a batch that cannot be processed.

    Raises:
        BatchValidationError: If the batch is empty or lists a path twice.
    """
    if not files:
        raise BatchValidationError("No valid files found in the selected folder.")
    seen: Set[str] = set()
    for rec in files:
        if rec.path in seen:
            raise BatchValidationError(f"Duplicate input path: {rec.path}")
        seen.add(rec.path)


def _unique_path(candidate: str, taken: Set[str]) -> str:
    """Return `candidate`, or the first `_1`, `_2`, ... variant not in `taken`."""
    path = candidate
    i = 1
    while path in taken:
        path = with_suffix_index(candidate, i)
        i += 1
    return path


def process_file(record: FileRecord) -> ProcessingOutcome:
    """Detect and decide a single file.

    A file whose prefix cannot be read is kept as is and reported as unidentified.
    """
    error = ""
    try:
        detected = detect_source(record.source, record.path)
    except FileReadError as exc:
        logger.warning("Could not read %s, keeping it unchanged: %s", record.path, exc)
        detected = DetectedFormat.UNKNOWN
        error = str(exc)

    decision = decide(record.path, detected)
    return ProcessingOutcome(
        original_path=record.path,
        original_name=record.name,
        detected=detected,
        status=decision.status,
        final_path=decision.final_path,
        error=error,
    )


def run(
    files: Sequence[FileRecord],
    context: Optional[RunContext] = None,
    on_progress: Optional[ProgressCallback] = None,
    should_cancel: Optional[CancelCheck] = None,
) -> BatchResult:
    """Process a batch of files in order.

    Args:
        files (Sequence[FileRecord]): Pre-filtered, non-empty batch with unique paths.
        context (RunContext | None): Live state updated after each file.
        on_progress (ProgressCallback | None): Called with the summary and the newest outcome.
        should_cancel (CancelCheck | None): Checked before each file.

    Returns:
        BatchResult: Full outcome log, archive entries, and the finalized summary.

    Raises:
        BatchValidationError: If the batch is empty or has duplicate paths.
        BatchCancelled: If `should_cancel` returned True.
    """
    validate_batch(files)
    return _run(files, context, on_progress, should_cancel)


def _run(
    files: Sequence[FileRecord],
    context: Optional[RunContext],
    on_progress: Optional[ProgressCallback],
    should_cancel: Optional[CancelCheck],
) -> BatchResult:
    """Process an already validated batch; see `run`."""
    summary = ProcessingSummary(total=len(files))
    if context is not None:
        context.summary = summary

    outcomes: List[ProcessingOutcome] = []
    entries: List[ArchiveEntry] = []
    # Renamed files must not land on any input path or on another rename.
    taken: Set[str] = {rec.path for rec in files}

    logger.info("Processing %d file(s)", summary.total)
    for record in files:
        if should_cancel is not None and should_cancel():
            logger.info("Run cancelled after %d file(s)", summary.processed)
            raise BatchCancelled(summary.processed)

        if context is not None:
            context.current_file = record.path

        outcome = process_file(record)
        if outcome.status is Status.FIXED:
            final_path = _unique_path(outcome.final_path, taken)
            if final_path != outcome.final_path:
                logger.info("Name clash for %s, using %s", outcome.final_path, final_path)
                outcome = replace(outcome, final_path=final_path)
            taken.add(final_path)
            logger.debug("Fixed %s -> %s", outcome.original_path, outcome.final_path)

        outcomes.append(outcome)
        entries.append(ArchiveEntry(outcome.final_path, record.source))
        summary.record(outcome.status)

        if context is not None:
            context.push(outcome)
        if on_progress is not None:
            on_progress(summary, outcome)

    summary.finalize()
    logger.info("Processed %d file(s), fixed %d", summary.processed, summary.fixed)
    return BatchResult(outcomes=outcomes, entries=entries, summary=summary)


def execute(
    files: Sequence[FileRecord],
    context: RunContext,
    on_progress: Optional[ProgressCallback] = None,
    should_cancel: Optional[CancelCheck] = None,
) -> BatchResult:
    """Run a whole batch through detection and archiving, driving `context`.

    On success `context.archive` holds the ZIP blob and the state is COMPLETED.
    If the archive cannot be built the state becomes ERROR with a generic
    message and no archive is kept.

    Raises:
        BatchValidationError: Before anything starts, for an empty or invalid batch.
        BatchCancelled: If `should_cancel` stopped the run; `context` is reset.
        ArchiveError: If archive assembly fails.
    """
    validate_batch(files)
    context.start(len(files))

    try:
        result = _run(files, context, on_progress, should_cancel)
    except BatchCancelled:
        context.reset()
        raise

    context.state = RunState.ZIPPING
    try:
        context.archive = build_archive(result.entries)
    except ArchiveError:
        logger.exception("Archive assembly failed")
        context.fail(GENERIC_ERROR_MESSAGE)
        raise

    context.state = RunState.COMPLETED
    return result
