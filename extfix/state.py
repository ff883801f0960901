# extfix/state.py

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List

from .config import LOG_HISTORY_LIMIT
from .model import ProcessingOutcome, ProcessingSummary


class RunState(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    ZIPPING = "zipping"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class RunContext:
    """State of one run, as seen by whoever displays progress.

    Created per run and mutated only by the pipeline driving it. `recent` holds
    the newest outcomes first and is capped for display; the complete log lives
    in the pipeline's result.
    """
    state: RunState = RunState.IDLE
    summary: ProcessingSummary | None = None
    current_file: str = ""
    recent: Deque[ProcessingOutcome] = field(default_factory=lambda: deque(maxlen=LOG_HISTORY_LIMIT))
    archive: bytes | None = None
    error_message: str = ""

    def start(self, total: int) -> None:
        """Discard anything left from a previous run and begin a new one."""
        self.state = RunState.PROCESSING
        self.summary = ProcessingSummary(total=total)
        self.current_file = ""
        self.recent.clear()
        self.archive = None
        self.error_message = ""

    def push(self, outcome: ProcessingOutcome) -> None:
        self.recent.appendleft(outcome)

    def fail(self, message: str) -> None:
        self.state = RunState.ERROR
        self.archive = None
        self.error_message = message

    def reset(self) -> None:
        """Return to the initial input-selection state."""
        self.state = RunState.IDLE
        self.summary = None
        self.current_file = ""
        self.recent.clear()
        self.archive = None
        self.error_message = ""

    def recent_list(self) -> List[ProcessingOutcome]:
        return list(self.recent)
