"""
Progress Models

Progress events emitted by the upload workflow, and the small reporter
that wraps an optional caller callback.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ganjing.constants import UploadPhase


@dataclass(frozen=True)
class UploadProgress:
    """
    One progress event.

    Attributes:
        phase: Workflow phase just entered
        message: Human readable description
        percent_complete: 0-100
    """

    phase: UploadPhase
    message: str
    percent_complete: int


ProgressCallback = Callable[[UploadProgress], None]


class ProgressReporter:
    """
    Delivers progress events for a single workflow invocation.

    Wraps the "call it if the caller gave us one" check so call sites never
    test for None. Remembers the last phase and percentage, which the
    failure event reuses.

    Usage:
        reporter = ProgressReporter(on_progress)
        reporter.report(UploadPhase.CREATING_DRAFT, "Creating draft video", 50)
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.logger = logging.getLogger(__name__)
        self.callback = callback
        self.phase = UploadPhase.NOT_STARTED
        self.percent_complete = 0

    def report(self, phase: UploadPhase, message: str, percent: int) -> None:
        """Record the new phase and notify the callback, if any"""
        self.phase = phase
        self.percent_complete = percent
        self.logger.debug(f"[{percent:3}%] {phase.value}: {message}")

        if self.callback is None:
            return

        try:
            self.callback(UploadProgress(phase, message, percent))
        except Exception as e:
            # A broken progress display must not abort an upload
            self.logger.error(f"Error in progress callback: {e}")

    def fail(self, message: str) -> None:
        """Report the FAILED terminal phase at the last known percentage"""
        self.report(UploadPhase.FAILED, message, self.percent_complete)
