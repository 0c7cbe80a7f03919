from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .events import (
    LaunchFailed,
    OutputLine,
    ProcessEvent,
    RunComplete,
    StepError,
    StepStarted,
    StepWarning,
)

logger = logging.getLogger(__name__)


class RunPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass
class RunState:
    """What the UI knows about the installation run.

    The phase only moves forward (Idle -> Running -> Complete, or straight to
    Complete when the launch fails). Events arriving outside Running are
    dropped.
    """

    phase: RunPhase = RunPhase.IDLE
    current_step: str = ""
    progress: str = ""
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    returncode: Optional[int] = None
    launch_failed: bool = False
    log_path: str = ""

    @property
    def is_idle(self) -> bool:
        return self.phase is RunPhase.IDLE

    @property
    def is_running(self) -> bool:
        return self.phase is RunPhase.RUNNING

    @property
    def is_complete(self) -> bool:
        return self.phase is RunPhase.COMPLETE

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def succeeded(self) -> bool:
        return self.is_complete and not self.errors

    def start(self, log_path: str = "") -> None:
        if self.phase is not RunPhase.IDLE:
            raise RuntimeError(f"Run already {self.phase.value}")
        self.phase = RunPhase.RUNNING
        self.log_path = log_path
        self.progress = "Starting installation..."

    def _complete(self) -> None:
        self.phase = RunPhase.COMPLETE

    def apply(self, event: ProcessEvent) -> None:
        if self.phase is not RunPhase.RUNNING:
            logger.debug("Dropping %r (phase=%s)", event, self.phase.value)
            return

        if isinstance(event, StepStarted):
            self.current_step = event.name
        elif isinstance(event, OutputLine):
            if event.text.strip():
                self.progress = event.text
        elif isinstance(event, StepError):
            self.errors.append(event.text)
        elif isinstance(event, StepWarning):
            self.warnings.append(event.text)
        elif isinstance(event, LaunchFailed):
            self.launch_failed = True
            self.errors.append(f"Launch failed: {event.message}")
            self._complete()
        elif isinstance(event, RunComplete):
            self.returncode = event.returncode
            if event.returncode != 0 and not self.errors:
                self.errors.append(f"Installer exited with status {event.returncode}")
            self._complete()
            logger.info(
                "Run complete (returncode=%s errors=%d warnings=%d)",
                event.returncode,
                len(self.errors),
                len(self.warnings),
            )
        else:
            raise TypeError(f"Not a process event: {event!r}")
