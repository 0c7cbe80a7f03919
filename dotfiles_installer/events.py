"""Events delivered to the UI loop's inbox.

Process events are produced by the supervisor's drain thread (one per output
line, plus a single terminal RunComplete); KeyPressed and Tick are produced
on the loop side. All of them are immutable values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class StepStarted:
    name: str


@dataclass(frozen=True)
class StepWarning:
    text: str


@dataclass(frozen=True)
class StepError:
    text: str


@dataclass(frozen=True)
class OutputLine:
    text: str


@dataclass(frozen=True)
class LaunchFailed:
    message: str


@dataclass(frozen=True)
class RunComplete:
    returncode: int
    errors: int = 0
    warnings: int = 0


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Tick:
    pass


LineEvent = Union[StepStarted, StepWarning, StepError, OutputLine]
ProcessEvent = Union[StepStarted, StepWarning, StepError, OutputLine, LaunchFailed, RunComplete]
Event = Union[ProcessEvent, KeyPressed, Tick]
