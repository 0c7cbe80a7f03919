from __future__ import annotations

from .events import LineEvent, OutputLine, StepError, StepStarted, StepWarning

# Line protocol shared with the lib/ scripts and the generated install script.
STEP_MARKER = "=== Installing:"
STEP_MARKER_END = "==="
ERROR_MARKER = "error"
WARNING_MARKER = "warning"


def step_marker_line(name: str) -> str:
    return f"{STEP_MARKER} {name} {STEP_MARKER_END}"


def _step_name(line: str) -> str:
    rest = line.split(STEP_MARKER, 1)[1]
    if STEP_MARKER_END in rest:
        rest = rest.split(STEP_MARKER_END, 1)[0]
    return rest.strip()


def classify(line: str) -> LineEvent:
    """Map one output line to an event.

    Priority: step marker > error > warning > plain output. Error/warning
    matching is a case-insensitive substring test.
    """
    if STEP_MARKER in line:
        return StepStarted(name=_step_name(line))

    lowered = line.lower()
    if ERROR_MARKER in lowered:
        return StepError(text=line)
    if WARNING_MARKER in lowered:
        return StepWarning(text=line)
    return OutputLine(text=line)
