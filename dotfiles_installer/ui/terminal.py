from __future__ import annotations

import contextlib
import logging
import os
import queue
import select
import sys
import termios
import threading
import tty
from typing import Iterator, List, Optional

from ..events import Event, KeyPressed

logger = logging.getLogger(__name__)

_ESCAPES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

_SINGLE = {
    "\r": "enter",
    "\n": "enter",
    " ": "space",
    "\x03": "ctrl+c",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\t": "tab",
}


def decode_keys(data: bytes) -> List[str]:
    """Turn a chunk of raw terminal input into key names.

    Arrow keys arrive as three-byte escape sequences; unknown escape
    sequences are dropped whole rather than leaking '[' and letters.
    """
    text = data.decode("utf-8", errors="ignore")
    keys: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\x1b" and i + 1 < len(text) and text[i + 1] in "[O":
            seq = text[i : i + 3]
            if seq in _ESCAPES:
                keys.append(_ESCAPES[seq])
                i += 3
                continue
            # Skip an unrecognized CSI sequence up to its final byte.
            j = i + 2
            while j < len(text) and not ("@" <= text[j] <= "~"):
                j += 1
            i = j + 1
            continue
        keys.append(_SINGLE.get(ch, ch))
        i += 1
    return keys


@contextlib.contextmanager
def cbreak(fd: Optional[int] = None) -> Iterator[None]:
    """Unbuffered, no-echo input for the duration of the block."""
    if fd is None:
        fd = sys.stdin.fileno()
    if not os.isatty(fd):
        yield
        return
    old = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


class KeyReader:
    """Daemon thread turning keystrokes into KeyPressed events in the inbox."""

    def __init__(self, inbox: "queue.Queue[Event]", fd: Optional[int] = None, poll: float = 0.1) -> None:
        self.inbox = inbox
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.poll = poll
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="key-reader", daemon=True)

    def start(self) -> "KeyReader":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=self.poll * 5)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                ready, _, _ = select.select([self.fd], [], [], self.poll)
            except InterruptedError:
                continue
            if not ready:
                continue
            try:
                data = os.read(self.fd, 64)
            except OSError:
                logger.exception("Keyboard read failed")
                return
            if not data:
                return
            for key in decode_keys(data):
                self.inbox.put(KeyPressed(key=key))
