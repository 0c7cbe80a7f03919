from __future__ import annotations

import logging
import os
import queue
import shlex
import signal
import subprocess
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterator, List, Optional

from .catalog import Catalog
from .classifier import classify
from .config import InstallerConfig
from .events import Event, LaunchFailed, RunComplete, StepError, StepWarning
from .lib.script import render_install_script
from .plan import ExecutionPlan

logger = logging.getLogger(__name__)


def _fmt_argv(argv: List[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def iter_lines(stream: IO[bytes]) -> Iterator[str]:
    """Yield decoded lines from a byte stream.

    Carriage returns count as line breaks so progress bars that redraw in
    place (pacman, curl) come through as separate lines instead of one
    ever-growing line.
    """
    for raw in stream:
        parts = raw.replace(b"\r\n", b"\n").replace(b"\r", b"\n").split(b"\n")
        if parts[-1] == b"":
            parts.pop()
        for part in parts:
            yield part.decode("utf-8", errors="replace").rstrip()


def write_script(content: str, script_dir: Optional[str] = None) -> Path:
    fd, name = tempfile.mkstemp(prefix="install_selected_", suffix=".sh", dir=script_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(name, 0o700)
    except BaseException:
        Path(name).unlink(missing_ok=True)
        raise
    return Path(name)


def _remove_script(path: Optional[Path]) -> None:
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
        logger.info("Removed install script %s", path)
    except OSError:
        logger.exception("Failed to remove install script %s", path)


@dataclass
class RunHandle:
    """A launched (or failed-to-launch) installation run."""

    process: Optional[subprocess.Popen] = None
    script_path: Optional[Path] = None
    drain_thread: Optional[threading.Thread] = None
    argv: List[str] = field(default_factory=list)

    @property
    def launched(self) -> bool:
        return self.process is not None

    def is_alive(self) -> bool:
        if not self.launched:
            return False
        assert self.process is not None
        return self.process.poll() is None

    def abandon(self, policy: str = "detach") -> None:
        """Let go of the run without waiting for it (user forced quit).

        detach: the child is left as-is. Once our end of its output pipe is
        gone it will most likely die on its next write; that is accepted.
        terminate: SIGTERM the child's process group.
        """
        if self.is_alive():
            assert self.process is not None
            if policy == "terminate":
                logger.warning("Terminating installer process group %s", self.process.pid)
                try:
                    os.killpg(self.process.pid, signal.SIGTERM)
                except ProcessLookupError:
                    pass
            else:
                logger.warning(
                    "Detaching from running installer (pid=%s): %s", self.process.pid, _fmt_argv(self.argv)
                )
        # bash keeps its own descriptor on the script, unlinking is safe.
        _remove_script(self.script_path)


def _drain(
    process: subprocess.Popen,
    script_path: Path,
    inbox: "queue.Queue[Event]",
) -> None:
    errors = 0
    warnings = 0
    returncode = -1
    try:
        assert process.stdout is not None
        for line in iter_lines(process.stdout):
            event = classify(line)
            if isinstance(event, StepError):
                errors += 1
            elif isinstance(event, StepWarning):
                warnings += 1
            logger.debug("%s %s", type(event).__name__, line)
            inbox.put(event)
        process.stdout.close()
        returncode = process.wait()
        logger.info("Installer exited with status %s", returncode)
    except Exception:
        logger.exception("Output drain failed")
        returncode = process.poll()
        if returncode is None:
            returncode = -1
    finally:
        _remove_script(script_path)
        inbox.put(RunComplete(returncode=returncode, errors=errors, warnings=warnings))


def start_run(
    plan: ExecutionPlan,
    catalog: Catalog,
    config: InstallerConfig,
    inbox: "queue.Queue[Event]",
) -> RunHandle:
    """Write the install script, launch it and start draining its output.

    Returns immediately. Everything the run produces arrives in the inbox,
    ending with exactly one RunComplete, or a single LaunchFailed if the
    process could not be started.
    """

    script_path: Optional[Path] = None
    try:
        script_path = write_script(render_install_script(plan, catalog, config), config.script_dir)
        argv = [config.shell, str(script_path)]
        logger.info("CMD %s", _fmt_argv(argv))
        process = subprocess.Popen(
            argv,
            cwd=os.getcwd(),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            start_new_session=True,
        )
    except OSError as e:
        logger.exception("Failed to launch installer")
        _remove_script(script_path)
        inbox.put(LaunchFailed(message=str(e)))
        return RunHandle(script_path=None)

    logger.info("Installer started (pid=%s, %d steps)", process.pid, len(plan))
    thread = threading.Thread(
        target=_drain,
        args=(process, script_path, inbox),
        name="installer-drain",
        daemon=True,
    )
    thread.start()
    return RunHandle(process=process, script_path=script_path, drain_thread=thread, argv=argv)
