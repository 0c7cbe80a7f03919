from __future__ import annotations

import logging
import queue
import time
from typing import Callable, List, Optional

from rich.console import Console
from rich.live import Live

from ..catalog import Catalog
from ..config import InstallerConfig
from ..events import Event, KeyPressed, Tick
from ..plan import ExecutionPlan, build_plan
from ..supervisor import RunHandle, start_run
from .render import render
from .state import AppState
from .terminal import KeyReader, cbreak

logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "ctrl+c"}

Launcher = Callable[[ExecutionPlan, Catalog, InstallerConfig, "queue.Queue[Event]"], RunHandle]


class InstallerApp:
    """The UI event loop.

    All state lives in self.state and is only touched from the thread calling
    run()/pump(). The key reader and the supervisor's drain thread only put
    events into self.inbox.
    """

    def __init__(
        self,
        catalog: Catalog,
        config: InstallerConfig,
        *,
        launcher: Launcher = start_run,
        console: Optional[Console] = None,
        input_fd: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.state = AppState.from_catalog(catalog)
        self.inbox: "queue.Queue[Event]" = queue.Queue()
        self.launcher = launcher
        self.console = console or Console()
        self.plan: Optional[ExecutionPlan] = None
        self.handle: Optional[RunHandle] = None
        self.quit_requested = False
        self.input_fd = input_fd
        self._clock = clock
        self._last_tick = clock()

    def start_installation(self) -> None:
        run = self.state.run
        if not run.is_idle:
            return
        self.plan = build_plan(self.state.catalog, self.state.selection)
        run.start(log_path=self.config.install_log)
        self.handle = self.launcher(self.plan, self.state.catalog, self.config, self.inbox)

    def quit(self) -> None:
        if self.state.run.is_running and self.handle is not None:
            self.handle.abandon(self.config.cancel_policy)
        self.quit_requested = True
        logger.info("Quit requested (phase=%s)", self.state.run.phase.value)

    def _on_key(self, key: str) -> bool:
        run = self.state.run
        if run.is_complete:
            return False
        if key in QUIT_KEYS:
            self.quit()
            return False
        if run.is_running:
            return True

        nav = self.state.navigator
        if key in ("up", "k"):
            nav.move_up()
        elif key in ("down", "j"):
            nav.move_down()
        elif key in ("left", "h"):
            nav.move_category_backward()
        elif key in ("right", "l"):
            nav.move_category_forward()
        elif key == "space":
            nav.toggle_current()
        elif key == "enter":
            self.start_installation()
        return True

    def dispatch(self, event: Event) -> bool:
        """Apply one event. Returns False once the program should exit."""
        if isinstance(event, Tick):
            self.state.frame += 1
            return True
        if isinstance(event, KeyPressed):
            return self._on_key(event.key)
        self.state.run.apply(event)
        return True

    def pump(self, timeout: float) -> bool:
        """Wait up to one tick for an event, then apply everything queued.

        A Tick is added whenever a full tick has passed since the last one,
        so the spinner keeps turning while output is streaming in.
        """
        events: List[Event] = []
        try:
            events.append(self.inbox.get(timeout=timeout))
        except queue.Empty:
            pass
        while True:
            try:
                events.append(self.inbox.get_nowait())
            except queue.Empty:
                break

        now = self._clock()
        if now - self._last_tick >= timeout:
            self._last_tick = now
            events.append(Tick())

        for event in events:
            if not self.dispatch(event):
                return False
        return True

    def exit_code(self) -> int:
        if self.quit_requested:
            return 0
        return 1 if self.state.run.has_errors else 0

    def run(self) -> int:
        keys = KeyReader(self.inbox, fd=self.input_fd)
        try:
            with cbreak(keys.fd), Live(
                render(self.state),
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                keys.start()
                try:
                    while self.pump(self.config.tick_seconds):
                        live.update(render(self.state), refresh=True)
                finally:
                    # Stop reading before the terminal mode is restored.
                    keys.stop()
        except KeyboardInterrupt:
            self.quit()
        return self.exit_code()
