from __future__ import annotations

import logging
import queue
import time
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from httop.config import CONTROL_PATH, TICK_MS
from httop.controls import start_control_thread
from httop.ingest import WorkerHandle, start_ingest_thread
from httop.models import Command, QuitCommand
from httop.render import Screen, format_screen
from httop.store import AggregateStore
from httop.view import ViewState

logger = logging.getLogger(__name__)

WORKER_JOIN_TIMEOUT_S = 0.5


class Httop:
    """
    Fixed-cadence render loop.

    Each tick consumes at most one pending command, snapshots the store and
    redraws the screen. A quit command stops the loop after the tick it
    arrives in.
    """

    def __init__(
        self,
        store: AggregateStore,
        commands: "queue.Queue[Command]",
        *,
        screen: Optional[Screen] = None,
        view: Optional[ViewState] = None,
        tick_s: float = TICK_MS / 1000.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.commands = commands
        self.screen = screen or Screen()
        self.view = view or ViewState()
        self.tick_s = tick_s
        self.running = True
        self._clock = clock
        self._sleep = sleep
        self._now = now

    def poll_command(self) -> None:
        try:
            cmd = self.commands.get_nowait()
        except queue.Empty:
            return
        if isinstance(cmd, QuitCommand):
            self.running = False
        else:
            self.view.apply(cmd)

    def tick(self) -> str:
        self.poll_command()
        frame = format_screen(self.store.snapshot(), self.view, self._now())
        self.screen.draw(frame)
        return frame

    def run(self) -> None:
        deadline = self._clock()
        while self.running:
            self.tick()
            if not self.running:
                break
            # after a stall, resume from now instead of replaying missed ticks
            deadline = max(deadline + self.tick_s, self._clock())
            self._sleep(max(0.0, deadline - self._clock()))


def run_dashboard(
    log_stream: Iterable[str],
    *,
    control_path: str = CONTROL_PATH,
    screen: Optional[Screen] = None,
) -> AggregateStore:
    """Wire the workers to a render loop and run until quit."""
    store = AggregateStore()
    commands: "queue.Queue[Command]" = queue.Queue()

    workers: List[WorkerHandle] = [start_ingest_thread(log_stream, store)]
    control = start_control_thread(commands, control_path)
    if control is not None:
        workers.append(control)

    try:
        Httop(store, commands, screen=screen).run()
    finally:
        for handle in workers:
            if not handle.join(WORKER_JOIN_TIMEOUT_S):
                # blocked in a read; daemon thread ends with the process
                logger.debug("worker %s still blocked at exit", handle.thread.name)
    return store
