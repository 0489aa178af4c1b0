from __future__ import annotations

import logging
import queue
import threading
from typing import IO, Dict, Optional

from httop.config import CONTROL_PATH
from httop.ingest import WorkerHandle
from httop.models import (
    Command,
    DecreaseLimitCommand,
    IncreaseLimitCommand,
    NoopCommand,
    QuitCommand,
    SortCommand,
    SortKey,
)

logger = logging.getLogger(__name__)

_KEYMAP: Dict[str, Command] = {
    "q": QuitCommand(),
    "s": SortCommand(key=SortKey.STATUS),
    "p": SortCommand(key=SortKey.PATH),
    "c": SortCommand(key=SortKey.COUNT),
    "i": SortCommand(key=SortKey.IP),
    "u": SortCommand(key=SortKey.USER_AGENT),
    "+": IncreaseLimitCommand(),
    "-": DecreaseLimitCommand(),
}

HELP = "Press s/p/c/i/u to change, +/- to adjust count, q to quit"


def parse_command(line: str) -> Command:
    """Map the first character of a control line to a command."""
    if not line:
        return NoopCommand()
    return _KEYMAP.get(line[0], NoopCommand())


def read_commands(source: IO[str], commands: "queue.Queue[Command]", stop: Optional[threading.Event] = None) -> None:
    while stop is None or not stop.is_set():
        try:
            line = source.readline()
        except (OSError, ValueError) as exc:
            logger.warning("control input failed, controls disabled: %s", exc)
            return
        if not line:
            return
        cmd = parse_command(line)
        commands.put(cmd)
        if isinstance(cmd, QuitCommand):
            return


def start_control_thread(commands: "queue.Queue[Command]", path: str = CONTROL_PATH) -> Optional[WorkerHandle]:
    """
    Open the control source and start reading commands from it.

    Returns None when the source cannot be opened; the dashboard then runs
    without controls.
    """
    try:
        source = open(path, "r", encoding="utf-8", errors="replace")
    except OSError:
        logger.error("Could not open terminal for input, controls disabled")
        return None

    stop = threading.Event()

    def worker():
        with source:
            read_commands(source, commands, stop)

    t = threading.Thread(target=worker, name="httop-controls", daemon=True)
    t.start()
    return WorkerHandle(thread=t, stop=stop)
