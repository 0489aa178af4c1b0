from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

from httop.parser import parse_line
from httop.store import AggregateStore

logger = logging.getLogger(__name__)


@dataclass
class WorkerHandle:
    thread: threading.Thread
    stop: threading.Event

    def join(self, timeout: Optional[float] = None) -> bool:
        """Signal the worker and wait for it. Returns True if it exited."""
        self.stop.set()
        self.thread.join(timeout)
        return not self.thread.is_alive()


def ingest_lines(lines: Iterable[str], store: AggregateStore, stop: Optional[threading.Event] = None) -> int:
    """
    Feed lines into the store until the input ends, fails, or ``stop`` is set.

    Returns the number of events recorded. End of input and read errors are
    the same outcome for the caller; a line that does not parse is skipped.
    """
    recorded = 0
    it = iter(lines)
    while stop is None or not stop.is_set():
        try:
            line = next(it)
        except StopIteration:
            logger.info("log stream ended after %d events", recorded)
            return recorded
        except (OSError, ValueError) as exc:
            # ValueError covers decode errors and reads from a closed stream
            logger.warning("log stream read failed, ingestion stopped: %s", exc)
            return recorded
        ev = parse_line(line)
        if ev is not None:
            store.record(ev)
            recorded += 1
    logger.debug("ingestion stopped after %d events", recorded)
    return recorded


def start_ingest_thread(stream: Iterable[str], store: AggregateStore) -> WorkerHandle:
    stop = threading.Event()
    t = threading.Thread(
        target=ingest_lines,
        args=(stream, store, stop),
        name="httop-ingest",
        daemon=True,
    )
    t.start()
    return WorkerHandle(thread=t, stop=stop)
