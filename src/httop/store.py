from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Callable, DefaultDict, Deque, Dict, List

from httop.config import RECENT_MAX
from httop.models import Event

_MIN_ELAPSED_S = 1e-9


@dataclass
class Snapshot:
    """Point-in-time copy of the aggregate store, owned by the reader."""
    total_requests: int = 0
    requests_per_second: float = 0.0
    bytes_sent: int = 0
    status_codes: Dict[int, int] = field(default_factory=dict)
    paths: Dict[str, int] = field(default_factory=dict)
    ips: Dict[str, int] = field(default_factory=dict)
    methods: Dict[str, int] = field(default_factory=dict)
    recent: List[Event] = field(default_factory=list)


class AggregateStore:
    """
    Running counters plus a bounded buffer of the most recent events.

    All reads and writes go through one lock. Writers call ``record``;
    readers call ``snapshot`` and work on the returned copy.
    """

    def __init__(self, recent_max: int = RECENT_MAX, clock: Callable[[], float] = time.monotonic):
        self.recent_max = max(1, recent_max)
        self._clock = clock
        self._lock = threading.Lock()
        self.start = clock()

        self.total_requests = 0
        self.requests_per_second = 0.0
        self.bytes_sent = 0
        self.status_codes: DefaultDict[int, int] = defaultdict(int)
        self.paths: DefaultDict[str, int] = defaultdict(int)
        self.ips: DefaultDict[str, int] = defaultdict(int)
        self.methods: DefaultDict[str, int] = defaultdict(int)
        self.recent: Deque[Event] = deque()

    def record(self, event: Event) -> None:
        with self._lock:
            self.total_requests += 1
            self.bytes_sent += event.bytes_sent

            self.status_codes[event.status] += 1
            self.paths[event.path] += 1
            self.ips[event.ip] += 1
            self.methods[event.method] += 1

            self.recent.append(event)
            while len(self.recent) > self.recent_max:
                self.recent.popleft()

            elapsed = self._clock() - self.start
            self.requests_per_second = self.total_requests / max(elapsed, _MIN_ELAPSED_S)

    def snapshot(self) -> Snapshot:
        # Events are frozen, so copying the containers is enough for isolation.
        with self._lock:
            return Snapshot(
                total_requests=self.total_requests,
                requests_per_second=self.requests_per_second,
                bytes_sent=self.bytes_sent,
                status_codes=dict(self.status_codes),
                paths=dict(self.paths),
                ips=dict(self.ips),
                methods=dict(self.methods),
                recent=list(self.recent),
            )
