from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from httop.config import DISPLAY_LIMIT, LIMIT_FLOOR, LIMIT_STEP, TOP_STATUS_CODES
from httop.models import (
    Command,
    DecreaseLimitCommand,
    IncreaseLimitCommand,
    SortCommand,
    SortKey,
)
from httop.store import Snapshot


@dataclass
class ViewState:
    sort_key: SortKey = SortKey.COUNT
    display_limit: int = DISPLAY_LIMIT

    def apply(self, cmd: Command) -> None:
        """Apply a view command. Quit and Noop leave the view untouched."""
        if isinstance(cmd, SortCommand):
            self.sort_key = cmd.key
        elif isinstance(cmd, IncreaseLimitCommand):
            self.display_limit += LIMIT_STEP
        elif isinstance(cmd, DecreaseLimitCommand):
            if self.display_limit > LIMIT_FLOOR:
                self.display_limit = max(self.display_limit - LIMIT_STEP, LIMIT_FLOOR)


@dataclass
class Row:
    path: str
    count: int
    ip: str
    status: int
    user_agent: str


def build_rows(snap: Snapshot) -> List[Row]:
    """
    Join each counted path with the first retained event for that path.

    Paths with no event left in the recent buffer are omitted.
    """
    rows: List[Row] = []
    for path, count in snap.paths.items():
        sample = next((ev for ev in snap.recent if ev.path == path), None)
        if sample is None:
            continue
        rows.append(Row(
            path=path,
            count=count,
            ip=sample.ip,
            status=sample.status,
            user_agent=sample.user_agent,
        ))
    return rows


_SORT_KEYS: Dict[SortKey, Callable[[Row], Any]] = {
    SortKey.COUNT: lambda r: -r.count,
    SortKey.PATH: lambda r: r.path,
    SortKey.STATUS: lambda r: r.status,
    SortKey.IP: lambda r: r.ip,
    SortKey.USER_AGENT: lambda r: r.user_agent,
}


def sort_rows(rows: List[Row], key: SortKey) -> List[Row]:
    # sorted() is stable: ties keep discovery order
    return sorted(rows, key=_SORT_KEYS[key])


def visible_rows(snap: Snapshot, view: ViewState) -> List[Row]:
    return sort_rows(build_rows(snap), view.sort_key)[:view.display_limit]


def top_status_codes(snap: Snapshot, limit: int = TOP_STATUS_CODES) -> List[Tuple[int, int]]:
    return sorted(snap.status_codes.items(), key=lambda kv: kv[1], reverse=True)[:limit]
