from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from rich.console import Console

from httop.config import VERSION
from httop.controls import HELP
from httop.store import Snapshot
from httop.view import Row, ViewState, top_status_codes, visible_rows

PATH_WIDTH = 36
UA_WIDTH = 64
UA_CUTOFF = 65
IP_WIDTH = 16
STATUS_WIDTH = 9

_RULE = (
    "+-------+-----------------+----------+"
    "---------------------------------------+------------------------------------"
)
_HEADER = (
    "| COUNT | IP              | STATUS   |"
    "  PATH                                 |  USER AGENT"
)


def _truncate(text: str, limit: int, keep: int) -> str:
    if len(text) > limit:
        return text[:keep] + "..."
    return text


def format_row(row: Row) -> str:
    count = f" {row.count:<7}"
    ip = f"{row.ip:<{IP_WIDTH}}"
    status = f"{row.status:<{STATUS_WIDTH}}"
    path = f"{_truncate(row.path, PATH_WIDTH, PATH_WIDTH - 3):<{PATH_WIDTH}}"
    ua = f"{_truncate(row.user_agent, UA_CUTOFF, UA_WIDTH):<{UA_WIDTH}}"
    return f"{count}  {ip}  {status}  {path}  {ua}"


def format_screen(snap: Snapshot, view: ViewState, now: Optional[datetime] = None) -> str:
    """Render one full dashboard frame as plain text."""
    now = now or datetime.now()
    lines: List[str] = [
        f"HTTOP (v{VERSION}) - {now:%Y-%m-%d %H:%M:%S}",
        f"Total Requests: {snap.total_requests} | RPS: {snap.requests_per_second:.2f} | Total Bytes: {snap.bytes_sent}",
        "",
        "Status Codes:",
    ]
    for code, count in top_status_codes(snap):
        lines.append(f"  {code}: {count}")
    lines.append("")

    lines.append(f"Top Requests (Sort: {view.sort_key.label}, {HELP}):")
    lines += ["", _RULE, _HEADER, _RULE]
    lines += [format_row(row) for row in visible_rows(snap, view)]
    return "\n".join(lines)


class Screen:
    """Full-screen redraw on a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def draw(self, frame: str) -> None:
        self.console.clear()
        self.console.print(frame, markup=False, highlight=False, emoji=False, soft_wrap=True)
