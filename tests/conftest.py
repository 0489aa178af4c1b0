from __future__ import annotations

from datetime import datetime, timezone

import pytest

from httop.models import Event


def make_line(
    path: str = "/index.html",
    status: int | str = 200,
    *,
    ip: str = "192.168.1.1",
    method: str = "GET",
    ts: str = "29/Nov/2021:12:34:56 +0000",
    size: int | str = 2326,
    ua: str = "Mozilla/5.0",
    response_time: str | None = None,
) -> str:
    line = f'{ip} - - [{ts}] "{method} {path} HTTP/1.1" {status} {size} "http://referrer.com" "{ua}"'
    if response_time is not None:
        line += f" {response_time}"
    return line + "\n"


def make_event(path: str = "/", status: int = 200, *, ip: str = "10.0.0.1", ua: str = "curl/8.0", size: int = 10) -> Event:
    return Event(
        timestamp=datetime(2021, 11, 29, 12, 34, 56, tzinfo=timezone.utc),
        ip=ip,
        method="GET",
        path=path,
        status=status,
        user_agent=ua,
        bytes_sent=size,
    )


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
