from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ----------------------------
# Event schema
# ----------------------------
class Event(BaseModel):
    """One parsed access-log record."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime           # normalized to UTC
    ip: str
    method: str
    path: str
    status: int = Field(ge=0, le=65535)
    response_time: float = 0.0    # seconds
    user_agent: str = ""
    bytes_sent: int = Field(default=0, ge=0)


# ----------------------------
# Sorting
# ----------------------------
class SortKey(str, Enum):
    COUNT = "count"
    PATH = "path"
    STATUS = "status"
    IP = "ip"
    USER_AGENT = "user_agent"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS = {
    SortKey.COUNT: "Count",
    SortKey.PATH: "Path",
    SortKey.STATUS: "Status Code",
    SortKey.IP: "IP Address",
    SortKey.USER_AGENT: "User Agent",
}


# ----------------------------
# Commands
# ----------------------------
class BaseCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

class QuitCommand(BaseCommand):
    kind: Literal["quit"] = "quit"

class SortCommand(BaseCommand):
    kind: Literal["sort"] = "sort"
    key: SortKey

class IncreaseLimitCommand(BaseCommand):
    kind: Literal["increase_limit"] = "increase_limit"

class DecreaseLimitCommand(BaseCommand):
    kind: Literal["decrease_limit"] = "decrease_limit"

class NoopCommand(BaseCommand):
    kind: Literal["noop"] = "noop"

Command = QuitCommand | SortCommand | IncreaseLimitCommand | DecreaseLimitCommand | NoopCommand
