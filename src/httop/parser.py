from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from typing import Optional

from httop.models import Event

logger = logging.getLogger(__name__)

# Combined log format with an optional trailing response time, e.g.
#   192.168.1.1 - - [29/Nov/2021:12:34:56 +0000] "GET /page.html HTTP/1.1" 200 2326 "http://ref/" "Mozilla/5.0" 0.002
# Fields are separated by single spaces, as in the combined log format.
_ACCESS_RE = re.compile(
    r"""
    (?P<ip>\S+)[ ]
    (?:\S+)[ ]
    (?:\S+)[ ]
    \[(?P<timestamp>[^\]]+)\][ ]
    "(?P<method>\S+)[ ]
    (?P<path>\S+)[^"]+"[ ]
    (?P<status>\d+)[ ]
    (?P<bytes>\d+)[ ]
    "(?P<referrer>[^"]*)"[ ]
    "(?P<user_agent>[^"]*)"
    (?:[ ](?P<response_time>\S+))?
    """,
    re.VERBOSE,
)

TIMESTAMP_FORMAT = "%d/%b/%Y:%H:%M:%S %z"
MAX_STATUS = 65535
MAX_BYTES = 2**63 - 1


def parse_timestamp(raw: str) -> Optional[datetime]:
    try:
        return datetime.strptime(raw, TIMESTAMP_FORMAT).astimezone(timezone.utc)
    except ValueError:
        return None


def _parse_response_time(raw: Optional[str]) -> float:
    if not raw:
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _parse_uint(raw: str, maximum: int) -> Optional[int]:
    try:
        value = int(raw)
    except ValueError:
        # digit strings past the interpreter's int conversion limit
        return None
    if value > maximum:
        return None
    return value


def parse_line(line: str) -> Optional[Event]:
    """
    Parse one access-log line into an Event.

    Returns None when the line does not match the grammar, the timestamp
    cannot be parsed, or status/bytes are out of range. Never raises.
    """
    m = _ACCESS_RE.search(line.rstrip("\r\n"))
    if not m:
        logger.debug("rejected line (no match): %.200r", line)
        return None

    timestamp = parse_timestamp(m.group("timestamp"))
    if timestamp is None:
        logger.debug("rejected line (bad timestamp): %.200r", line)
        return None

    status = _parse_uint(m.group("status"), MAX_STATUS)
    bytes_sent = _parse_uint(m.group("bytes"), MAX_BYTES)
    if status is None or bytes_sent is None:
        logger.debug("rejected line (status/bytes out of range): %.200r", line)
        return None

    return Event(
        timestamp=timestamp,
        ip=m.group("ip"),
        method=m.group("method"),
        path=m.group("path"),
        status=status,
        response_time=_parse_response_time(m.group("response_time")),
        user_agent=m.group("user_agent"),
        bytes_sent=bytes_sent,
    )
