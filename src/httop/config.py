from __future__ import annotations

import os
from typing import Optional


def _env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    """Read an integer setting; missing, malformed or below-minimum values give ``default``."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


# ----------------------------
# Config
# ----------------------------
LIMIT_STEP = 5
LIMIT_FLOOR = 5
TOP_STATUS_CODES = 5

TICK_MS = _env_int("HTTOP_TICK_MS", 500, minimum=1)
RECENT_MAX = _env_int("HTTOP_RECENT_MAX", 100, minimum=1)
DISPLAY_LIMIT = _env_int("HTTOP_DISPLAY_LIMIT", 20, minimum=LIMIT_FLOOR)

# Interactive controls are read from the terminal, never from the log stream.
CONTROL_PATH = os.getenv("HTTOP_CONTROL_PATH", "/dev/tty")
LOG_LEVEL = os.getenv("HTTOP_LOG_LEVEL", "WARNING").upper()

VERSION = "0.1.0"
