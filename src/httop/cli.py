from __future__ import annotations

import logging
import sys

from httop.app import run_dashboard
from httop.config import CONTROL_PATH, LOG_LEVEL

logger = logging.getLogger("httop")


def configure_logging(level: str = LOG_LEVEL) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("httop")
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level, logging.WARNING))
    root.propagate = False


def main() -> int:
    configure_logging()

    if sys.stdin is None or sys.stdout is None:
        logger.critical("standard input/output not available")
        return 1

    # undecodable bytes must not end ingestion
    reconfigure = getattr(sys.stdin, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="replace")

    run_dashboard(sys.stdin, control_path=CONTROL_PATH)
    return 0
