"""Process-wide logging setup."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Re-running (tests, reload) must not stack handlers
    for handler in list(root.handlers):
        if getattr(handler, "_feedback_radar", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._feedback_radar = True  # type: ignore[attr-defined]
    root.addHandler(handler)