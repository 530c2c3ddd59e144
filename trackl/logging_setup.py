"""Logging configuration for trackl."""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging with a single stderr handler.

    Call this once, before the server starts. Uvicorn's own access log is left
    to the request-logging middleware, which logs the matched route pattern.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.captureWarnings(True)
