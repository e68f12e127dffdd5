"""Structured logging setup for applications using the client."""

import logging
import sys

import structlog


def get_logger(name: str):
    """Return a structlog logger that emits through the stdlib logger ``name``.

    Events pass stdlib level filtering, so with no logging configured debug
    and info events are dropped and nothing is written to stdout.
    """
    return structlog.wrap_logger(logging.getLogger(name))


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog with console rendering on stderr.

    The library itself never calls this on import; applications (and the
    ``fivestar`` command) opt in.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )
    logging.basicConfig(level=numeric_level, stream=sys.stderr, format="%(message)s")
    logging.getLogger("fivestar_support").setLevel(numeric_level)
