"""Root logger configuration shared by both server processes."""

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def runtime_configure_logging(level: str = "INFO") -> None:
    """Configure root logging once per process.

    Args:
        level: Logging level name such as `INFO` or `DEBUG`.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    resolved_level = logging.getLevelName(level.upper())
    if not isinstance(resolved_level, int):
        raise ValueError(f"unknown log level: {level}")
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)
