"""Loguru logging configuration.

Every record goes to a human-readable stderr sink. Records bound with
``json_output=True`` are also serialized as JSON lines on stderr: the
resolver binds its cache hit and miss records (with ``lat``, ``lon`` and
``cache`` fields) and the API binds provider and cache failures. An
optional rotating file sink is added when a ``log_dir`` is provided.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def _is_structured(record: dict) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Replace all Loguru sinks with the gaia configuration.

    Args:
        log_level: Minimum log level to emit, case-insensitive.
        log_dir: Optional directory for ``gaia.log``, rotated every 24 hours
            and retained 7 days.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT)
    logger.add(sys.stderr, level=level, serialize=True, filter=_is_structured)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "gaia.log",
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
