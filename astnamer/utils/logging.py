"""Centralized logging configuration using Loguru with Pino-compatible output.

The JSON mode emits NDJSON compatible with Pino, so logs from astnamer can
be viewed alongside the Node.js tooling that produces the ESTree input.

Usage:
    from astnamer.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if ASTNAMER_LOG_LEVEL=DEBUG

Environment Variables:
    ASTNAMER_LOG_LEVEL: TRACE|DEBUG|INFO|WARNING|ERROR (default: INFO)
    ASTNAMER_LOG_JSON: 0|1 (default: 0, human-readable; both go to stderr)
    ASTNAMER_LOG_FILE: path to log file (optional)
    ASTNAMER_REQUEST_ID: correlation ID for cross-language tracing
"""

import json
import os
import sys
import uuid
from pathlib import Path

from loguru import logger

# Remove default handler
logger.remove()

# Pino-compatible numeric levels
PINO_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get("ASTNAMER_LOG_LEVEL", "INFO").upper()
_json_mode = os.environ.get("ASTNAMER_LOG_JSON", "0") == "1"
_log_file = os.environ.get("ASTNAMER_LOG_FILE")
_request_id = os.environ.get("ASTNAMER_REQUEST_ID") or str(uuid.uuid4())


def _to_pino(record) -> str:
    """Render a loguru record as one Pino NDJSON line."""
    pino_log = {
        "level": PINO_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
        "request_id": record["extra"].get("request_id", _request_id),
    }

    for key, value in record["extra"].items():
        if key != "request_id":
            pino_log[key] = value

    if record["exception"]:
        pino_log["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return json.dumps(pino_log, default=str)


def pino_compatible_sink(message):
    """Write Pino NDJSON to stderr.

    stdout carries command output (``--format json``), so log lines stay off it.
    Never call logger.* inside a sink - causes infinite recursion.
    """
    sys.stderr.write(_to_pino(message.record) + "\n")
    sys.stderr.flush()


# No emojis - Windows CP1252 compatibility
_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

if _json_mode:
    logger.add(
        pino_compatible_sink,
        level=_log_level,
        colorize=False,
    )
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )

if _log_file:

    def _file_pino_sink(message):
        """Append Pino-format JSON to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_to_pino(message.record) + "\n")

    logger.add(_file_pino_sink, level="DEBUG")


def configure_file_logging(log_dir: Path, level: str = "DEBUG") -> int:
    """Add rotating file handler for persistent logs.

    Args:
        log_dir: Directory for log files (e.g., Path(".astnamer"))
        level: Minimum log level for file output

    Returns:
        The loguru handler id, for logger.remove()
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "astnamer.log"

    return logger.add(
        log_file,
        rotation="10 MB",
        retention="7 days",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )


def get_request_id() -> str:
    """Get the current request ID for correlation."""
    return _request_id


__all__ = [
    "logger",
    "configure_file_logging",
    "get_request_id",
]
