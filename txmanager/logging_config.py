"""
Logging setup for the CLI and embedding applications.

Library modules log through ``logging.getLogger(__name__)``. setup_logging
routes those records through structlog and renders them as JSON lines or
as console output. Hex payloads longer than a transaction hash (init code,
calldata, revert data) are shortened before rendering.
"""

import logging
import re
import sys
from typing import IO, Optional

import structlog

from .config import settings


LOG_FORMATS = ("json", "console")

# Long enough to keep 32-byte hashes intact
MAX_HEX_CHARS = 74

_LONG_HEX = re.compile(r"0x[0-9a-fA-F]{%d,}" % (MAX_HEX_CHARS - 1))


def _shorten(match: re.Match) -> str:
    text = match.group(0)
    return f"{text[:18]}...{text[-8:]} ({(len(text) - 2) // 2} bytes)"


def shorten_hex_payloads(logger, method_name: str, event_dict: dict) -> dict:
    """structlog processor: abbreviate long hex strings in every string field."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _LONG_HEX.sub(_shorten, value)
    return event_dict


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        shorten_hex_payloads,
    ]


def _renderer_processors(log_format: str) -> list:
    if log_format == "console":
        return [structlog.dev.ConsoleRenderer()]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure structlog and the root logger.

    Args:
        log_level: Override log level (default: settings.log_level)
        log_format: "json" or "console" (default: settings.log_format)
        stream: Output stream (default: stderr, leaving stdout to command output)
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    log_format = log_format or settings.log_format
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {log_format!r}, expected one of {LOG_FORMATS}")

    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer_processors(log_format),
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
