import logging
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from loguru import logger


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def http_filter(record):
    """Filter out verbose HTTP logs from third-party libraries."""
    if record["name"].startswith(("httpx", "httpcore", "hpack")):
        return record["level"].no >= 30  # Only WARNING and above
    return True


# ---------------------------------------------------------------------------
# Format helpers (two-level separators: | for zones, • for related items)
# ---------------------------------------------------------------------------


def _build_context(record) -> str:
    """Build context zone from extra fields set via logger.contextualize().

    Returns string like: ``OpenID=_000a1b2c • Op=part_upload • Upload=@8hx3``
    or empty string when no context is set.
    """
    extra = record["extra"]
    parts: list[str] = []
    for key, label in [
        ("open_id", "OpenID"),
        ("operation", "Op"),
        ("upload_id", "Upload"),
    ]:
        val = extra.get(key)
        if val is not None:
            parts.append(f"{label}={val}")
    return " • ".join(parts)


def _console_format(record) -> str:
    """Dynamic format for console (colored) with optional context zone."""
    ctx = _build_context(record)
    ctx_zone = f" | {ctx}" if ctx else ""
    return (
        "<green>{time:YY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[module]: <16}</cyan> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{ctx_zone}"
        " | <level>{message}</level>\n{exception}"
    )


def _file_format(record) -> str:
    """Dynamic format for file (plain text) with optional context zone."""
    ctx = _build_context(record)
    ctx_zone = f" | {ctx}" if ctx else ""
    return (
        "{time:YY-MM-DD HH:mm:ss} | {level: <8} | "
        "{extra[module]: <16} | "
        "{name}:{function}:{line}"
        f"{ctx_zone}"
        " | {message}\n{exception}"
    )


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def setup_logger(log_level: str | None = None, log_file: str | None = None) -> None:
    """Replace loguru sinks with the console / optional file format of this client.

    Meant for scripts and applications that own logging; importing the package never
    calls it. Reads ``.env`` and falls back to ``LOG_LEVEL`` / ``LOG_FILE``.
    """
    load_dotenv()
    console_level = log_level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("LOG_FILE")

    logger.remove()
    logger.configure(extra={"module": "douyin"})

    logger.add(
        sys.stderr,
        format=_console_format,
        level=console_level,
        colorize=True,
        filter=http_filter,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=_file_format,
            level=console_level,
            rotation="10 MB",
            filter=http_filter,
        )

    # Suppress noisy third-party loggers at stdlib level
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_logger(module_name: str | None = None):
    """Get configured logger, optionally bound to a module name."""
    if module_name:
        return logger.bind(module=module_name)
    return logger


def short_id(value: Any) -> str:
    """First 8 chars of an opaque identifier for compact logging."""
    return str(value)[:8] if value else "unknown"


def format_details(**kwargs: Any) -> str:
    """Format key=value pairs joined with • for the details zone.

    Example: "Part uploaded | part=3 • size=5242880"
    """
    if not kwargs:
        return ""
    return " • ".join(f"{k}={v}" for k, v in kwargs.items())

