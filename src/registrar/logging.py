"""Logging setup for Registrar.

All components log under the ``registrar`` namespace. ``setup_logging``
attaches a size-rotated file handler (and optionally a console handler) to
that namespace; every handler passes records through ``RedactingFilter`` so
password hashes and session tokens never reach disk.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "registrar"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "registrar.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_REDACTIONS = (
    (re.compile(r"\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}"), "[PASSWORD_HASH]"),
    (re.compile(r"eyJ[\w-]+\.[\w-]+\.[\w-]*"), "[SESSION_TOKEN]"),
    (re.compile(r"Bearer [\w.-]+"), "Bearer [REDACTED]"),
    (re.compile(r"(?i)\b(password|password_hash|token|secret)=\S+"), r"\1=[REDACTED]"),
)


def sanitize_for_log(text: str) -> str:
    """Redact credential material from text bound for a log line.

    Covers bcrypt hashes, JWT session tokens, bearer credentials and
    ``password=`` / ``token=`` / ``secret=`` pairs.
    """
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFilter(logging.Filter):
    """Rewrites each record's message with sanitize_for_log."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        clean = sanitize_for_log(message)
        if clean != message:
            record.msg = clean
            record.args = None
        return True


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RedactingFilter())
    return handler


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``registrar`` logger.

    Calling this again replaces the previous handlers.

    Args:
        log_dir: Directory for the log file, created if missing. Falls back
            to REGISTRAR_LOG_DIR, then ``logs``.
        log_file: File name inside log_dir.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.
        level: Level name. Falls back to REGISTRAR_LOG_LEVEL, then INFO.
        console: Also write to stderr.

    Returns:
        The ``registrar`` logger.
    """
    directory = Path(log_dir or os.environ.get("REGISTRAR_LOG_DIR", DEFAULT_LOG_DIR))
    directory.mkdir(parents=True, exist_ok=True)

    level_name = (level or os.environ.get("REGISTRAR_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    log_path = directory / log_file
    rotating = RotatingFileHandler(
        log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    logger.addHandler(_make_handler(rotating, log_level))
    if console:
        logger.addHandler(_make_handler(logging.StreamHandler(), log_level))

    logger.info("Registrar logging initialized (level=%s, file=%s)", level_name, log_path)
    return logger
