"""Logging configuration for curlftp.

Provides logging setup with credential redaction so passwords and
credentials embedded in URLs are never written to log output.
"""

import logging
import re
from pathlib import Path
from typing import Optional, TextIO


# Credential patterns to redact from logs
CREDENTIAL_PATTERNS = [
    (re.compile(r'(password["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    (re.compile(r'(passwd["\s:=]+)[^\s,}\]]+', re.IGNORECASE), r'\1[REDACTED]'),
    # URLs with embedded user:password
    (re.compile(r'(ftps?)://[^:/@\s]+:[^@/\s]+@'), r'\1://[REDACTED]@'),
]


class CredentialRedactingFormatter(logging.Formatter):
    """Formatter that redacts credentials from log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, redacting any credentials."""
        message = super().format(record)
        for pattern, replacement in CREDENTIAL_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def _is_own_handler(handler: logging.Handler) -> bool:
    return isinstance(handler.formatter, CredentialRedactingFormatter)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Attach redacting handlers to the curlftp logger.

    The library itself only installs a NullHandler; applications call this
    to opt in to curlftp output. Handlers added by an earlier call are
    replaced, handlers installed by the application are left alone.

    Args:
        level: Logging level (default INFO)
        log_file: Optional file path for log output
        console: Whether to log to a stream (default True)
        stream: Stream for console output (default sys.stderr)

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("curlftp")
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if _is_own_handler(h)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = CredentialRedactingFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if console:
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
