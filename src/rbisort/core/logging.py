"""Logging configuration for rbisort."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

AUDIT_LOGGER = "rbisort.audit"
DEBUG_LOGGER = "rbisort.debug"

AUDIT_FORMAT = "%(asctime)s - %(levelname)s - [AUDIT] %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _dated_log_file(log_dir: Path, kind: str) -> Path:
    return log_dir / f"rbisort_{kind}_{datetime.now():%Y%m%d}.log"


def _attach_file_handler(logger: logging.Logger, path: Path, fmt: str) -> None:
    """Log to ``path`` unless the logger already writes there."""
    target = os.path.abspath(path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def setup_logging(log_dir: Optional[Path] = None, debug: bool = False) -> None:
    """Configure the audit and debug loggers.

    The audit logger records every file that was rewritten, skipped or
    rejected. The debug logger records scanner and sorting decisions and
    always echoes to stderr. Calling this again reuses existing handlers.

    Args:
        log_dir: Directory for dated log files. If None, nothing is written to disk.
        debug: Whether to enable debug logging (and the debug log file).
    """
    audit_logger = logging.getLogger(AUDIT_LOGGER)
    audit_logger.setLevel(logging.INFO)

    debug_logger = logging.getLogger(DEBUG_LOGGER)
    debug_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not any(type(h) is logging.StreamHandler for h in debug_logger.handlers):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
        debug_logger.addHandler(console_handler)

    if not log_dir:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    _attach_file_handler(audit_logger, _dated_log_file(log_dir, "audit"), AUDIT_FORMAT)
    if debug:
        _attach_file_handler(debug_logger, _dated_log_file(log_dir, "debug"), DEBUG_FORMAT)


def get_audit_logger() -> logging.Logger:
    """Get the audit logger."""
    return logging.getLogger(AUDIT_LOGGER)


def get_debug_logger() -> logging.Logger:
    """Get the debug logger."""
    return logging.getLogger(DEBUG_LOGGER)
