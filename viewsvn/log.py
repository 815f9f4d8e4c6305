"""Logging setup for the viewsvn CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str, log_file: Path | None) -> None:
    """Log to log_file and duplicate every record to stderr.

    If the log file cannot be opened, records still reach stderr.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as exc:
            file_error = exc
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    if file_error is not None:
        logging.getLogger("viewsvn").warning("Could not open log file %s: %s", log_file, file_error)
