# listing_editor/config/logging_config.py

"""Logging for one editing session: a DEBUG log file plus stderr."""

import logging
import sys
from datetime import datetime
from pathlib import Path

from listing_editor.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | "
    "%(message)s"
)
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _existing_log_file(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(
    logs_dir: Path | None = None,
    console_level: str | None = None,
) -> Path:
    """Attach handlers to the ``listing_editor`` logger.

    The file ``run_<YYYYmmdd_HHMMSS>.log`` under *logs_dir* receives
    every record.  stderr gets *console_level* and above
    (``Settings.CONSOLE_LOG_LEVEL`` by default).  A second call leaves
    the handlers alone and returns the file already in use.
    """
    root = logging.getLogger("listing_editor")
    root.setLevel(logging.DEBUG)

    current = _existing_log_file(root)
    if current is not None:
        return current

    logs_dir = logs_dir or Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(
        (console_level or Settings.CONSOLE_LOG_LEVEL).upper()
    )
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root.addHandler(file_handler)
    root.addHandler(console_handler)
    root.debug("Session log: %s", log_file)
    return log_file
