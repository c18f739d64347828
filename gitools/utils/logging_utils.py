"""Logging setup for gitools.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

The TUI owns the terminal, so ``setup_logging`` writes to a rotating file
under the config directory instead of stderr.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from gitools.config.constants import GITOOLS_CONFIG_DIR, LOG_FILE_NAME

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> Path:
    """
    Route gitools logging to a rotating file.

    The root logger stays at WARNING to keep third-party noise (GitPython,
    Textual) out; gitools loggers log at INFO, or DEBUG when verbose.

    Returns:
        Path of the log file
    """
    log_dir = log_dir or GITOOLS_CONFIG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    if not any(
        isinstance(h, RotatingFileHandler) and Path(h.baseFilename) == log_file
        for h in root.handlers
    ):
        handler = RotatingFileHandler(
            log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("gitools").setLevel(logging.DEBUG if verbose else logging.INFO)

    return log_file
