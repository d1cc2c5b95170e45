"""Package logger setup."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from rate_bucket.core.constants import APP_NAME, LOG_DIR, LOG_LEVEL

_DETAILED = logging.Formatter(
    "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _file_handlers(log_path: Path, app_name: str) -> list[logging.Handler]:
    """Daily rotated full log plus a size-capped error log."""
    log_path.mkdir(parents=True, exist_ok=True)

    daily = logging.handlers.TimedRotatingFileHandler(
        log_path / f"{app_name}.log", when="midnight", backupCount=30, encoding="utf-8"
    )
    daily.setLevel(logging.DEBUG)

    errors = logging.handlers.RotatingFileHandler(
        log_path / f"{app_name}_errors.log", maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    errors.setLevel(logging.ERROR)
    return [daily, errors]


def setup_logging(
    level: str = LOG_LEVEL,
    log_dir: str | None = LOG_DIR,
    app_name: str = APP_NAME,
) -> logging.Logger:
    """Attach handlers to the ``app_name`` logger once.

    Records always go to stdout; files are written only when ``log_dir``
    is set.
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(console)

    if log_dir:
        for handler in _file_handlers(Path(log_dir), app_name):
            handler.setFormatter(_DETAILED)
            logger.addHandler(handler)

    return logger


logger = setup_logging()
