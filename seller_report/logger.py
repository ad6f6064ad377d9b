import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from . import settings

LOG_FILENAME = "seller_report.log"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUPS = 3

# Third-party loggers that drown out report progress at INFO.
NOISY_LOGGERS = ("urllib3", "requests")


def _resolve_level(log_level: int | str | None) -> int:
    """Accepts a logging constant or a name like 'debug'; defaults to settings.LOG_LEVEL."""
    if log_level is None:
        log_level = settings.LOG_LEVEL
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def setup_logger(
    name: str = None, log_level: int | str | None = None, log_file: Path | None = None
) -> logging.Logger:
    """
    Attaches a console handler (bare messages, for the run log) and a rotating
    file handler (timestamped, for later digging) to the named logger.

    Only the logger's own handlers are checked, so repeated calls are no-ops
    and report modules keep using plain logging.getLogger(__name__).
    """
    logger = logging.getLogger(name)
    level = _resolve_level(log_level)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file is None:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = settings.LOG_DIR / LOG_FILENAME

    file_handler = RotatingFileHandler(
        log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

    return logger
