"""Logging configuration."""

import logging
import sys
from pathlib import Path

from prepcoach.core.config import settings

APP_LOGGER = "prepcoach"
LOG_FILE = "prepcoach.log"
HANDLER_NAMES = ("prepcoach.console", "prepcoach.file")


def setup_logging(log_dir: Path = Path("logs")) -> None:
    """
    Configure application logging.

    Safe to call more than once (app startup plus the seed script):
    handlers installed by an earlier call are replaced, not duplicated.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", "%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    file_handler = logging.FileHandler(log_dir / LOG_FILE)
    for name, handler in zip(HANDLER_NAMES, (console_handler, file_handler)):
        handler.set_name(name)
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() in HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # prepcoach.interviews, prepcoach.services.* and friends
    logging.getLogger(APP_LOGGER).setLevel(log_level)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.ENVIRONMENT == "development" else logging.WARNING
    )
