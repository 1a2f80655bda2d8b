"""
Logging for the sentinel package.

Library modules log through ``logging.getLogger(__name__)`` and never attach
handlers themselves. A host process calls ``setup_logging`` once to route the
whole ``sentinel`` hierarchy to the console and, optionally, a rotating file
under ``config.logs_dir``.
"""

import logging
import logging.handlers
from typing import Optional

from .config import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(logger_name: str = "sentinel", level: Optional[str] = None) -> logging.Logger:
    """
    Attach console and rotating-file handlers to a sentinel logger.

    Args:
        logger_name: Logger to configure; the default covers every module
        level: Overrides ``config.log_level`` when given

    Returns:
        The configured logger; an already configured logger is returned as is
    """
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        return logger

    level = (level or config.log_level).upper()
    logger.setLevel(level)
    # Host applications configure the root logger separately
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_to_file:
        file_handler = logging.handlers.RotatingFileHandler(
            config.logs_dir / f"{logger_name}.log",
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(
        "Logging configured at %s; detectors enabled: %s",
        level,
        ", ".join(config.detection.enabled_detectors),
    )
    return logger
