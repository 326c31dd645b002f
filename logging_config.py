"""
Logging setup shared by the CLI and anything embedding the adapter.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_format: Optional[str] = None,
    logger_name: str = "oceanwp",
) -> logging.Logger:
    """
    Configure a stdout handler on the root logger.

    Args:
        level: Logging level (default: INFO)
        log_format: Custom format string (optional)
        logger_name: Name for the returned logger

    Returns:
        Configured logger instance
    """
    logging.basicConfig(
        level=level,
        format=log_format or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    return logger


def get_logger(name: str = "oceanwp") -> logging.Logger:
    return logging.getLogger(name)
