"""
Logging Setup
Loguru sinks for the command-line entry points
"""

import os
import sys
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(level: str = None, log_file: str = None):
    """
    Replace loguru's default sink

    Args:
        level: Console level (default $LOG_LEVEL or INFO)
        log_file: Optional log file, rotated at 10 MB (default $LOG_FILE)
    """
    level = level or os.getenv('LOG_LEVEL', 'INFO')
    log_file = log_file or os.getenv('LOG_FILE')

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention=5,
            format=FILE_FORMAT,
            level="DEBUG"
        )
