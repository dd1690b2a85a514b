"""
Logging Setup
Console and file sinks for script entry points
"""

import os
import sys
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(log_name: str, log_dir: str = "data/logs"):
    """
    Replace loguru's default sink with console + rotating file sinks

    Args:
        log_name: Log file name (without extension)
        log_dir: Directory for log files
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=os.getenv('LOG_LEVEL', 'INFO')
    )
    logger.add(
        os.path.join(log_dir, f"{log_name}.log"),
        rotation="1 day",
        retention="7 days",
        format=FILE_FORMAT,
        level="DEBUG"
    )
