# habit_matrix/logger.py
import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} [{level}] {name}: {message}"


def setup_logger(log_file=None, level: str = "INFO", max_size: str = "10 MB", backup_count: int = 5):
    """Send logs to stderr, and to a rotating file when ``log_file`` is set."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if log_file:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        logger.add(
            str(log_file),
            level=level,
            format=LOG_FORMAT,
            rotation=max_size,
            retention=backup_count,
            encoding="utf-8",
        )
    return logger
