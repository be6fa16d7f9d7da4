"""
Logging configuration for the X1 dashboard
"""
import logging
import logging.handlers
import sys
from pathlib import Path

from ..config import LOG_DIR, LOG_LEVEL

def setup_logging(logger_name: str, log_level: int = None, log_dir: str = LOG_DIR) -> logging.Logger:
    """
    Set up logging configuration for a specific logger

    Args:
        logger_name: Name of the logger to configure
        log_level: Logging level to use, defaults to LOG_LEVEL from the environment
        log_dir: Directory for the rotating log file

    Returns:
        logging.Logger: Configured logger instance
    """
    if log_level is None:
        log_level = logging.getLevelName(LOG_LEVEL)
        if not isinstance(log_level, int):
            log_level = logging.INFO

    # Create logger
    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    # Create logs directory if it doesn't exist
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # Create file handler
    log_file = log_path / f"{logger_name.replace('.', '_')}.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=50*1024*1024,  # 50MB
        backupCount=10
    )
    file_handler.setLevel(log_level)

    # Create console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    # Create formatters
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # Add formatters to handlers
    file_handler.setFormatter(file_formatter)
    console_handler.setFormatter(console_formatter)

    # Add handlers to logger
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logging.getLogger('aiohttp').setLevel(logging.WARNING)

    return logger
