# logging_config.py
"""
Logging Configuration
Sets up the logger shared by all LiveCalc modules.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'LiveCalc' logger namespace.

    Args:
        level: Logging level (logging.DEBUG when the "debug" setting is on)
        log_file: Optional path to also write the log to.
    """
    logger = logging.getLogger("LiveCalc")
    logger.setLevel(level)

    # Re-running setup (e.g. after a settings change) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at level %s.", logging.getLevelName(level))
    return logger
