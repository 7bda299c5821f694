"""
Logging configuration module.

This module provides centralized logging setup for applications using
the helpers, configuring console and optional file output with
consistent formatting.
"""

import logging
from config.settings import Settings


def setup_logger() -> None:
    """
    Configure and initialize the root logger.

    Sets up console logging and, when Settings.LOG_TO_FILE is enabled,
    file logging at Settings.LOG_LEVEL. The helpers never call this
    themselves; it is meant for the application embedding them.

    The function configures:
        - Console logging to stderr
        - File logging to Settings.LOG_FILE with UTF-8 encoding (optional,
          its directory is created here)
        - Custom formatters with timestamp, logger name, level, and message
        - Reduced verbosity for aiohttp and asyncio libraries

    Args:
        None

    Returns:
        None

    Example:
        >>> setup_logger()
        >>> logging.info("Application started")
        2026-10-18 14:30:00 - root - INFO - Application started

    Note:
        - Existing handlers are cleared before setup to avoid duplicates
        - An unknown LOG_LEVEL name falls back to INFO
    """
    level = logging.getLevelName(Settings.LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO

    # Clear any existing handlers to prevent duplicates on re-initialization
    logging.root.handlers.clear()

    # Create formatter with timestamp, logger name, level, and message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Handler for console output
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    # Handler for file output (UTF-8 encoding for international characters)
    if Settings.LOG_TO_FILE:
        Settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Settings.LOG_FILE, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    # Reduce verbosity of third-party libraries to avoid log spam
    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.INFO)
