"""
Centralized logging configuration for github-issues-export.

This module provides a configured logger that writes to the console (stderr)
and, optionally, to rotating log files. Tokens are only ever logged masked.
"""

import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'github_issues_export'


def setup_logger(
        name: str = LOGGER_NAME,
        level: int = logging.INFO,
        log_dir: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Set up and configure the application logger.

    Creates a logger that writes to the console and, when a log directory is
    given, to a timestamped file with rotation to prevent it from growing
    too large. Calling it again only updates the console level.

    Args:
        name (str): Name of the logger.
        level (int): Console log level.
        log_dir (Optional[Union[str, Path]]): Directory for DEBUG-level log
            files. No file is written when None.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Only configure handlers once
    if logger.handlers:
        for handler in logger.handlers:
            if not isinstance(handler, RotatingFileHandler):
                handler.setLevel(level)
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler - stderr
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = os.path.join(log_dir, f'{timestamp}.log')

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.debug(f'Log file: {log_file}')

    return logger


def mask_sensitive_data(data: Optional[str], show_chars: int = 4) -> str:
    """
    Mask sensitive data for safe logging.

    Args:
        data (Optional[str]): Sensitive data to mask.
        show_chars (int): Number of characters to show at the end.

    Returns:
        str: Masked string (e.g., "***AB8")
    """
    if not data:
        return '<empty>'

    if len(data) <= show_chars:
        return '*' * len(data)

    return '*' * (len(data) - show_chars) + data[-show_chars:]


def log_config_status(logger: logging.Logger, token: Optional[str], api_url: str, output_dir: Union[str, Path]):
    """
    Log configuration status without exposing the token.

    Args:
        logger (logging.Logger): Logger instance.
        token (Optional[str]): GitHub token.
        api_url (str): GitHub API base URL.
        output_dir (Union[str, Path]): Export directory.
    """
    logger.debug('Configuration Status:')
    logger.debug(f'  GITHUB_TOKEN: {"✓ Set" if token else "✗ Missing"}')
    if token:
        logger.debug(f'    Length: {len(token)} characters')
        logger.debug(f'    Preview: {mask_sensitive_data(token, 4)}')
    logger.debug(f'  API URL: {api_url}')
    logger.debug(f'  Output directory: {output_dir}')
