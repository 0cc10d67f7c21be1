"""
Logging setup for Bayesian depth runs.

Library modules only ever log through ``logging.getLogger(__name__)``.
Applications either call ``setup_logging`` themselves or let
``BayesianDepthModel`` fall back on ``ensure_default_logging``.
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _console_handler(formatter, level):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def ensure_default_logging(verbose: bool = True):
    """
    Console logging at INFO for callers that never configured logging.

    With ``verbose=False`` only a NullHandler is installed. Nothing changes
    once the root logger has a handler.
    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        return
    if not verbose:
        root_logger.addHandler(logging.NullHandler())
        return

    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(_console_handler(logging.Formatter(DEFAULT_FORMAT), logging.INFO))
    logging.getLogger(__name__).debug("Console logging enabled for the Bayesian depth model")


def setup_logging(
    log_filename: Optional[str] = None,
    level: int = logging.INFO,
    file_mode: str = 'w',
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Send log records to the console and optionally to a file.

    Parameters:
    -----------
    log_filename : str, optional
        Log file, console only if None
    level : int
        Level for the root logger and both handlers
    file_mode : str
        'w' to start a new log file, 'a' to append
    log_format : str, optional
        Record format, ``DEFAULT_FORMAT`` if None

    Returns:
    --------
    logging.Logger
        The root logger, untouched if it already had handlers
    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        return root_logger

    root_logger.setLevel(level)
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT)
    root_logger.addHandler(_console_handler(formatter, level))

    if log_filename:
        try:
            file_handler = logging.FileHandler(log_filename, mode=file_mode, encoding='utf-8')
        except OSError as e:
            root_logger.error(f"Cannot open log file {log_filename}: {e}")
        else:
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            root_logger.addHandler(file_handler)

    return root_logger
