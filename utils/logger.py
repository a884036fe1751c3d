"""Logging setup for the application."""

import logging
import sys

# Chatty third-party loggers that only matter when debugging HTTP itself
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logger(log_level: str = "INFO", name: str = "pr_viewer") -> logging.Logger:
    """
    Set up and configure application logger.

    Creates a logger with a readable format suitable for CLI output. The
    thread name is included because repositories and comment/review requests
    are fetched from worker pools.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        name: Logger name (default: pr_viewer)

    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Keep HTTP connection logs out of DEBUG output of our own modules
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(numeric_level, logging.WARNING))

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    return logger
