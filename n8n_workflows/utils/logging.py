# n8n_workflows/utils/logging.py
"""
Logging configuration for the n8n workflow tools.
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from n8n_workflows.constants import LOG_FORMAT, LOG_ROTATION, LOG_RETENTION
from n8n_workflows.utils.enhanced_logging import EnhancedLogger

# Dictionary to store enhanced logger instances
_enhanced_loggers = {}

def _stderr_sink(message) -> None:
    # Resolve sys.stderr per message so redirected streams are honoured
    sys.stderr.write(message)


# Quiet defaults until setup_logging() runs; records need a logger_name for LOG_FORMAT
logger.configure(
    handlers=[{"sink": _stderr_sink, "format": LOG_FORMAT, "level": "WARNING"}],
    extra={"logger_name": "n8n_workflows", "context": {}},
)


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None) -> None:
    """
    Configure the application logging.

    Args:
        debug: Whether to enable debug logging.
        log_dir: Directory for the rotating log file. No file sink when None.
    """
    # Remove default handlers
    logger.remove()

    # Console log records only in debug mode; user-facing output goes through rich
    logger.add(
        _stderr_sink,
        format=LOG_FORMAT,
        level="DEBUG" if debug else "CRITICAL",
        diagnose=debug,
    )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "n8n-workflows.log"
        logger.add(
            log_file,
            format=LOG_FORMAT,
            level="DEBUG" if debug else "INFO",
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            compression="zip",
            encoding="utf-8",
        )
        logger.debug(f"Logging initialized. Log file: {log_file}")


def get_logger(name: str = "n8n_workflows") -> EnhancedLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: The name for the logger.

    Returns:
        An enhanced logger instance.
    """
    if name in _enhanced_loggers:
        return _enhanced_loggers[name]

    enhanced_logger = EnhancedLogger(name)
    _enhanced_loggers[name] = enhanced_logger

    return enhanced_logger
