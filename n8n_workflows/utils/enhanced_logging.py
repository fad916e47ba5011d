# n8n_workflows/utils/enhanced_logging.py
from typing import Dict, Any

from loguru import logger as _loguru_logger


class EnhancedLogger:
    """Logger with context tracking, backed by loguru."""

    def __init__(self, name: str):
        self._name = name
        self._context: Dict[str, Any] = {}

    def with_context(self, **context) -> 'EnhancedLogger':
        """Create a new logger with added context."""
        new_logger = EnhancedLogger(self._name)
        new_logger._context = {**self._context, **context}
        return new_logger

    def _bound(self):
        # depth=1 attributes the record to the caller of debug()/info()/...
        return _loguru_logger.bind(logger_name=self._name, context=dict(self._context)).opt(depth=1)

    def debug(self, msg: str, *args, **kwargs) -> None:
        """Log a debug message with context."""
        self._bound().debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        """Log an info message with context."""
        self._bound().info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        """Log a warning message with context."""
        self._bound().warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        """Log an error message with context."""
        self._bound().error(msg, *args, **kwargs)

    @property
    def name(self) -> str:
        """Get the logger name."""
        return self._name
