import logging
import os
import sys
from typing import Optional


MAX_LOGGED_VALUE_LENGTH = 200


class LongValueFilter(logging.Filter):
    """Filter that shortens over-long string arguments (chat text, raw frames)."""

    def __init__(self, max_length: int = MAX_LOGGED_VALUE_LENGTH):
        super().__init__()
        self.max_length = max_length

    def filter(self, record: logging.LogRecord) -> bool:
        """Truncate long message text and arguments in the log record."""
        if isinstance(record.msg, str):
            record.msg = self._shorten(record.msg, self.max_length * 4)

        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._shorten(v, self.max_length) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._shorten(arg, self.max_length) for arg in record.args)

        return True

    @staticmethod
    def _shorten(value, limit: int):
        """Cut string values longer than limit, leaving a marker with the dropped length."""
        if isinstance(value, str) and len(value) > limit:
            return f"{value[:limit]}...[{len(value) - limit} more chars]"
        return value


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Args:
        component_name: Name of the component (e.g., 'hub', 'cli')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handler.setFormatter(formatter)
    handler.addFilter(LongValueFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
