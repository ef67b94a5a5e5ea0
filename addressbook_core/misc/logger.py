"""
Logging helpers shared by the API and the logging configuration
"""

import logging
from typing import Optional


def enforce_logger(logger: Optional[logging.Logger] = None) -> logging.Logger:
    """
    Return the given logger or fall back to the logger of this module with a warning

    :raises TypeError: if something other than a ``logging.Logger`` was given
    """

    if logger is None:
        fallback = logging.getLogger(__name__)
        fallback.warning("No logger given by the caller, falling back to the default logger")
        return fallback
    if not isinstance(logger, logging.Logger):
        raise TypeError(f"Expected 'logging.Logger', got {type(logger)}")
    return logger


class NoDebugFilter(logging.Filter):
    """
    Drop DEBUG records of the configured logger name while passing everything else

    Used for ``uvicorn.error`` in the default logging configuration, which
    would flood the console with connection details in debug mode otherwise.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno > logging.DEBUG or not super().filter(record)
