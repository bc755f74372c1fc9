import logging
import os

LOG_LEVEL_ENV = "COMCHEMKIT_LOG_LEVEL"


def _build_logger(name: str) -> logging.Logger:
    """Creates the package logger with a single stream handler."""
    _logger = logging.getLogger(name)
    if not _logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        _logger.addHandler(handler)
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    _logger.setLevel(getattr(logging, level_name, logging.WARNING))
    return _logger


logger = _build_logger("comchemkit")
