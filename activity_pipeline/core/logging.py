"""
Logging setup for the activity pipeline service.
"""
import logging
import sys

LOGGER_NAME = "activity_pipeline"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(getattr(h, "_activity_pipeline", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._activity_pipeline = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
