import logging

from teamhub.core import config

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.basicConfig(level=config.LOG_LEVEL.upper(), format=_LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger configured with the application log level."""
    return logging.getLogger(name)
