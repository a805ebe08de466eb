import logging

from src.config import config

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger configured from LOG_LEVEL and LOG_FILE."""
    logger = logging.getLogger(name)
    logger.setLevel(config.LOG_LEVEL)

    # Modules can be imported several times (reloads, tests), keep a single set of handlers
    if logger.handlers:
        return logger

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(_formatter)
    logger.addHandler(stream_handler)

    if config.LOG_FILE:
        file_handler = logging.FileHandler(config.LOG_FILE)
        file_handler.setFormatter(_formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
