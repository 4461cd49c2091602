"""Logging helpers shared by every blogcore module."""

import logging
from typing import Optional, Union

ROOT_LOGGER = "blogcore"


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        if level is not None:
            logger.setLevel(level)
        return
    if level is None:
        from blogcore.core.config import settings

        level = settings.LOG_LEVEL
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
