import logging
from typing import Union

import uvicorn

FORMAT = "%(levelprefix)s %(asctime)s [%(threadName)s] [%(name)s] %(message)s"

# Parent of every pipeline logger (price_search.parser, price_search.brave, ...).
ROOT_LOGGER = "price_search"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def get_logger(name: str = ROOT_LOGGER, level: Union[int, str] = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(numeric_level)
        formatter = uvicorn.logging.DefaultFormatter(
            FORMAT, datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # The handler above already prints; skip the root handler.
        logger.propagate = False

    return logger


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach the console handler to the ``price_search`` logger tree."""
    return get_logger(ROOT_LOGGER, level)
