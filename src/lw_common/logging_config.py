"""Central logging setup for the API process."""

import logging

from config.settings import settings

NOISY_LIBRARY_LOGGERS = ("httpx", "httpcore", "asyncio")


def _resolve_level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging() -> logging.Logger:
    logger = logging.getLogger("lw")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(_resolve_level(settings.LOG_LEVEL))
    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger
