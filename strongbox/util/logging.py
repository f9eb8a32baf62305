"""Logging configuration for the command line client."""

import logging
import sys

from strongbox.config import Settings

# Transport libraries log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure client logging.

    Records go to stderr; stdout carries only command output such as the
    credential listing or the invite table.
    """
    level = _level_for(settings)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("strongbox").setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
