"""Package-wide logging helpers.

All modules log through the ``glmsearch`` logger via the ``log_*`` helpers
below. Set ``GLMSEARCH_DEBUG=true`` to enable debug output.
"""

import logging
from os import getenv
from typing import Any

LOGGER_NAME = "glmsearch"


def _build_logger(name: str) -> logging.Logger:
  _logger = logging.getLogger(name)
  if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    _logger.addHandler(handler)
  if getenv("GLMSEARCH_DEBUG", "false").lower() in ("true", "1", "yes"):
    _logger.setLevel(logging.DEBUG)
  else:
    _logger.setLevel(logging.WARNING)
  return _logger


logger: logging.Logger = _build_logger(LOGGER_NAME)


def set_log_level_to_debug() -> None:
  logger.setLevel(logging.DEBUG)


def set_log_level_to_info() -> None:
  logger.setLevel(logging.INFO)


def log_debug(msg: str, *args: Any, **kwargs: Any) -> None:
  logger.debug(msg, *args, **kwargs)


def log_info(msg: str, *args: Any, **kwargs: Any) -> None:
  logger.info(msg, *args, **kwargs)


def log_warning(msg: str, *args: Any, **kwargs: Any) -> None:
  logger.warning(msg, *args, **kwargs)


def log_error(msg: str, *args: Any, **kwargs: Any) -> None:
  logger.error(msg, *args, **kwargs)
