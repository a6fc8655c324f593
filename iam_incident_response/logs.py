"""Logging setup shared by the Lambda handler and the command line."""
from __future__ import annotations

import logging
from typing import Union

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LOG_FORMAT = "[%(levelname)s] %(message)s"


def log_success(logger: logging.Logger, msg: str, *args: object) -> None:
    """Log *msg* at the ``SUCCESS`` level, between INFO and WARNING."""

    logger.log(SUCCESS, msg, *args)


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Set the root log level and attach a console handler when none exists.

    The Lambda runtime installs its own handler on the root logger, in which case
    only the level is changed.
    """

    if isinstance(level, str):
        name = level.strip().upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{name}'")

    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


__all__ = ["LOG_FORMAT", "SUCCESS", "configure_logging", "log_success"]
