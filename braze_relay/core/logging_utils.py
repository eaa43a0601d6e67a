"""Logger configuration for the relay."""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "braze_relay"
_FORMATTER = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def _configure_root(level: int) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_FORMATTER)
        root.addHandler(handler)
        root.setLevel(level)
    return root


def get_logger(name: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the package root, configuring the root once."""
    root = _configure_root(level)
    if not name or name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_level(level: Union[int, str]) -> None:
    """Set the log level of the package root logger."""
    if isinstance(level, str):
        level = level.upper()
    _configure_root(level).setLevel(level)
