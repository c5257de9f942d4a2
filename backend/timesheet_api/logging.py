"""Root logger setup shared by the API server and the CLI tools."""
import logging
import os
import sys

_LEVEL_NAMES = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def resolve_level(level: str | int | None = None) -> int:
    """Turn a level name, number or ``None`` into a logging level.

    ``None`` falls back to the ``LOG_LEVEL`` environment variable, then INFO.
    Unknown names resolve to INFO.
    """
    raw = level if level is not None else os.getenv("LOG_LEVEL")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        name = raw.strip().upper()
        if name.isdigit():
            return int(name)
        return _LEVEL_NAMES.get(name, logging.INFO)
    return logging.INFO


def setup_logging(level: str | int | None = None) -> None:
    """Initialize the root logger once with a stdout handler and set its level."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        handler.setFormatter(fmt)
        root.addHandler(handler)
        logging.captureWarnings(True)
    root.setLevel(resolve_level(level))
