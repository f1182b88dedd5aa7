"""Logging helpers shared by every module."""
import logging

_PACKAGE_LOGGER = "clusterizer"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Handlers are the application's business; stay silent until one is set up.
logging.getLogger(_PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger."""
    if name == _PACKAGE_LOGGER or name.startswith(_PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_PACKAGE_LOGGER}.{name}")


def setup_logging(debug: bool = False) -> None:
    """Send log records to stderr; INFO by default, DEBUG adds per-iteration lines."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format=_FORMAT, datefmt="%H:%M:%S")
    logging.getLogger(_PACKAGE_LOGGER).setLevel(level)
