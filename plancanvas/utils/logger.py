"""Logging utilities."""
import logging


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Setup and return a logger for a canvas component.

    The handler is only attached once per logger name, so engines that are
    created repeatedly (one per view) share the same handler.

    Args:
        name: Logger name, usually the component class name
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(f"plancanvas.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] [%(name)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)
    return logger
