"""
Logging setup for boring-table.

Modules obtain loggers through get_logger(); applications call
configure_logging() once to attach a handler to the package root logger.
"""

import logging

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "boring_table"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger namespaced under the package root.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def configure_logging(level: str = "INFO", rich: bool = True) -> logging.Logger:
    """
    Attach a handler to the package root logger.

    Calling it again only updates the level.

    Args:
        level: Log level name
        rich: Use rich's RichHandler instead of a plain StreamHandler

    Returns:
        The package root logger
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level.upper())

    if _configured:
        return root

    handler: logging.Handler
    if rich:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root.addHandler(handler)
    _configured = True

    return root
