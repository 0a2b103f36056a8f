"""
Logging Configuration
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stream handler on the root logger.

    Calling it again replaces the handler instead of adding another one.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_media_orchestrator", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._media_orchestrator = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
