from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_CONFIGURED_FLAG = "_todo_backend_logging_configured"


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Calling it again only adjusts the level, so importing the app twice (tests,
    reloaders) does not duplicate output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    if getattr(root_logger, _CONFIGURED_FLAG, False):
        root_logger.setLevel(log_level)
        for handler in root_logger.handlers:
            handler.setLevel(log_level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)
    setattr(root_logger, _CONFIGURED_FLAG, True)
