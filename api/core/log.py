"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with `key=value` messages;
this module only decides level and format for the root logger.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def configure_logging() -> None:
    global _configured
    if _configured:
        return None

    level = logging.getLevelName(settings.log_level())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    _configured = True
