"""
Logging setup. Modules log through ``logging.getLogger(__name__)``; this only
wires the root handler once at startup.
"""

import logging
import sys

from lapor_sarpras.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str = None) -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    root.addHandler(handler)

    # uvicorn already prints its own access lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _configured = True
