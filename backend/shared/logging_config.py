"""
Logging setup.

Modules log through logging.getLogger(__name__); this only installs
the root handler and level once per process.
"""

import logging
from typing import Optional

from .config import get_settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from Settings.log_level (or an explicit level)."""
    settings = get_settings()
    resolved = (level or settings.log_level).upper()
    if settings.debug:
        resolved = "DEBUG"
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
