"""Logging bootstrap shared by entry points and workers."""

from __future__ import annotations

import logging
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging with the platform format at the configured level.

    Existing root handlers are replaced so the level applies even when a host
    already configured logging.
    """
    resolved = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO), format=LOG_FORMAT, force=True
    )
    # Keep HTTP client chatter out of application logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
