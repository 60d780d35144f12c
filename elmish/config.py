"""
Elmish configuration — all environment variables in one place.

Read from environment at import time.
"""

from __future__ import annotations

import os


def _flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() == "true"


class Settings:
    """Runtime settings from environment variables."""

    # Logging
    LOG_LEVEL: str = os.environ.get("ELMISH_LOG_LEVEL", "WARNING").upper()

    # Host emits a DEBUG line for actions that leave state unchanged
    # (stale ids). The reducers themselves never log.
    TRACE_DROPPED: bool = _flag("ELMISH_TRACE_DROPPED")

    # Keep at most this many action records per mount. 0 keeps everything.
    HISTORY_LIMIT: int = int(os.environ.get("ELMISH_HISTORY_LIMIT", "0"))

    # Saved pages
    PAGE_TITLE: str = os.environ.get("ELMISH_PAGE_TITLE", "elmish")


# Singleton instance
settings = Settings()

if settings.HISTORY_LIMIT < 0:
    raise RuntimeError("ELMISH_HISTORY_LIMIT must be >= 0")
