"""Environment-driven configuration for the Macanan AI service.

All knobs are read once at import time so that the service, the self-play
tool and the tests share the same configuration surface:

    export MACANAN_SEARCH_DEPTH=3      # default minimax depth
    export MACANAN_LOG_LEVEL=INFO      # root logging level for the service
    export MACANAN_SERVICE_PORT=8001   # port used by ``python -m macanan.main``
    export CORS_ORIGINS=*              # comma separated allow-list
"""

from __future__ import annotations

import os

from .errors import ConfigurationError

BOARD_SIZE = 5
TIGER_COUNT = 2
MAN_COUNT = 8

# Tiger wins once fewer than this many men remain.
MIN_MEN_FOR_PLAY = 3

DEFAULT_SEARCH_DEPTH = 3
MAX_SEARCH_DEPTH = 6


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{key} must be an integer, got {raw!r}", key=key
        ) from e


def get_search_depth() -> int:
    """Return the configured default search depth."""
    depth = _int_env("MACANAN_SEARCH_DEPTH", DEFAULT_SEARCH_DEPTH)
    if not 0 <= depth <= MAX_SEARCH_DEPTH:
        raise ConfigurationError(
            f"MACANAN_SEARCH_DEPTH must be in [0, {MAX_SEARCH_DEPTH}], "
            f"got {depth}",
            key="MACANAN_SEARCH_DEPTH",
        )
    return depth


SEARCH_DEPTH = get_search_depth()
LOG_LEVEL = os.getenv("MACANAN_LOG_LEVEL", "INFO").upper()
SERVICE_PORT = _int_env("MACANAN_SERVICE_PORT", 8001)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
