#!/usr/bin/env python3
"""Monitored server threads and their display names."""

from enum import Enum
from typing import Dict, Union


class ThreadKey(str, Enum):
    """Closed set of threads the server reports tick performance for."""

    MAIN = "svMain"
    NETWORK = "svNetwork"
    SYNC = "svSync"

    @classmethod
    def parse(cls, value: Union["ThreadKey", str]) -> "ThreadKey":
        """Return the ThreadKey for a key or its wire name.

        Raises:
            ValueError: If the name is not a known thread
        """
        if isinstance(value, cls):
            return value
        return cls(value)


DEFAULT_THREAD = ThreadKey.MAIN

THREAD_DISPLAY_NAMES: Dict[ThreadKey, str] = {
    ThreadKey.MAIN: "Main",
    ThreadKey.NETWORK: "Network",
    ThreadKey.SYNC: "Sync",
}

# Adding a thread without a display name is an import-time failure
_missing = set(ThreadKey) - set(THREAD_DISPLAY_NAMES)
if _missing:
    raise RuntimeError(
        "ThreadKey without display name: "
        + ", ".join(sorted(key.value for key in _missing))
    )


def get_thread_display_name(key: Union[ThreadKey, str]) -> str:
    """Map a thread key (or its wire name) to its display label."""
    return THREAD_DISPLAY_NAMES[ThreadKey.parse(key)]
