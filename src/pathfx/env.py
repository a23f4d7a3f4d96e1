"""Runtime flags, read once from the environment at import.

USE_ACCESSORS selects the accessor mode (see pathfx.accessors). Changing
the environment after pathfx is imported has no effect.
"""

import os

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


USE_ACCESSORS: bool = _flag("PATHFX_USE_ACCESSORS")
