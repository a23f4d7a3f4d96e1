"""Errors raised by pathfx. All are raised synchronously to the caller."""


class PathFxError(Exception):
    """Base class for pathfx errors."""


class InvalidArgumentError(PathFxError, ValueError):
    """An empty or missing path, or a write against an absent object."""


class InvalidPathError(PathFxError, ValueError):
    """A path that cannot be resolved to a target and key."""


class FrozenError(PathFxError, RuntimeError):
    """A structural mutation was attempted on a frozen array."""


class ReentrantMutationError(PathFxError, RuntimeError):
    """An array observer mutated the array it is being notified about."""
