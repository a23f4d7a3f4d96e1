"""Path resolution — get_path() and set_path() over arbitrary object graphs.

Every segment is read with accessors.get(), so computed properties and
unknown_property() hooks apply at each step of the walk.

Global paths (Foo.bar) start from the global root, a process-wide object
installed with set_global_root(). Context-split paths (a.b*c.d) resolve
a.b first, then treat c.d as a fresh relative path against the result.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from pathfx import accessors
from pathfx.accessors import UNDEFINED, is_absent
from pathfx.errors import InvalidPathError
from pathfx.grammar import (
    context_split_index,
    first_key,
    has_this,
    is_global,
    is_global_set,
    normalize_path,
)
from pathfx.meta import is_prototype


class GlobalNamespace:
    """Default global root: a plain attribute bag."""

    def register(self, name: str, obj: Any) -> Any:
        setattr(self, name, obj)
        return obj

    def __repr__(self) -> str:
        return f"GlobalNamespace({sorted(vars(self))!r})"


_global_root: Any = GlobalNamespace()


def global_root() -> Any:
    return _global_root


def set_global_root(root: Any) -> Any:
    """Replace the global root. Returns the previous one so callers can restore it.

    Call once during setup:
        pathfx.set_global_root(my_app_namespace)
    """
    global _global_root
    previous = _global_root
    _global_root = root
    return previous


class ResolvedTuple(NamedTuple):
    """Where a path actually points: the object to start from and what is left."""

    target: Any
    path: str


def resolve_value(target: Any, path: str) -> Any:
    """Walk a normalized relative path from target.

    No global or this. handling. Returns UNDEFINED when an absent object is
    reached before the last segment.
    """
    idx = context_split_index(path)
    if idx > 0:
        return resolve_value(resolve_value(target, path[:idx]), path[idx + 1:])

    length = len(path)
    idx = 0
    while not is_absent(target) and idx < length:
        nxt = path.find(".", idx)
        if nxt < 0:
            nxt = length
        key = path[idx:nxt]
        if key != "*":
            target = accessors.get(target, key)
        idx = nxt + 1

    if idx < length:
        return UNDEFINED
    return target


def _normalize_tuple(target: Any, path: str) -> ResolvedTuple:
    """normalize_tuple() for a path that is already normalized."""
    this = has_this(path)
    glob = not this and is_global(path)

    if is_absent(target) or glob:
        target = _global_root
    if this:
        path = path[5:]

    idx = context_split_index(path)
    if idx > 0:
        # A template object is not live yet; there is nothing to look up on it.
        if not is_absent(target) and not is_prototype(target):
            target = resolve_value(target, path[:idx])
        else:
            target = None
        path = path[idx + 1:]
    elif target is _global_root:
        key = first_key(path)
        target = accessors.get(target, key)
        path = path[len(key) + 1:]

    if not path:
        raise InvalidPathError("Invalid Path: nothing left to resolve")

    return ResolvedTuple(target, path)


def normalize_tuple(target: Any, path: str) -> ResolvedTuple:
    """Work out the object and relative path that target/path really refer to.

    Accounts for global paths (a leading capitalized name not defined on
    target) and '*' context splits:

        normalize_tuple(None, "App.store.items")  # (App, "store.items")
        normalize_tuple(view, "content*name")     # (view.content, "name")
    """
    return _normalize_tuple(target, normalize_path(path))


def get_path(root: Any, path: str | None = None) -> Any:
    """Look up a property path starting at root.

        get_path(person, "address.city")
        get_path(None, "App.currentUser.name")
        get_path("App.currentUser.name")   # same, root omitted

    Absent objects along the way produce UNDEFINED rather than an error.
    """
    if path is None and isinstance(root, str):
        root, path = None, root

    path = normalize_path(path)
    if is_absent(root) or has_this(path) or is_global(path) or path.find("*") > 0:
        root, path = _normalize_tuple(root, path)

    return resolve_value(root, path)


def set_path(root: Any, path: str, value: Any) -> Any:
    """Set the property at the end of path, resolving everything before it.

        set_path(person, "address.city", "Oslo")
        set_path(None, "App.title", "Inbox")

    Returns value. Raises InvalidPathError for a missing or '*' final key,
    and for a bare global name ("App"), which has no owning object to set
    it on.
    """
    path = requested = normalize_path(path)
    if path.find("*") > 0:
        root, path = _normalize_tuple(root, path)

    if path.find(".") > 0:
        key = path[path.rfind(".") + 1:]
        path = path[: len(path) - (len(key) + 1)]

        if not has_this(path) and is_global_set(path) and "." not in path:
            root = accessors.get(_global_root, path)
        elif path != "this":
            root = get_path(root, path)
    else:
        if is_global_set(path):
            raise InvalidPathError(f"Invalid Path: cannot set the global {path!r} directly")
        key = path

    if not key or key == "*":
        raise InvalidPathError(f"Invalid Path: {requested!r} has no property to set")

    return accessors.set(root, key, value)
