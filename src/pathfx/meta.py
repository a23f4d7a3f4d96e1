"""Metadata stores — per-object records of property descriptors.

A Meta is created lazily the first time something is recorded about an
object and lives in _anchor.metas, keyed by the object's identity. One store
per object; stores are never shared.

When the object supports weak references its store is dropped as soon as
the object is collected. Objects that cannot be weakly referenced (dicts,
lists, slotted classes) are pinned by the anchor instead, so their id can
never be reused by a different object while the store exists.
"""

from __future__ import annotations

import logging
import weakref
from types import MappingProxyType
from typing import Any, Callable, Protocol

from pathfx import _anchor

logger = logging.getLogger("pathfx.meta")


class PropertyDescriptor(Protocol):
    """Intercepts reads and writes of one key on one object."""

    def get(self, obj: Any, key: str) -> Any: ...

    def set(self, obj: Any, key: str, value: Any) -> Any: ...


class Descriptor:
    """A property descriptor built from a plain getter/setter pair.

    getter(obj, key) returns the value; setter(obj, key, value) stores it.
    Without a setter the property is read-only.
    """

    __slots__ = ("_getter", "_setter")

    def __init__(
        self,
        getter: Callable[[Any, str], Any],
        setter: Callable[[Any, str, Any], Any] | None = None,
    ) -> None:
        self._getter = getter
        self._setter = setter

    def get(self, obj: Any, key: str) -> Any:
        return self._getter(obj, key)

    def set(self, obj: Any, key: str, value: Any) -> Any:
        if self._setter is None:
            raise AttributeError(f"property {key!r} is read-only")
        return self._setter(obj, key, value)

    def __repr__(self) -> str:
        mode = "rw" if self._setter is not None else "ro"
        return f"Descriptor({getattr(self._getter, '__name__', self._getter)!r}, {mode})"


class Meta:
    """Descriptor table, prototype marker and computed-value cache for one object."""

    __slots__ = ("descs", "proto", "cache")

    def __init__(self) -> None:
        self.descs: dict[str, PropertyDescriptor] = {}
        self.proto: bool = False
        self.cache: dict[str, object] = {}

    def __repr__(self) -> str:
        return f"Meta(descs={sorted(self.descs)!r}, proto={self.proto})"


# Returned for objects that have no store when the caller only reads.
EMPTY_META = Meta()
EMPTY_META.descs = MappingProxyType({})
EMPTY_META.cache = MappingProxyType({})


def meta(obj: Any, writable: bool = True) -> Meta:
    """Return the metadata store for obj.

    With writable=False a missing store is not created; the shared,
    read-only EMPTY_META is returned instead.
    """
    key = id(obj)
    store = _anchor.metas.get(key)
    if store is not None:
        return store
    if not writable:
        return EMPTY_META

    store = Meta()
    _anchor.metas[key] = store
    try:
        weakref.finalize(obj, _anchor.release_meta, key)
    except TypeError:
        _anchor.pinned[key] = obj
    return store


def descriptor_for(obj: Any, key: str) -> PropertyDescriptor | None:
    return meta(obj, False).descs.get(key)


def define_property(obj: Any, key: str, desc: PropertyDescriptor | None) -> None:
    """Attach desc to (obj, key), replacing any previous descriptor.

    Passing None removes the property instead.
    """
    if desc is None:
        remove_property(obj, key)
        return
    store = meta(obj)
    store.descs[key] = desc
    store.cache.pop(key, None)
    logger.debug("Defined property %r on %s", key, type(obj).__name__)


def remove_property(obj: Any, key: str) -> None:
    store = meta(obj, False)
    if store is EMPTY_META:
        return
    if store.descs.pop(key, None) is not None:
        logger.debug("Removed property %r from %s", key, type(obj).__name__)
    store.cache.pop(key, None)


def mark_prototype(obj: Any) -> None:
    """Mark obj as a template: context-split paths are not evaluated against it."""
    meta(obj).proto = True


def is_prototype(obj: Any) -> bool:
    return meta(obj, False).proto
