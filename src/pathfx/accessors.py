"""Uniform property access — get() and set() for any object.

get(obj, key) reads a property, honoring computed-property descriptors and
falling back to obj.unknown_property(key) when the plain field is missing.
set(obj, key, value) writes one, delegating to set_unknown_property() (or
the legacy two-argument unknown_property()) for keys the object does not
define.

A plain field is a mapping item for Mapping objects and an attribute for
everything else.

Two modes, chosen once at import from env.USE_ACCESSORS:
- native: Python's own property/descriptor protocol does the interception,
  metadata descriptors are ignored.
- simulated (default): descriptors attached with define_property() take
  precedence over the plain field.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol, runtime_checkable

from pathfx import env
from pathfx.errors import InvalidArgumentError
from pathfx.meta import descriptor_for


class _Undefined:
    """Marker for 'no such property'. Distinct from None, which is a real value."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED: Any = _Undefined()


@runtime_checkable
class UnknownPropertyProvider(Protocol):
    """Objects that compute properties they do not define.

    Called with one argument for reads. The two-argument form is the legacy
    write hook, used only when set_unknown_property() is not implemented.
    """

    def unknown_property(self, key: str, value: Any = UNDEFINED) -> Any: ...


@runtime_checkable
class SetUnknownPropertyProvider(Protocol):
    """Objects that take writes of properties they do not define."""

    def set_unknown_property(self, key: str, value: Any) -> Any: ...


def is_absent(obj: Any) -> bool:
    return obj is None or obj is UNDEFINED


def _global_root():
    # Imported lazily: paths depends on this module.
    from pathfx.paths import global_root

    return global_root()


def _read_field(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, UNDEFINED)
    return getattr(obj, key, UNDEFINED)


def _defines(obj: Any, key: str) -> bool:
    if isinstance(obj, Mapping):
        return key in obj
    return hasattr(obj, key)


def _write_field(obj: Any, key: str, value: Any) -> None:
    if isinstance(obj, MutableMapping):
        obj[key] = value
    else:
        setattr(obj, key, value)


def plain_get(obj: Any, key: str | None = None) -> Any:
    """Read key from obj without consulting metadata descriptors."""
    if key is None and isinstance(obj, str):
        obj, key = _global_root(), obj
    if is_absent(obj):
        return UNDEFINED

    ret = _read_field(obj, key)
    if ret is UNDEFINED and isinstance(obj, UnknownPropertyProvider):
        ret = obj.unknown_property(key)
    return ret


def plain_set(obj: Any, key: str, value: Any) -> Any:
    """Write key on obj without consulting metadata descriptors. Returns value."""
    if is_absent(obj):
        raise InvalidArgumentError(f"cannot set {key!r} on an absent object")

    if not _defines(obj, key):
        if isinstance(obj, SetUnknownPropertyProvider):
            obj.set_unknown_property(key, value)
        elif isinstance(obj, UnknownPropertyProvider):
            obj.unknown_property(key, value)
        else:
            _write_field(obj, key, value)
    else:
        _write_field(obj, key, value)

    return value


USE_ACCESSORS: bool = env.USE_ACCESSORS

if USE_ACCESSORS:
    get = plain_get
    set = plain_set
else:

    def get(obj: Any, key: str | None = None) -> Any:
        """Read key from obj.

        A descriptor defined on (obj, key) wins over the plain field. When
        the field is missing and obj implements unknown_property(), its
        result is returned. An absent obj (None or UNDEFINED) yields
        UNDEFINED; get() never raises for it.

        Called with a single string, reads that name from the global root.
        """
        if key is None and isinstance(obj, str):
            obj, key = _global_root(), obj
        if is_absent(obj):
            return UNDEFINED

        desc = descriptor_for(obj, key)
        if desc is not None:
            return desc.get(obj, key)
        return plain_get(obj, key)

    def set(obj: Any, key: str, value: Any) -> Any:
        """Write key on obj and return value (not whatever was stored).

        A descriptor defined on (obj, key) receives the write. Otherwise the
        unknown-property hooks get a chance for keys obj does not define,
        and the plain field is assigned last.
        """
        if is_absent(obj):
            raise InvalidArgumentError(f"cannot set {key!r} on an absent object")

        desc = descriptor_for(obj, key)
        if desc is not None:
            desc.set(obj, key, value)
        else:
            plain_set(obj, key, value)
        return value
