"""Computed properties — descriptors backed by a function.

A ComputedProperty wraps a function of the owning object. Attach it to an
object with define_property(); from then on get(obj, key) calls the function
instead of reading the plain field.

Cacheable computed properties store their result in the object's Meta.cache
and only re-evaluate after invalidate_property() or a set() through the
descriptor.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from pathfx.meta import EMPTY_META, meta

T = TypeVar("T")

_UNSET = object()


class ComputedProperty(Generic[T]):
    """A property descriptor whose value is computed from the owning object."""

    __slots__ = ("_fn", "_setter_fn", "_cacheable")

    def __init__(self, fn: Callable[[Any], T]) -> None:
        self._fn = fn
        self._setter_fn: Callable[[Any, Any], Any] | None = None
        self._cacheable = False

    def setter(self, fn: Callable[[Any, Any], Any]) -> ComputedProperty[T]:
        """Make the property writable. fn(obj, value) stores the value."""
        self._setter_fn = fn
        return self

    def cacheable(self, flag: bool = True) -> ComputedProperty[T]:
        """Cache the computed value per object until invalidated."""
        self._cacheable = flag
        return self

    @property
    def is_cacheable(self) -> bool:
        return self._cacheable

    def get(self, obj: Any, key: str) -> T:
        if not self._cacheable:
            return self._fn(obj)

        cache = meta(obj).cache
        value = cache.get(key, _UNSET)
        if value is _UNSET:
            value = self._fn(obj)
            cache[key] = value
        return value

    def set(self, obj: Any, key: str, value: Any) -> Any:
        if self._setter_fn is None:
            raise AttributeError(f"computed property {key!r} has no setter")
        invalidate_property(obj, key)
        return self._setter_fn(obj, value)

    def __repr__(self) -> str:
        flags = "cacheable" if self._cacheable else "volatile"
        return f"ComputedProperty({self._fn.__name__}, {flags})"


def invalidate_property(obj: Any, key: str) -> None:
    """Drop the cached value of a cacheable computed property, if any."""
    store = meta(obj, False)
    if store is not EMPTY_META:
        store.cache.pop(key, None)


def computed(fn: Callable[[Any], T]) -> ComputedProperty[T]:
    """Decorator/factory to create a ComputedProperty from a function.

    Usage:
        @computed
        def full_name(person):
            return f"{person.first} {person.last}"

        define_property(person, "full_name", full_name)
        get(person, "full_name")  # "Ada Lovelace"
    """
    return ComputedProperty(fn)
