"""Observable arrays — ordered collections that announce structural changes.

Every mutation goes through replace(), which brackets the splice with two
calls to each registered array observer, in registration order:

    observer.array_will_change(array, start, removed, added)   # storage untouched
    ... items[start:start + removed] = new items ...
    observer.array_did_change(array, start, removed, added)    # storage updated

Anything that needs the removed items must happen in will-change; anything
that needs the added items must wait for did-change.

Observers are held by weak reference. They must call remove_array_observer()
before going away; one that is collected without doing so is pruned, with a
warning, the next time the array dispatches.

All state lives in _anchor — instances are thin handles holding an _id.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Generic, Iterable, Iterator, Protocol, TypeVar, runtime_checkable

from pathfx import _anchor
from pathfx.accessors import UNDEFINED
from pathfx.errors import FrozenError, ReentrantMutationError

logger = logging.getLogger("pathfx.array")

T = TypeVar("T")


@runtime_checkable
class ArrayObserver(Protocol):
    """Receives the two notification phases of every mutation."""

    def array_will_change(self, array: ObservableArray, start: int, removed: int, added: int) -> None: ...

    def array_did_change(self, array: ObservableArray, start: int, removed: int, added: int) -> None: ...


@runtime_checkable
class ObservableContent(Protocol):
    """Sequences that accept array observers."""

    def add_array_observer(self, observer: ArrayObserver) -> Any: ...

    def remove_array_observer(self, observer: ArrayObserver) -> Any: ...


class ObservableArray(Generic[T]):
    """An ordered collection with will-change/did-change notification.

    Unobserved until the first add_array_observer(), and again once the last
    observer is removed. Reads never notify.
    """

    __slots__ = ("_id", "__weakref__")

    def __init__(self, items: Iterable[T] | None = None) -> None:
        self._id = _anchor.new_id()
        _anchor.values[self._id] = list(items) if items is not None else []
        _anchor.array_observers[self._id] = []
        _anchor.frozen[self._id] = False
        _anchor.extras[self._id] = {}
        weakref.finalize(self, _anchor.release_array, self._id)

    @property
    def _items(self) -> list[T]:
        return _anchor.values[self._id]

    # --- Observers ---

    def add_array_observer(self, observer: ArrayObserver) -> ObservableArray[T]:
        """Register observer. Registering the same observer twice is a no-op."""
        refs = _anchor.array_observers[self._id]
        if any(ref() is observer for ref in refs):
            return self
        refs.append(weakref.ref(observer))
        logger.debug("Added array observer %r (%d registered)", observer, len(refs))
        return self

    def remove_array_observer(self, observer: ArrayObserver) -> ObservableArray[T]:
        refs = _anchor.array_observers[self._id]
        for ref in refs:
            if ref() is observer:
                refs.remove(ref)
                logger.debug("Removed array observer %r (%d registered)", observer, len(refs))
                break
        return self

    @property
    def has_array_observers(self) -> bool:
        return any(ref() is not None for ref in _anchor.array_observers[self._id])

    def _live_observers(self) -> list[ArrayObserver]:
        refs = _anchor.array_observers[self._id]
        live = []
        for ref in list(refs):
            observer = ref()
            if observer is None:
                refs.remove(ref)
                logger.warning(
                    "Array observer was collected without remove_array_observer(); "
                    "pruned from array %d",
                    self._id,
                )
            else:
                live.append(observer)
        return live

    def array_content_will_change(self, start: int, removed: int, added: int) -> None:
        """Phase one: notify observers before storage changes."""
        for observer in self._live_observers():
            observer.array_will_change(self, start, removed, added)

    def array_content_did_change(self, start: int, removed: int, added: int) -> None:
        """Phase two: notify observers after storage changed."""
        for observer in self._live_observers():
            observer.array_did_change(self, start, removed, added)

    # --- The mutation primitive ---

    def replace(self, index: int, removed_count: int, objects: Iterable[T] | None = None) -> ObservableArray[T]:
        """Remove removed_count items at index and insert objects in their place.

        removed_count is clamped to the items available from index. Raises
        FrozenError on a frozen array and ReentrantMutationError when called
        by an observer of this array during notification.
        """
        if _anchor.frozen[self._id]:
            raise FrozenError("cannot modify a frozen ObservableArray")
        if self._id in _anchor.notifying:
            raise ReentrantMutationError(
                "ObservableArray was mutated by one of its own observers during notification"
            )

        items = self._items
        if not 0 <= index <= len(items):
            raise IndexError(f"replace index {index} out of range for length {len(items)}")
        removed_count = max(0, min(removed_count, len(items) - index))
        added = list(objects) if objects is not None else []

        _anchor.notifying.add(self._id)
        try:
            self.array_content_will_change(index, removed_count, len(added))
            items[index:index + removed_count] = added
            self.array_content_did_change(index, removed_count, len(added))
        finally:
            _anchor.notifying.discard(self._id)
        return self

    # --- Freezing ---

    def freeze(self) -> ObservableArray[T]:
        _anchor.frozen[self._id] = True
        return self

    @property
    def is_frozen(self) -> bool:
        return _anchor.frozen[self._id]

    # --- Read operations ---

    @property
    def length(self) -> int:
        return len(self._items)

    def object_at(self, index: int) -> T:
        """Item at index, or UNDEFINED when index is out of range."""
        items = self._items
        if 0 <= index < len(items):
            return items[index]
        return UNDEFINED

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __bool__(self) -> bool:
        return bool(self._items)

    def index_of(self, item: object, start: int = 0) -> int:
        """Index of the first item equal to item at or after start, or -1."""
        items = self._items
        if start < 0:
            start += len(items)
        for idx in range(max(start, 0), len(items)):
            if items[idx] == item:
                return idx
        return -1

    def last_index_of(self, item: object, start: int | None = None) -> int:
        """Index of the last item equal to item at or before start, or -1."""
        items = self._items
        if start is None:
            start = len(items) - 1
        elif start < 0:
            start += len(items)
        for idx in range(min(start, len(items) - 1), -1, -1):
            if items[idx] == item:
                return idx
        return -1

    def slice(self, start: int = 0, end: int | None = None) -> list[T]:
        return self._items[start:end]

    def copy(self) -> ObservableArray[T]:
        """An unfrozen, unobserved array with the same items."""
        return ObservableArray(self._items)

    # --- Write operations (all via replace) ---

    def insert_at(self, index: int, item: T) -> ObservableArray[T]:
        if index > len(self._items):
            raise IndexError(f"insert index {index} out of range")
        return self.replace(index, 0, [item])

    def remove_at(self, index: int, count: int = 1) -> ObservableArray[T]:
        if index < 0 or index >= len(self._items):
            raise IndexError(f"remove index {index} out of range")
        return self.replace(index, count)

    def push_object(self, item: T) -> T:
        self.replace(len(self._items), 0, [item])
        return item

    def pop_object(self) -> T | None:
        """Remove and return the last item; None when empty."""
        items = self._items
        if not items:
            return None
        item = items[-1]
        self.remove_at(len(items) - 1)
        return item

    def shift_object(self) -> T | None:
        """Remove and return the first item; None when empty."""
        items = self._items
        if not items:
            return None
        item = items[0]
        self.remove_at(0)
        return item

    def unshift_object(self, item: T) -> T:
        self.insert_at(0, item)
        return item

    def remove_object(self, item: object) -> ObservableArray[T]:
        """Remove every occurrence of item, one notification per removal."""
        idx = len(self._items) - 1
        while idx >= 0:
            if self._items[idx] == item:
                self.remove_at(idx)
            idx -= 1
        return self

    def append(self, item: T) -> None:
        self.push_object(item)

    def extend(self, items: Iterable[T]) -> None:
        self.replace(len(self._items), 0, items)

    def insert(self, index: int, item: T) -> None:
        length = len(self._items)
        if index < 0:
            index += length
        self.insert_at(max(0, min(index, length)), item)

    def pop(self, index: int = -1) -> T:
        items = self._items
        item = items[index]  # IndexError like list.pop
        self.remove_at(index % len(items))
        return item

    def remove(self, item: T) -> None:
        idx = self.index_of(item)
        if idx < 0:
            raise ValueError(f"{item!r} not in ObservableArray")
        self.remove_at(idx)

    def clear(self) -> None:
        if self._items:
            self.replace(0, len(self._items))

    def _span(self, index) -> tuple[int, int]:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self._items))
            if step != 1:
                raise ValueError("ObservableArray does not support extended slices")
            return start, max(stop - start, 0)
        length = len(self._items)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError("ObservableArray index out of range")
        return index, 1

    def __setitem__(self, index, value) -> None:
        start, count = self._span(index)
        self.replace(start, count, value if isinstance(index, slice) else [value])

    def __delitem__(self, index) -> None:
        start, count = self._span(index)
        if count:
            self.replace(start, count)

    # --- Path access ---

    def unknown_property(self, key):
        """Index keys ("0", "1", ...) read items; other keys read stored extras."""
        if isinstance(key, int) or (isinstance(key, str) and key.isdecimal()):
            return self.object_at(int(key))
        return _anchor.extras[self._id].get(key, UNDEFINED)

    def set_unknown_property(self, key, value: Any) -> Any:
        if isinstance(key, int) or (isinstance(key, str) and key.isdecimal()):
            self[int(key)] = value
        else:
            _anchor.extras[self._id][key] = value
        return value

    def __repr__(self) -> str:
        return f"ObservableArray({self._items!r})"
