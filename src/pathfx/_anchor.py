"""Data anchor — plain Python structures that hold all per-object state.

Metadata stores are keyed by id(obj) of the object they describe.
ObservableArray handles hold an _id into the array tables below.
Separating data from behavior means the behavior modules can be replaced
while the data persists.
"""

import itertools

# Metadata stores (id(obj) -> Meta)
metas: dict[int, object] = {}
pinned: dict[int, object] = {}  # id(obj) -> obj, for objects without weakref support

# ObservableArray state
values: dict[int, list] = {}
array_observers: dict[int, list] = {}  # array_id -> [weakref.ref(observer), ...]
frozen: dict[int, bool] = {}
extras: dict[int, dict] = {}  # array_id -> unknown properties stored on the array

# Arrays currently inside a will-change/did-change bracket
notifying: set[int] = set()

# ID generation — itertools.count is thread-safe (C-level GIL atomic)
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)


def release_meta(key: int) -> None:
    metas.pop(key, None)
    pinned.pop(key, None)


def release_array(array_id: int) -> None:
    values.pop(array_id, None)
    array_observers.pop(array_id, None)
    frozen.pop(array_id, None)
    extras.pop(array_id, None)
    notifying.discard(array_id)
