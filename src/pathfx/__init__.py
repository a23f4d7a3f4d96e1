"""pathfx: key-path resolution and array change notification for Python object graphs."""

from importlib.metadata import version as _version

__version__ = _version("pathfx")

from pathfx.errors import (
    PathFxError,
    InvalidArgumentError,
    InvalidPathError,
    FrozenError,
    ReentrantMutationError,
)
from pathfx.accessors import UNDEFINED, get, set, UnknownPropertyProvider, SetUnknownPropertyProvider
from pathfx.meta import Descriptor, define_property, remove_property, mark_prototype, is_prototype, meta
from pathfx.computed import ComputedProperty, computed, invalidate_property
from pathfx.grammar import normalize_path, first_key
from pathfx.paths import (
    GlobalNamespace,
    ResolvedTuple,
    get_path,
    set_path,
    normalize_tuple,
    global_root,
    set_global_root,
)
from pathfx.array import ObservableArray, ArrayObserver, ObservableContent
from pathfx.collection import CollectionMirror
# textual NOT auto-imported — opt-in only

__all__ = [
    "PathFxError",
    "InvalidArgumentError",
    "InvalidPathError",
    "FrozenError",
    "ReentrantMutationError",
    "UNDEFINED",
    "get",
    "set",
    "UnknownPropertyProvider",
    "SetUnknownPropertyProvider",
    "Descriptor",
    "define_property",
    "remove_property",
    "mark_prototype",
    "is_prototype",
    "meta",
    "ComputedProperty",
    "computed",
    "invalidate_property",
    "normalize_path",
    "first_key",
    "GlobalNamespace",
    "ResolvedTuple",
    "get_path",
    "set_path",
    "normalize_tuple",
    "global_root",
    "set_global_root",
    "ObservableArray",
    "ArrayObserver",
    "ObservableContent",
    "CollectionMirror",
]
