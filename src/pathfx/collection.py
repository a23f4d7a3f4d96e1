"""Collection mirrors — children kept index-aligned with an observed array.

A CollectionMirror registers itself as an array observer on its content and
replays every mutation against its own children list instead of rebuilding
it: will-change destroys the children of the removed range, did-change
creates children for the added range.

Subclasses decide what a child is by overriding the hooks:
create_child(), destroy_child(), insert_children(), create_empty() and
is_live(). The default mirror is a plain list of item_factory(item) results.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Sequence, TypeVar

from pathfx.array import ObservableContent

logger = logging.getLogger("pathfx.collection")

T = TypeVar("T")
C = TypeVar("C")


class CollectionMirror(Generic[T, C]):
    """Mirrors content (an ObservableArray, or any sequence) into children."""

    def __init__(
        self,
        content: Sequence[T] | None = None,
        *,
        item_factory: Callable[[T], C] | None = None,
        empty_factory: Callable[[], C] | None = None,
    ) -> None:
        self._content: Sequence[T] | None = None
        self.children: list[C] = []
        self.empty_child: C | None = None
        self.item_factory = item_factory
        self.empty_factory = empty_factory
        self.content = content

    @property
    def content(self) -> Sequence[T] | None:
        return self._content

    @content.setter
    def content(self, content: Sequence[T] | None) -> None:
        """Swap content: stop observing the old array, observe the new one.

        The swap is replayed as one mutation replacing every old item with
        every new one.
        """
        old = self._content
        old_len = new_len = 0

        if old is not None:
            if isinstance(old, ObservableContent):
                old.remove_array_observer(self)
            old_len = len(old)

        if content is not None:
            if isinstance(content, ObservableContent):
                content.add_array_observer(self)
            new_len = len(content)

        logger.debug("Content swap: %d -> %d items", old_len, new_len)
        self.array_will_change(old, 0, old_len, new_len)
        self._content = content
        self.array_did_change(content, 0, old_len, new_len)

    # --- Array observer ---

    def array_will_change(self, content, start: int, removed: int, added: int) -> None:
        if not self.is_live():
            return

        if self.empty_child is not None:
            empty, self.empty_child = self.empty_child, None
            self.destroy_child(empty)

        # Backwards, so the indexes still to visit stay valid.
        stop = min(start + removed, len(self.children))
        for idx in range(stop - 1, start - 1, -1):
            self.destroy_child(self.children.pop(idx))

    def array_did_change(self, content, start: int, removed: int, added: int) -> None:
        if not self.is_live():
            return

        if content is not None and added:
            created = [self.create_child(content[idx]) for idx in range(start, start + added)]
            self.children[start:start] = created
            self.insert_children(start, created)

        if not self.children and self.empty_factory is not None and self.empty_child is None:
            self.empty_child = self.create_empty()
            self.insert_children(0, [self.empty_child])

    # --- Lifecycle ---

    def render(self) -> None:
        """Rebuild every child from the current content.

        Use after the mirror becomes live, since notifications that arrived
        while is_live() was false were ignored.
        """
        if not self.is_live():
            return
        content = self._content
        count = len(self.children)
        if self.empty_child is not None:
            empty, self.empty_child = self.empty_child, None
            self.destroy_child(empty)
        for idx in range(count - 1, -1, -1):
            self.destroy_child(self.children.pop(idx))
        self.array_did_change(content, 0, count, len(content) if content is not None else 0)

    def destroy(self) -> None:
        """Stop observing and tear down all children."""
        self.content = None

    # --- Hooks ---

    def is_live(self) -> bool:
        return True

    def create_child(self, item: T) -> C:
        if self.item_factory is None:
            return item
        return self.item_factory(item)

    def create_empty(self) -> C:
        return self.empty_factory()

    def destroy_child(self, child: C) -> None:
        destroy = getattr(child, "destroy", None)
        if callable(destroy):
            destroy()

    def insert_children(self, start: int, children: list[C]) -> None:
        """Called after children were inserted at start in self.children."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.children)} children)"
