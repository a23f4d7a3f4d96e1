"""Textual integration for pathfx. Opt-in — requires textual.

WidgetCollection mirrors an ObservableArray into the children of a Textual
container: one widget per item, mounted and removed as the array changes.

Mutations are only replayed while the widget tree is in a queryable state
(app running, not paused, container present). After a pause, call render()
to rebuild from the current content.
"""

import logging
from contextlib import contextmanager

from textual.css.query import NoMatches

from pathfx.collection import CollectionMirror

logger = logging.getLogger("pathfx.textual")

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend widget collections of app during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


class WidgetCollection(CollectionMirror):
    """Keeps the children of the container matched by selector in step with content.

    item_widget(item) builds the widget for one item; empty_widget(), if
    given, builds the placeholder shown while content is empty.
    """

    def __init__(self, app, selector: str, content=None, *, item_widget, empty_widget=None):
        self.app = app
        self.selector = selector
        super().__init__(content, item_factory=item_widget, empty_factory=empty_widget)

    def _container(self):
        return self.app.query_one(self.selector)

    def is_live(self) -> bool:
        if not is_safe(self.app):
            return False
        try:
            self._container()
        except NoMatches:
            logger.debug("Container %r not mounted; mutation skipped", self.selector)
            return False
        return True

    def insert_children(self, start, widgets):
        container = self._container()
        end = start + len(widgets)
        if end < len(self.children):
            container.mount(*widgets, before=self.children[end])
        else:
            container.mount(*widgets)

    def destroy_child(self, widget):
        widget.remove()
