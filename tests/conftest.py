import pytest

from pathfx import GlobalNamespace, set_global_root


@pytest.fixture(autouse=True)
def global_root():
    """A fresh global root for every test, restored afterwards."""
    root = GlobalNamespace()
    previous = set_global_root(root)
    yield root
    set_global_root(previous)
