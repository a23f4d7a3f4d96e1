"""Tests for environment flags."""

import pytest

from pathfx import env


class TestFlag:
    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_truthy(self, monkeypatch, raw):
        monkeypatch.setenv("PATHFX_TEST_FLAG", raw)
        assert env._flag("PATHFX_TEST_FLAG") is True

    @pytest.mark.parametrize("raw", ["0", "false", "", "nope"])
    def test_falsy(self, monkeypatch, raw):
        monkeypatch.setenv("PATHFX_TEST_FLAG", raw)
        assert env._flag("PATHFX_TEST_FLAG") is False

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("PATHFX_TEST_FLAG", raising=False)
        assert env._flag("PATHFX_TEST_FLAG") is False
        assert env._flag("PATHFX_TEST_FLAG", default=True) is True
