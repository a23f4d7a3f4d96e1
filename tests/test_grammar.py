"""Tests for path grammar: normalization, first keys and path predicates."""

import pytest

from pathfx import InvalidArgumentError, normalize_path, first_key
from pathfx.grammar import context_split_index, has_this, is_global, is_global_set

PATHS = ["foo", "foo.bar", ".foo", "*foo", "*", "*.foo", "this.foo", "Foo.bar", "a.b*c.d", "."]


class TestNormalizePath:
    def test_leading_dot(self):
        assert normalize_path(".foo") == "this.foo"

    def test_leading_star(self):
        assert normalize_path("*foo") == "this.foo"
        assert normalize_path("*foo.bar") == "this.foo.bar"

    def test_bare_star_passes_through(self):
        assert normalize_path("*") == "*"

    def test_star_dot_is_left_alone(self):
        assert normalize_path("*.foo") == "*.foo"

    def test_other_paths_unchanged(self):
        for path in ("foo", "foo.bar", "Foo.bar", "this.foo", "a.b*c.d"):
            assert normalize_path(path) == path

    @pytest.mark.parametrize("path", PATHS)
    def test_idempotent(self, path):
        once = normalize_path(path)
        assert normalize_path(once) == once

    @pytest.mark.parametrize("bad", ["", None])
    def test_rejects_empty(self, bad):
        with pytest.raises(InvalidArgumentError):
            normalize_path(bad)

    def test_invalid_argument_is_a_value_error(self):
        with pytest.raises(ValueError):
            normalize_path("")


class TestFirstKey:
    def test_up_to_dot(self):
        assert first_key("foo.bar.baz") == "foo"

    def test_up_to_star(self):
        assert first_key("foo*bar") == "foo"

    def test_single_segment(self):
        assert first_key("foo") == "foo"

    def test_leading_delimiter_gives_empty_key(self):
        assert first_key("*foo") == ""
        assert first_key(".foo") == ""


class TestPredicates:
    def test_has_this(self):
        assert has_this("this.foo")
        assert has_this("this*foo")
        assert not has_this("thisfoo")
        assert not has_this("this")

    def test_is_global(self):
        assert is_global("Foo.bar")
        assert is_global("$foo.bar")
        assert is_global("Foo*bar")
        assert is_global("2D.x")

    def test_is_global_needs_a_separator(self):
        assert not is_global("Foo")

    def test_lowercase_and_this_paths_are_not_global(self):
        assert not is_global("foo.Bar")
        assert not is_global("this.Foo")

    def test_is_global_set(self):
        assert is_global_set("Foo")
        assert is_global_set("$foo")
        assert not is_global_set("foo")
        assert not is_global_set("1x")

    def test_context_split_index(self):
        assert context_split_index("a.b*c") == 3
        assert context_split_index("a.*") == -1
        assert context_split_index("*a") == -1
        assert context_split_index("abc") == -1
