"""Property path grammar.

Paths come in four forms:
- relative:        foo.bar
- current context: this.foo, or the older .foo and *foo spellings
- global:          Foo.bar, $foo.bar (first segment names an object on the global root)
- context split:   foo.bar*baz.qux (resolve foo.bar, then baz.qux from there)

normalize_path() rewrites the older spellings into the this. form so the
resolver only has to understand one of them.
"""

from __future__ import annotations

import re

from pathfx.errors import InvalidArgumentError

IS_GLOBAL = re.compile(r"^([A-Z$]|([0-9][A-Z$])).*[.*]")
IS_GLOBAL_SET = re.compile(r"^([A-Z$]|([0-9][A-Z$]))")
HAS_THIS = re.compile(r"^this[.*]")
FIRST_KEY = re.compile(r"^([^.*]+)")


def normalize_path(path: str) -> str:
    """Canonicalize a path. Idempotent.

        normalize_path(".foo")   # "this.foo"
        normalize_path("*foo")   # "this.foo"
        normalize_path("*")      # "*"
    """
    if not isinstance(path, str) or not path:
        raise InvalidArgumentError("must pass a non-empty string to normalize_path()")

    if path == "*":
        return path
    first = path[0]
    if first == ".":
        return "this" + path
    if first == "*" and path[1:2] != ".":
        return "this." + path[1:]
    return path


def first_key(path: str) -> str:
    """Leading run of path up to the first '.' or '*'; '' if path starts with one."""
    match = FIRST_KEY.match(path)
    return match.group(1) if match else ""


def has_this(path: str) -> bool:
    return HAS_THIS.match(path) is not None


def is_global(path: str) -> bool:
    """True for Foo.bar / $foo*bar style paths (never for this. paths)."""
    return not has_this(path) and IS_GLOBAL.match(path) is not None


def is_global_set(path: str) -> bool:
    """True when the first segment looks like a global name, with or without a tail."""
    return IS_GLOBAL_SET.match(path) is not None


def context_split_index(path: str) -> int:
    """Index of the first bare '*' past position 0, or -1.

    A '*' right after a '.' is a segment of its own (stay on the current
    target), not a split.
    """
    idx = path.find("*")
    if idx > 0 and path[idx - 1] != ".":
        return idx
    return -1
