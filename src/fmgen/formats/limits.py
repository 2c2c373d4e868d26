"""Depth and key-count enforcement shared by the format adapters.

Depth counts array/object boundaries from the root mapping, which sits at
depth 0. ``{"a": {"b": [1]}}`` reaches depth 2.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from ..core.config import ParseOptions
from ..core.exceptions import NestingTooDeepError, TooManyKeysError
from ..core.frontmatter import Frontmatter
from ..core.types import Array, Object, Tagged, Value

# Returns the container children of a node, or None for leaves
ChildrenFunc = Callable[[Any], "Iterable[Any] | None"]


def join_key(path: str, key: str) -> str:
    """Extend a dotted path with a mapping key."""
    return f"{path}.{key}" if path else key


def join_index(path: str, index: int) -> str:
    """Extend a dotted path with a sequence index."""
    return f"{path}[{index}]"


def measure_depth(node: Any, depth: int, children: ChildrenFunc) -> int:
    """Deepest container depth reachable from ``node``, which sits at ``depth``.

    Iterative, so arbitrarily deep input cannot exhaust the call stack.
    """
    deepest = depth
    stack = [(node, depth)]
    while stack:
        current, current_depth = stack.pop()
        deepest = max(deepest, current_depth)
        for child in children(current) or ():
            if children(child) is not None:
                stack.append((child, current_depth + 1))
    return deepest


def native_children(node: Any) -> Iterable[Any] | None:
    """Children of decoded Python data (dicts and lists are containers)."""
    if isinstance(node, dict):
        return node.values()
    if isinstance(node, list):
        return node
    return None


class LimitTracker:
    """Applies ParseOptions limits while a tree is being built."""

    def __init__(self, options: ParseOptions) -> None:
        self.max_depth = options.max_depth
        self.max_keys = options.max_keys

    def enter(self, node: Any, depth: int, path: str, children: ChildrenFunc) -> None:
        """Check a container about to be built at ``depth``.

        Raises:
            NestingTooDeepError: Reporting the deepest level the input reaches.
        """
        if depth > self.max_depth:
            actual = measure_depth(node, depth, children)
            raise NestingTooDeepError(actual, self.max_depth, path)

    def check_keys(self, count: int, path: str) -> None:
        """Check the key count of a fully built object."""
        if count > self.max_keys:
            raise TooManyKeysError(count, self.max_keys, path)


# =============================================================================
# Canonical tree traversal
# =============================================================================

def _unwrap(value: Value) -> Frontmatter | list[Value] | None:
    while isinstance(value, Tagged):
        value = value.value
    if isinstance(value, Object):
        return value.frontmatter
    if isinstance(value, Array):
        return value.items
    return None


def canonical_children(node: Any) -> Iterable[Any] | None:
    """Child containers of a canonical container (tagged wrappers are transparent)."""
    if isinstance(node, Frontmatter):
        values: Iterable[Value] = node.values()
    elif isinstance(node, list):
        values = node
    else:
        return None
    return [child for child in (_unwrap(v) for v in values) if child is not None]


def iter_containers(fm: Frontmatter) -> Iterator[tuple[Frontmatter | list[Value], int, str]]:
    """Yield ``(container, depth, path)`` for every object and array in ``fm``.

    The root itself is yielded first at depth 0 with an empty path.
    """
    stack: list[tuple[Frontmatter | list[Value], int, str]] = [(fm, 0, "")]
    while stack:
        container, depth, path = stack.pop()
        yield container, depth, path
        if isinstance(container, Frontmatter):
            entries: Iterable[tuple[str, Value]] = (
                (join_key(path, key), value) for key, value in container.items()
            )
        else:
            entries = ((join_index(path, i), value) for i, value in enumerate(container))
        children = [(child, child_path) for child_path, value in entries
                    if (child := _unwrap(value)) is not None]
        for child, child_path in reversed(children):
            stack.append((child, depth + 1, child_path))
