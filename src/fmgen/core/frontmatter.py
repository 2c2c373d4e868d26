"""The Frontmatter container: one metadata document as a keyed mapping."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Iterator, Mapping

from .types import Null, Object, Value, escape_str, from_python

if TYPE_CHECKING:
    from .types import Format


class Frontmatter:
    """Mapping of unique string keys to canonical values.

    Keys iterate in insertion order. Inserting an existing key overwrites its
    value in place, keeping the original position.

    Example:
        >>> fm = Frontmatter()
        >>> fm.insert("title", "My Post")
        >>> fm.get("title")
        String(value='My Post')
    """

    def __init__(self, entries: Mapping[str, Value] | None = None) -> None:
        self._entries: dict[str, Value] = {}
        if entries:
            for key, value in entries.items():
                self.insert(key, value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Frontmatter":
        """Build a container from plain Python data (see ``from_python``)."""
        fm = cls()
        for key, value in data.items():
            fm.insert(str(key), from_python(value))
        return fm

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain Python dictionary."""
        return {key: value.to_python() for key, value in self._entries.items()}

    # ------------------------------------------------------------------
    # Mapping operations
    # ------------------------------------------------------------------

    def get(self, key: str) -> Value | None:
        """Return the value for ``key``, or None if absent."""
        return self._entries.get(key)

    def get_mut(self, key: str) -> Value | None:
        """Return the stored value itself so callers can modify it in place.

        Arrays, objects and tagged values are mutable containers; scalars are
        replaced with ``insert``.
        """
        return self._entries.get(key)

    def insert(self, key: str, value: Value | Any) -> Value | None:
        """Insert a value, returning the one it replaced (if any).

        Plain Python values are converted with ``from_python``.
        """
        if not isinstance(key, str):
            raise TypeError(f"Front matter keys must be strings, got {type(key).__name__}")
        previous = self._entries.get(key)
        self._entries[key] = from_python(value)
        return previous

    def remove(self, key: str) -> Value | None:
        """Remove ``key`` and return its value, or None if absent."""
        return self._entries.pop(key, None)

    def contains_key(self, key: str) -> bool:
        return key in self._entries

    def is_empty(self) -> bool:
        return not self._entries

    def is_null(self, key: str) -> bool:
        """Whether ``key`` is present and holds Null."""
        return isinstance(self._entries.get(key), Null)

    def clear(self) -> None:
        self._entries.clear()

    def reserve(self, additional: int) -> None:
        """Capacity hint for ``additional`` more entries.

        The dict backing store grows on demand, so this only checks the request.
        """
        if additional < 0:
            raise ValueError(f"Cannot reserve a negative number of entries: {additional}")

    def merge(self, other: "Frontmatter") -> None:
        """Deep-merge ``other`` into this container.

        For each key in ``other``: absent keys are inserted; when both sides
        hold an Object the two objects are merged recursively; otherwise the
        value from ``other`` wins. Values taken from ``other`` are copied, so
        the two containers never share nodes.
        """
        for key, incoming in other._entries.items():
            existing = self._entries.get(key)
            if isinstance(existing, Object) and isinstance(incoming, Object):
                existing.frontmatter.merge(incoming.frontmatter)
            else:
                self._entries[key] = copy.deepcopy(incoming)

    def items(self) -> Iterator[tuple[str, Value]]:
        return iter(self._entries.items())

    def keys(self) -> Iterator[str]:
        return iter(self._entries.keys())

    def values(self) -> Iterator[Value]:
        return iter(self._entries.values())

    def copy(self) -> "Frontmatter":
        """Return a deep copy."""
        return copy.deepcopy(self)

    def to_format(self, format: "Format") -> str:
        """Serialise to text in ``format`` (see ``fmgen.to_format``)."""
        from ..parser import to_format

        return to_format(self, format)

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __getitem__(self, key: str) -> Value:
        return self._entries[key]

    def __setitem__(self, key: str, value: Value | Any) -> None:
        self.insert(key, value)

    def __delitem__(self, key: str) -> None:
        del self._entries[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frontmatter):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Frontmatter({self._entries!r})"

    def __str__(self) -> str:
        """JSON-like rendering with keys sorted for stable output."""
        body = ", ".join(
            f'"{escape_str(key)}": {self._entries[key]}' for key in sorted(self._entries)
        )
        return "{" + body + "}"
