"""Building blocks shared by the format adapters.

Defines the adapter protocol plus the two tree walkers used by the TOML and
JSON adapters, whose native libraries decode to plain Python data:

- TreeBuilder: decoded Python data -> canonical values, enforcing limits.
- NativeWriter: canonical values -> Python data ready for the native encoder.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from ..core.config import ParseOptions
from ..core.exceptions import ParseError, UnsupportedFeatureError, UnsupportedValueError
from ..core.frontmatter import Frontmatter
from ..core.types import (
    MAX_SAFE_INTEGER,
    Array,
    Boolean,
    Format,
    Null,
    Number,
    Object,
    String,
    Tagged,
    Value,
    integral_value,
)
from .limits import LimitTracker, join_index, join_key, native_children

# Keys of the object shape used to write Tagged values to formats without tags
TAGGED_KEYS = frozenset({"tag", "value"})


@runtime_checkable
class FormatAdapter(Protocol):
    """Protocol for a frontmatter format.

    Example:
        class JsonFormat:
            format = Format.JSON

            def parse(self, raw: str, options: ParseOptions) -> Frontmatter:
                ...

            def serialize(self, frontmatter: Frontmatter) -> str:
                ...
    """

    format: Format
    """Format handled by this adapter."""

    def parse(self, raw: str, options: ParseOptions) -> Frontmatter:
        """Parse raw text into a Frontmatter container.

        Args:
            raw: Raw frontmatter text (without delimiters).
            options: Depth and key limits to enforce while converting.

        Returns:
            The parsed container.
        """
        ...

    def serialize(self, frontmatter: Frontmatter) -> str:
        """Serialise a container to text in this format."""
        ...


def number_from_int(value: int, path: str) -> Number:
    """Collapse an integer into a float Number.

    Raises:
        ParseError: If the integer is beyond the float range.
    """
    try:
        number = Number(float(value))
    except OverflowError as e:
        raise ParseError(f"Number at '{path}' is too large to represent: {value}") from e
    if abs(value) > MAX_SAFE_INTEGER:
        logger.warning(f"Integer at '{path}' exceeds float precision and was rounded: {value}")
    return number


class TreeBuilder:
    """Converts decoded Python data into canonical values.

    Args:
        format_name: Name used in error messages.
        options: Limits to enforce.
        revive_tagged: Read objects shaped ``{"tag": str, "value": ...}`` back
            as Tagged values.
    """

    def __init__(self, format_name: str, options: ParseOptions, *, revive_tagged: bool = True):
        self.format_name = format_name
        self.limits = LimitTracker(options)
        self.revive_tagged = revive_tagged

    def build_root(self, data: dict[str, Any]) -> Frontmatter:
        """Build the root container from a decoded top-level mapping."""
        return self._build_mapping(data, 0, "")

    def _build_mapping(self, data: dict[str, Any], depth: int, path: str) -> Frontmatter:
        fm = Frontmatter()
        for key, value in data.items():
            fm.insert(str(key), self._build(value, depth, join_key(path, str(key))))
        self.limits.check_keys(len(fm), path)
        return fm

    def _build(self, obj: Any, depth: int, path: str) -> Value:
        if isinstance(obj, dict):
            # The tagged shape is still an object in the source text and counts as a level
            self.limits.enter(obj, depth + 1, path, native_children)
            if self.revive_tagged and _is_tagged_shape(obj):
                return Tagged(obj["tag"], self._build(obj["value"], depth + 1, path))
            return Object(self._build_mapping(obj, depth + 1, path))
        if isinstance(obj, list):
            self.limits.enter(obj, depth + 1, path, native_children)
            return Array([self._build(item, depth + 1, join_index(path, i)) for i, item in enumerate(obj)])
        return self.build_scalar(obj, path)

    def build_scalar(self, obj: Any, path: str) -> Value:
        """Convert a decoded scalar."""
        if obj is None:
            return Null()
        if isinstance(obj, bool):
            return Boolean(obj)
        if isinstance(obj, int):
            return number_from_int(obj, path)
        if isinstance(obj, float):
            return Number(obj)
        if isinstance(obj, str):
            return String(obj)
        if isinstance(obj, (datetime, date, time)):
            return String(obj.isoformat())
        raise UnsupportedFeatureError(f"{self.format_name} value of type {type(obj).__name__} at '{path}'")


def _is_tagged_shape(obj: dict[str, Any]) -> bool:
    return obj.keys() == TAGGED_KEYS and isinstance(obj["tag"], str)


class NativeWriter:
    """Converts canonical values into Python data for a native encoder.

    Subclasses override the hooks for values their format treats specially.
    """

    format_name = "native"

    def write_root(self, fm: Frontmatter) -> dict[str, Any]:
        return {key: self.write(value, key) for key, value in fm.items()}

    def write(self, value: Value, path: str) -> Any:
        if isinstance(value, Object):
            return {
                key: self.write(child, join_key(path, key)) for key, child in value.frontmatter.items()
            }
        if isinstance(value, Array):
            return [self.write(item, join_index(path, i)) for i, item in enumerate(value.items)]
        if isinstance(value, String):
            return value.value
        if isinstance(value, Boolean):
            return value.value
        if isinstance(value, Number):
            return self.write_number(value.value, path)
        if isinstance(value, Null):
            return self.write_null(path)
        if isinstance(value, Tagged):
            return self.write_tagged(value, path)
        raise AssertionError(f"Unknown value type in front matter tree: {type(value).__name__}")

    def write_number(self, number: float, path: str) -> int | float:
        as_int = integral_value(number)
        return as_int if as_int is not None else number

    def write_null(self, path: str) -> Any:
        return None

    def write_tagged(self, value: Tagged, path: str) -> Any:
        return {"tag": value.tag, "value": self.write(value.value, path)}

    def reject(self, path: str, reason: str) -> UnsupportedValueError:
        return UnsupportedValueError(self.format_name, path, reason)
