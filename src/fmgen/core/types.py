"""Type definitions for fmgen.

The canonical value algebra is a closed union of seven dataclasses. Every
format parser produces it and every serialiser consumes it, so code that walks
a tree handles exactly these cases:

    Null | Boolean | Number | String | Array | Object | Tagged

Nodes are owned by their parent; the tree never shares or cycles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Union

if TYPE_CHECKING:
    from .frontmatter import Frontmatter


class Format(Enum):
    """Supported frontmatter formats."""

    YAML = "yaml"
    TOML = "toml"
    JSON = "json"

    @classmethod
    def from_name(cls, name: str) -> "Format":
        """Look up a format by user-supplied name (case-insensitive).

        Raises:
            UnknownFormatError: If the name is not a supported format.
        """
        from .exceptions import UnknownFormatError

        key = name.strip().lower()
        if key == "yml":
            key = "yaml"
        for member in cls:
            if member.value == key:
                return member
        raise UnknownFormatError(0, name)

    @property
    def delimiter(self) -> str:
        """Delimiter line that fences this format inside a document."""
        return _DELIMITERS[self]

    def __str__(self) -> str:
        return self.value


_DELIMITERS = {Format.YAML: "---", Format.TOML: "+++", Format.JSON: "{"}


class ValueKind(Enum):
    """Discriminant of the canonical value union."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    TAGGED = "tagged"


def escape_str(text: str) -> str:
    """Escape double quotes and backslashes for display."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


# Largest magnitude below which every integral float is an exact integer
MAX_SAFE_INTEGER = 2**53


def integral_value(number: float) -> int | None:
    """Return ``number`` as an int when it is integral and exactly representable."""
    if math.isfinite(number) and number.is_integer() and abs(number) <= MAX_SAFE_INTEGER:
        return int(number)
    return None


def format_number(number: float) -> str:
    """Render a number, dropping the fraction of integral values."""
    as_int = integral_value(number)
    return str(as_int) if as_int is not None else repr(number)


class _ValueOps:
    """Accessors shared by every member of the value union."""

    kind: ClassVar[ValueKind]

    def as_str(self) -> str | None:
        return self.value if isinstance(self, String) else None

    def as_float(self) -> float | None:
        return self.value if isinstance(self, Number) else None

    def as_bool(self) -> bool | None:
        return self.value if isinstance(self, Boolean) else None

    def as_array(self) -> list[Value] | None:
        return self.items if isinstance(self, Array) else None

    def as_object(self) -> Frontmatter | None:
        return self.frontmatter if isinstance(self, Object) else None

    def as_tagged(self) -> tuple[str, Value] | None:
        return (self.tag, self.value) if isinstance(self, Tagged) else None

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def is_boolean(self) -> bool:
        return self.kind is ValueKind.BOOLEAN

    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    def is_tagged(self) -> bool:
        return self.kind is ValueKind.TAGGED

    def to_str(self) -> str:
        """Return the string, raising TypeError for any other kind."""
        if not isinstance(self, String):
            raise TypeError("Value is not a string")
        return self.value

    def to_float(self) -> float:
        if not isinstance(self, Number):
            raise TypeError("Value is not a number")
        return self.value

    def to_bool(self) -> bool:
        if not isinstance(self, Boolean):
            raise TypeError("Value is not a boolean")
        return self.value

    def to_object(self) -> Frontmatter:
        if not isinstance(self, Object):
            raise TypeError("Value is not an object")
        return self.frontmatter

    def array_len(self) -> int | None:
        return len(self.items) if isinstance(self, Array) else None

    def to_python(self) -> Any:
        """Convert to plain Python data (dict/list/str/float/bool/None).

        Tagged values become ``{"tag": ..., "value": ...}`` dictionaries.
        """
        raise NotImplementedError


@dataclass
class Null(_ValueOps):
    """Explicit absence of a value."""

    kind: ClassVar[ValueKind] = ValueKind.NULL

    def to_python(self) -> None:
        return None

    def __str__(self) -> str:
        return "null"


@dataclass
class Boolean(_ValueOps):
    value: bool
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN

    def to_python(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class Number(_ValueOps):
    """A numeric value. Integers are stored as floats."""

    value: float
    kind: ClassVar[ValueKind] = ValueKind.NUMBER

    def __post_init__(self) -> None:
        if isinstance(self.value, bool):
            raise TypeError("Number cannot hold a bool; use Boolean")
        self.value = float(self.value)

    def to_python(self) -> float:
        return self.value

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass
class String(_ValueOps):
    value: str
    kind: ClassVar[ValueKind] = ValueKind.STRING

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return f'"{escape_str(self.value)}"'


@dataclass
class Array(_ValueOps):
    items: list[Value] = field(default_factory=list)
    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]

    def __str__(self) -> str:
        return "[" + ", ".join(str(item) for item in self.items) + "]"


@dataclass
class Object(_ValueOps):
    frontmatter: Frontmatter
    kind: ClassVar[ValueKind] = ValueKind.OBJECT

    def to_python(self) -> dict[str, Any]:
        return self.frontmatter.to_dict()

    def __str__(self) -> str:
        return str(self.frontmatter)


@dataclass
class Tagged(_ValueOps):
    """A scalar carrying an explicit type annotation from its source format."""

    tag: str
    value: Value
    kind: ClassVar[ValueKind] = ValueKind.TAGGED

    def __post_init__(self) -> None:
        self.value = from_python(self.value)

    def to_python(self) -> dict[str, Any]:
        return {"tag": self.tag, "value": self.value.to_python()}

    def __str__(self) -> str:
        return f'"{escape_str(self.tag)}": {self.value}'


Value = Union[Null, Boolean, Number, String, Array, Object, Tagged]

VALUE_TYPES: tuple[type, ...] = (Null, Boolean, Number, String, Array, Object, Tagged)


def from_python(obj: Any) -> Value:
    """Build a canonical value from plain Python data.

    Args:
        obj: None, bool, int, float, str, date/time, list/tuple, mapping,
            Frontmatter, or an existing canonical value.

    Returns:
        The equivalent canonical value.

    Raises:
        TypeError: If the object has no canonical equivalent.
    """
    from .frontmatter import Frontmatter

    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return Null()
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, (int, float)):
        return Number(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (datetime, date, time)):
        return String(obj.isoformat())
    if isinstance(obj, (list, tuple)):
        return Array([from_python(item) for item in obj])
    if isinstance(obj, Frontmatter):
        return Object(obj)
    if isinstance(obj, Mapping):
        return Object(Frontmatter.from_dict(obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a front matter value")


def parse_scalar(text: str) -> Value:
    """Interpret a bare string as the scalar it most looks like.

    ``null``/``true``/``false`` (any case) and anything ``float()`` accepts
    become Null/Boolean/Number; everything else is a String.
    """
    lowered = text.lower()
    if lowered == "null":
        return Null()
    if lowered == "true":
        return Boolean(True)
    if lowered == "false":
        return Boolean(False)
    try:
        return Number(float(text))
    except ValueError:
        return String(text)
