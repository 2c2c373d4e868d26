"""Parse, serialise and validate frontmatter.

These are the operations re-exported from the package root. Parsing and
serialising dispatch to the adapter registered for the requested format.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from loguru import logger

from .core.config import ParseOptions
from .core.exceptions import (
    ContentTooLargeError,
    FieldTypeError,
    MissingFieldError,
    NestingTooDeepError,
    TooManyKeysError,
    ValidationError,
)
from .core.frontmatter import Frontmatter
from .core.types import Format, Object, Value, ValueKind
from .formats.json_format import JsonFormat
from .formats.limits import iter_containers
from .formats.registry import get_default_registry


def _coerce_format(format: Format | str) -> Format:
    return format if isinstance(format, Format) else Format.from_name(format)


def _coerce_kind(field: str, expected: ValueKind | str) -> ValueKind:
    if isinstance(expected, ValueKind):
        return expected
    try:
        return ValueKind(expected.lower())
    except ValueError:
        raise ValidationError(f"Unknown value kind '{expected}' for field '{field}'") from None


def parse(raw: str, format: Format | str) -> Frontmatter:
    """Parse raw frontmatter text with the default limits."""
    return parse_with_options(raw, format, ParseOptions())


def parse_with_options(raw: str, format: Format | str, options: ParseOptions) -> Frontmatter:
    """Parse raw frontmatter text into a Frontmatter container.

    Args:
        raw: Frontmatter text without delimiters.
        format: Format of ``raw``, as a Format or a name such as ``"yml"``.
        options: Limits to enforce.

    Returns:
        The parsed container.

    Raises:
        ContentTooLargeError: If ``raw`` (or, with ``options.validate``, the
            parsed result) is larger than ``options.max_size`` bytes.
        NestingTooDeepError: If nesting exceeds ``options.max_depth``.
        TooManyKeysError: If an object exceeds ``options.max_keys``.
        SyntaxParseError: If the native grammar rejects ``raw``.
        UnsupportedFeatureError: If ``raw`` uses an unsupported feature.
        UnknownFormatError: If ``format`` names no supported format.
    """
    fmt = _coerce_format(format)
    size = len(raw.encode("utf-8"))
    if size > options.max_size:
        raise ContentTooLargeError(size, options.max_size)

    logger.debug(f"Parsing {size} bytes of {fmt} front matter")
    fm = get_default_registry().require(fmt).parse(raw, options)

    if options.validate:
        _check_size(fm, options)
    logger.debug(f"Parsed {len(fm)} top-level keys from {fmt}")
    return fm


def to_format(fm: Frontmatter, format: Format | str) -> str:
    """Serialise a container to text in the given format.

    Raises:
        UnsupportedValueError: If a value cannot be written in ``format``
            (Null in TOML, non-finite numbers in JSON, tagged collections in YAML).
        SerializationError: If the native serialiser fails.
    """
    fmt = _coerce_format(format)
    logger.debug(f"Serialising {len(fm)} top-level keys as {fmt}")
    return get_default_registry().require(fmt).serialize(fm)


def serialized_size(fm: Frontmatter) -> int:
    """Size in bytes of the compact JSON rendering used for size limits."""
    return JsonFormat().serialized_size(fm)


def _check_size(fm: Frontmatter, options: ParseOptions) -> None:
    size = serialized_size(fm)
    if size > options.max_size:
        raise ContentTooLargeError(size, options.max_size)


def _lookup(fm: Frontmatter, field: str) -> Value | None:
    """Find a field by literal key, then by dotted path through objects."""
    if field in fm:
        return fm[field]
    current: Value | None = None
    container: Frontmatter | None = fm
    for part in field.split("."):
        if container is None or part not in container:
            return None
        current = container[part]
        container = current.frontmatter if isinstance(current, Object) else None
    return current


def validate(
    fm: Frontmatter,
    options: ParseOptions | None = None,
    *,
    required: Iterable[str] = (),
    types: Mapping[str, ValueKind | str] | None = None,
) -> None:
    """Check a container against limits and field constraints.

    Limits are checked first (key counts, nesting depth, serialised size),
    then required fields, then field kinds. Fields may be literal keys or
    dotted paths into nested objects.

    Args:
        fm: Container to check.
        options: Limits to apply (defaults to ``ParseOptions()``).
        required: Fields that must be present.
        types: Expected kind per field, as ValueKind or its name
            (``"string"``, ``"number"``...). Absent fields are not checked.

    Raises:
        TooManyKeysError: An object has more than ``options.max_keys`` keys.
        NestingTooDeepError: Nesting exceeds ``options.max_depth``.
        ContentTooLargeError: The serialised size exceeds ``options.max_size``.
        MissingFieldError: A required field is absent.
        FieldTypeError: A field holds a value of another kind.
        ValidationError: A kind name in ``types`` is not a ValueKind.

    Example:
        validate(fm, required=["title"], types={"tags": ValueKind.ARRAY})
    """
    options = options or ParseOptions()

    deepest = 0
    deepest_path = ""
    for container, depth, path in iter_containers(fm):
        if isinstance(container, Frontmatter) and len(container) > options.max_keys:
            raise TooManyKeysError(len(container), options.max_keys, path)
        if depth > deepest:
            deepest, deepest_path = depth, path
    if deepest > options.max_depth:
        raise NestingTooDeepError(deepest, options.max_depth, deepest_path)

    _check_size(fm, options)

    for field in required:
        if _lookup(fm, field) is None:
            raise MissingFieldError(field)

    for field, expected in (types or {}).items():
        kind = _coerce_kind(field, expected)
        value = _lookup(fm, field)
        if value is not None and value.kind is not kind:
            raise FieldTypeError(field, kind.value, value.kind.value)
