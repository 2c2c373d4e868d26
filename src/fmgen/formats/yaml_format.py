"""YAML frontmatter adapter.

Parsing works on PyYAML's node graph rather than constructed Python objects,
which keeps explicit tags visible and lets anchors and aliases be refused
before they are resolved.

Mapping rules:
- Explicitly tagged scalars become Tagged with the shorthand tag (``!!int``,
  ``!color``). Core tags construct the inner value; other tags resolve it as if
  the scalar were untagged.
- Timestamps stay strings, preserving their source text.
- Non-string scalar keys use their source text.
- Anchors, aliases, merge keys, complex keys and tagged collections are
  unsupported.

Serialisation uses ``yaml.SafeDumper`` in block style with keys in insertion
order. Strings are written plain unless YAML 1.1 implicit resolution would
read them back as another type (null, bool, int, float, timestamp) or they
contain indicator characters; those are single-quoted, or double-quoted when
escapes are needed. Tagged string values are always single-quoted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable

import yaml
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from ..core.config import ParseOptions
from ..core.exceptions import (
    ErrorContext,
    ParseError,
    SerializationError,
    SyntaxParseError,
    UnsupportedFeatureError,
)
from ..core.frontmatter import Frontmatter
from ..core.types import (
    Array,
    Boolean,
    Format,
    Null,
    Number,
    Object,
    String,
    Tagged,
    Value,
    format_number,
    integral_value,
)
from .base import NativeWriter, number_from_int
from .json_format import line_at
from .limits import LimitTracker, join_index, join_key

CORE_PREFIX = "tag:yaml.org,2002:"
_SEQ_TAG = CORE_PREFIX + "seq"
_MAP_TAG = CORE_PREFIX + "map"
_MERGE_TAG = CORE_PREFIX + "merge"


def shorthand_tag(tag: str) -> str:
    """``tag:yaml.org,2002:int`` -> ``!!int``; other tags unchanged."""
    if tag.startswith(CORE_PREFIX):
        return "!!" + tag[len(CORE_PREFIX):]
    return tag


def full_tag(tag: str) -> str:
    """``!!int`` -> ``tag:yaml.org,2002:int``; other tags unchanged.

    The emitter writes a tag without a ``!`` prefix in verbatim form
    (``!<color>``), which reads back as the same tag.
    """
    if tag.startswith("!!"):
        return CORE_PREFIX + tag[2:]
    return tag


def _context(mark: Any, raw: str) -> ErrorContext:
    if mark is None:
        return ErrorContext()
    line = mark.line + 1
    return ErrorContext(line, mark.column + 1, line_at(raw, line))


def _node_children(node: Any) -> Iterable[Node] | None:
    if isinstance(node, MappingNode):
        return [value for _, value in node.value]
    if isinstance(node, SequenceNode):
        return node.value
    return None


class _FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that refuses anchors/aliases and records explicit scalar tags."""

    def __init__(self, stream: str) -> None:
        super().__init__(stream)
        self.raw = stream
        self.explicit_scalars: set[int] = set()

    def compose_node(self, parent: Node | None, index: Any) -> Node:
        event = self.peek_event()
        if isinstance(event, yaml.AliasEvent):
            raise UnsupportedFeatureError(
                f"alias '*{event.anchor}'", _context(event.start_mark, self.raw)
            )
        if event.anchor is not None:
            raise UnsupportedFeatureError(
                f"anchor '&{event.anchor}'", _context(event.start_mark, self.raw)
            )
        explicit = isinstance(event, yaml.ScalarEvent) and event.tag not in (None, "!")
        node = super().compose_node(parent, index)
        if explicit:
            self.explicit_scalars.add(id(node))
        return node


class _NodeConverter:
    """Converts a composed YAML node graph into canonical values."""

    def __init__(self, loader: _FrontmatterLoader, options: ParseOptions) -> None:
        self.loader = loader
        self.limits = LimitTracker(options)

    def convert_root(self, root: Node | None) -> Frontmatter:
        if root is None:
            return Frontmatter()
        if not isinstance(root, MappingNode):
            raise ParseError("YAML front matter is not a valid mapping")
        self._check_collection_tag(root, _MAP_TAG, "")
        return self._mapping(root, 0, "")

    def _mapping(self, node: MappingNode, depth: int, path: str) -> Frontmatter:
        fm = Frontmatter()
        for key_node, value_node in node.value:
            key = self._key(key_node)
            fm.insert(key, self._convert(value_node, depth, join_key(path, key)))
        self.limits.check_keys(len(fm), path)
        return fm

    def _key(self, node: Node) -> str:
        if not isinstance(node, ScalarNode):
            raise UnsupportedFeatureError(
                "complex mapping key", _context(node.start_mark, self.loader.raw)
            )
        if node.tag == _MERGE_TAG:
            raise UnsupportedFeatureError("merge key '<<'", _context(node.start_mark, self.loader.raw))
        return node.value

    def _convert(self, node: Node, depth: int, path: str) -> Value:
        if isinstance(node, MappingNode):
            self._check_collection_tag(node, _MAP_TAG, path)
            self.limits.enter(node, depth + 1, path, _node_children)
            return Object(self._mapping(node, depth + 1, path))
        if isinstance(node, SequenceNode):
            self._check_collection_tag(node, _SEQ_TAG, path)
            self.limits.enter(node, depth + 1, path, _node_children)
            return Array([
                self._convert(item, depth + 1, join_index(path, i))
                for i, item in enumerate(node.value)
            ])
        return self._scalar(node, path)

    def _check_collection_tag(self, node: Node, expected: str, path: str) -> None:
        if node.tag != expected:
            raise UnsupportedFeatureError(
                f"tag '{shorthand_tag(node.tag)}' on a collection at '{path or '<root>'}'",
                _context(node.start_mark, self.loader.raw),
            )

    def _scalar(self, node: ScalarNode, path: str) -> Value:
        if id(node) not in self.loader.explicit_scalars:
            return self._construct(node.tag, node, path)
        if node.tag == CORE_PREFIX + "binary":
            inner: Value = String("".join(node.value.split()))
        elif node.tag.startswith(CORE_PREFIX):
            inner = self._construct(node.tag, node, path)
        else:
            implicit = (node.style is None, node.style is not None)
            inner = self._construct(self.loader.resolve(ScalarNode, node.value, implicit), node, path)
        return Tagged(shorthand_tag(node.tag), inner)

    def _construct(self, tag: str, node: ScalarNode, path: str) -> Value:
        kind = tag[len(CORE_PREFIX):] if tag.startswith(CORE_PREFIX) else "str"
        try:
            if kind == "null":
                return Null()
            if kind == "bool":
                return Boolean(self.loader.construct_yaml_bool(node))
            if kind == "int":
                return number_from_int(self.loader.construct_yaml_int(node), path)
            if kind == "float":
                return Number(self.loader.construct_yaml_float(node))
        except (KeyError, ValueError) as e:
            raise SyntaxParseError(
                "yaml",
                f"invalid !!{kind} value '{node.value}'",
                _context(node.start_mark, self.loader.raw),
            ) from e
        # str, timestamp and anything else keep their source text
        return String(node.value)


class _YamlWriter(NativeWriter):
    format_name = "yaml"

    def write_tagged(self, value: Tagged, path: str) -> _TaggedScalar:
        inner = value.value
        if isinstance(inner, String):
            return _TaggedScalar(full_tag(value.tag), inner.value, "'")
        if isinstance(inner, Number):
            return _TaggedScalar(full_tag(value.tag), _yaml_number(inner.value), None)
        if isinstance(inner, Boolean):
            return _TaggedScalar(full_tag(value.tag), "true" if inner.value else "false", None)
        if isinstance(inner, Null):
            return _TaggedScalar(full_tag(value.tag), "null", None)
        raise self.reject(path, f"tag '{value.tag}' wraps a {inner.kind.value}; only scalars can be tagged")


@dataclass(frozen=True)
class _TaggedScalar:
    tag: str
    text: str
    style: str | None


def _yaml_number(number: float) -> str:
    """Render a number the way YAML 1.1 implicit resolution reads it back."""
    if math.isnan(number):
        return ".nan"
    if math.isinf(number):
        return ".inf" if number > 0 else "-.inf"
    if integral_value(number) is not None:
        return format_number(number)
    text = repr(number).lower()
    # YAML 1.1 floats need a dot before the exponent
    if "." not in text and "e" in text:
        text = text.replace("e", ".0e", 1)
    return text


class _TaggedNode(ScalarNode):
    """Scalar node whose tag is always written, even when it could be implied."""


class _TaggedScalarEvent(yaml.ScalarEvent):
    pass


class _FrontmatterDumper(yaml.SafeDumper):
    """SafeDumper that also knows how to write tagged scalars."""

    def serialize_node(self, node: Node, parent: Node | None, index: Any) -> None:
        if isinstance(node, _TaggedNode):
            self.emit(_TaggedScalarEvent(None, node.tag, (False, False), node.value, style=node.style))
            return
        super().serialize_node(node, parent, index)

    def choose_scalar_style(self) -> str:
        # Explicitly tagged numbers, booleans and nulls stay plain
        if isinstance(self.event, _TaggedScalarEvent) and not self.event.style:
            if self.analysis is None:
                self.analysis = self.analyze_scalar(self.event.value)
            if self.analysis.allow_block_plain and not self.analysis.empty:
                return ""
        return super().choose_scalar_style()


def _represent_tagged(dumper: yaml.SafeDumper, data: _TaggedScalar) -> ScalarNode:
    return _TaggedNode(data.tag, data.text, style=data.style)


_FrontmatterDumper.add_representer(_TaggedScalar, _represent_tagged)


class YamlFormat:
    """YAML adapter backed by PyYAML."""

    format = Format.YAML

    def parse(self, raw: str, options: ParseOptions) -> Frontmatter:
        """Parse a YAML mapping into a Frontmatter container.

        Raises:
            SyntaxParseError: Invalid YAML, with line/column/snippet.
            UnsupportedFeatureError: Anchors, aliases, merge keys, tagged collections.
            NestingTooDeepError: Nesting beyond ``options.max_depth``.
            TooManyKeysError: A mapping with more than ``options.max_keys`` keys.
            ParseError: The document is not a mapping.
        """
        loader = _FrontmatterLoader(raw)
        try:
            root = loader.get_single_node()
            return _NodeConverter(loader, options).convert_root(root)
        except yaml.MarkedYAMLError as e:
            message = " ".join(part for part in (e.context, e.problem) if part) or str(e)
            raise SyntaxParseError("yaml", message, _context(e.problem_mark, raw)) from e
        except yaml.YAMLError as e:
            raise SyntaxParseError("yaml", str(e)) from e
        except RecursionError as e:
            raise ParseError("YAML front matter is nested too deeply to decode") from e
        finally:
            loader.dispose()

    def serialize(self, frontmatter: Frontmatter) -> str:
        """Serialise as block-style YAML.

        Raises:
            UnsupportedValueError: For tagged arrays or objects.
            SerializationError: If PyYAML fails to emit the data.
        """
        native = _YamlWriter().write_root(frontmatter)
        try:
            return yaml.dump(
                native,
                Dumper=_FrontmatterDumper,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                width=float("inf"),
            )
        except yaml.YAMLError as e:
            raise SerializationError("yaml", str(e)) from e
