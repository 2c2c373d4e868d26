"""Format adapters: native text <-> canonical Frontmatter."""

from .base import FormatAdapter, NativeWriter, TreeBuilder
from .json_format import JsonFormat
from .registry import FormatRegistry, get_default_registry
from .toml_format import TomlFormat
from .yaml_format import YamlFormat

__all__ = [
    "FormatAdapter",
    "FormatRegistry",
    "JsonFormat",
    "NativeWriter",
    "TomlFormat",
    "TreeBuilder",
    "YamlFormat",
    "get_default_registry",
]
