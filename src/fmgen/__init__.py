"""fmgen: extract, parse, validate and convert document frontmatter.

Supports YAML (``---``), TOML (``+++``) and bare JSON (``{...}``) blocks.

Example:
    >>> import fmgen
    >>> fm, body = fmgen.extract("---\\ntitle: My Post\\n---\\nContent here")
    >>> print(fmgen.to_format(fm, "json"))
    {"title":"My Post"}
"""

from loguru import logger

from .core import (
    Array,
    Boolean,
    Config,
    ContentTooLargeError,
    ConversionError,
    ErrorCategory,
    ErrorContext,
    ExtractionError,
    FieldTypeError,
    Format,
    Frontmatter,
    FrontmatterError,
    LimitsConfig,
    MissingFieldError,
    NestingTooDeepError,
    NoFrontmatterError,
    Null,
    Number,
    Object,
    ParseError,
    ParseOptions,
    SerializationError,
    String,
    SyntaxParseError,
    Tagged,
    TooManyKeysError,
    UnknownFormatError,
    UnsupportedFeatureError,
    UnsupportedValueError,
    UnterminatedBlockError,
    ValidationError,
    Value,
    ValueKind,
    from_python,
    parse_scalar,
)
from .extraction import RawFrontmatter, detect_format, extract, split_frontmatter
from .parser import parse, parse_with_options, serialized_size, to_format, validate

__version__ = "0.1.0"

# Library code stays quiet unless the application opts in
logger.disable("fmgen")

__all__ = [
    # Operations
    "extract",
    "split_frontmatter",
    "detect_format",
    "parse",
    "parse_with_options",
    "to_format",
    "validate",
    "serialized_size",
    "RawFrontmatter",
    # Config
    "Config",
    "LimitsConfig",
    "ParseOptions",
    # Types
    "Format",
    "Frontmatter",
    "Value",
    "ValueKind",
    "Null",
    "Boolean",
    "Number",
    "String",
    "Array",
    "Object",
    "Tagged",
    "from_python",
    "parse_scalar",
    # Errors
    "FrontmatterError",
    "ErrorCategory",
    "ErrorContext",
    "ExtractionError",
    "NoFrontmatterError",
    "UnterminatedBlockError",
    "UnknownFormatError",
    "ParseError",
    "SyntaxParseError",
    "UnsupportedFeatureError",
    "NestingTooDeepError",
    "TooManyKeysError",
    "ContentTooLargeError",
    "ValidationError",
    "MissingFieldError",
    "FieldTypeError",
    "ConversionError",
    "UnsupportedValueError",
    "SerializationError",
]
