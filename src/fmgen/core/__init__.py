"""Core types, container, configuration and errors for fmgen."""

from .config import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_KEYS,
    DEFAULT_MAX_SIZE,
    Config,
    LimitsConfig,
    ParseOptions,
)
from .exceptions import (
    ContentTooLargeError,
    ConversionError,
    ErrorCategory,
    ErrorContext,
    ExtractionError,
    FieldTypeError,
    FrontmatterError,
    MissingFieldError,
    NestingTooDeepError,
    NoFrontmatterError,
    ParseError,
    SerializationError,
    SyntaxParseError,
    TooManyKeysError,
    UnknownFormatError,
    UnsupportedFeatureError,
    UnsupportedValueError,
    UnterminatedBlockError,
    ValidationError,
)
from .frontmatter import Frontmatter
from .types import (
    Array,
    Boolean,
    Format,
    Null,
    Number,
    Object,
    String,
    Tagged,
    Value,
    ValueKind,
    from_python,
    parse_scalar,
)

__all__ = [
    # Config
    "Config",
    "LimitsConfig",
    "ParseOptions",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_MAX_KEYS",
    "DEFAULT_MAX_SIZE",
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
]
