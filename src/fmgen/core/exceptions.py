"""Custom exceptions for fmgen."""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(Enum):
    """Broad grouping of errors, used by callers to pick a message or exit code."""

    PARSING = "parsing"
    VALIDATION = "validation"
    CONVERSION = "conversion"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class ErrorContext:
    """Location of a problem inside raw frontmatter text.

    Attributes:
        line: 1-based line number, if known.
        column: 1-based column number, if known.
        snippet: The offending source line, if known.
    """

    line: int | None = None
    column: int | None = None
    snippet: str | None = None

    def __str__(self) -> str:
        """Render as ``at LINE:COL near 'snippet'``."""
        text = f"at {self.line or 0}:{self.column or 0}"
        if self.snippet:
            text += f" near '{self.snippet}'"
        return text


class FrontmatterError(Exception):
    """Base exception for all fmgen errors."""

    category = ErrorCategory.PARSING


# =============================================================================
# Extraction
# =============================================================================


class ExtractionError(FrontmatterError):
    """Locating the frontmatter block in a document failed."""

    pass


class NoFrontmatterError(ExtractionError):
    """The document does not start with a recognised delimiter."""

    def __init__(self) -> None:
        super().__init__("No frontmatter found in the content")


class UnterminatedBlockError(ExtractionError):
    """An opening delimiter has no matching closing delimiter."""

    def __init__(self, delimiter: str, line: int):
        """Initialize exception with the delimiter and where it was opened.

        Args:
            delimiter: The opening delimiter (``---``, ``+++`` or ``{``).
            line: 1-based line number of the opening delimiter.
        """
        self.delimiter = delimiter
        self.line = line
        super().__init__(
            f"Frontmatter block opened with '{delimiter}' at line {line} is never closed"
        )


class UnknownFormatError(ExtractionError):
    """The frontmatter format could not be determined."""

    def __init__(self, line: int, text: str = ""):
        """Initialize exception with the offending line.

        Args:
            line: 1-based line number that could not be classified, or 0 when
                the format was named directly (e.g. a CLI option).
            text: Content of that line.
        """
        self.line = line
        self.text = text
        message = "Unsupported front matter format"
        if line:
            message += f" detected at line {line}"
        if text:
            message += f": '{text}'"
        super().__init__(message)


# =============================================================================
# Parsing
# =============================================================================


class ParseError(FrontmatterError):
    """Raw frontmatter could not be turned into a Frontmatter container."""

    pass


class SyntaxParseError(ParseError):
    """The native grammar of a format rejected the input."""

    def __init__(self, format_name: str, message: str, context: ErrorContext | None = None):
        """Initialize exception with the native parser's diagnostics.

        Args:
            format_name: Name of the format being parsed.
            message: Message reported by the native parser.
            context: Line/column/snippet where the parser stopped.
        """
        self.format_name = format_name
        self.message = message
        self.context = context or ErrorContext()
        text = f"Failed to parse {format_name.upper()}: {message}"
        if context and context.line is not None:
            text += f" ({context})"
        super().__init__(text)


class UnsupportedFeatureError(ParseError):
    """The input uses a format feature with no canonical representation."""

    def __init__(self, feature: str, context: ErrorContext | None = None):
        """Initialize exception with the feature name.

        Args:
            feature: Human-readable name of the feature (e.g. "alias").
            context: Where the feature was used.
        """
        self.feature = feature
        self.context = context or ErrorContext()
        text = f"Unsupported feature in front matter: {feature}"
        if context and context.line is not None:
            text += f" ({context})"
        super().__init__(text)


# =============================================================================
# Validation
# =============================================================================


class ValidationError(FrontmatterError):
    """A Frontmatter container violates a structural or field constraint."""

    category = ErrorCategory.VALIDATION


class MissingFieldError(ValidationError):
    """A required field is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class FieldTypeError(ValidationError):
    """A field holds a value of the wrong kind."""

    def __init__(self, field: str, expected: str, actual: str):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"Field '{field}' must be {expected}, got {actual}")


# =============================================================================
# Limits (raised while parsing and by validate())
# =============================================================================


class NestingTooDeepError(ParseError, ValidationError):
    """Arrays/objects are nested deeper than allowed."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, depth: int, max_depth: int, path: str = ""):
        """Initialize exception with the depth reached.

        Args:
            depth: Depth actually reached by the input.
            max_depth: Configured maximum.
            path: Dotted path of the container that crossed the limit.
        """
        self.depth = depth
        self.max_depth = max_depth
        self.path = path
        message = (
            f"Your front matter is nested too deeply ({depth} levels). "
            f"The maximum allowed nesting depth is {max_depth}."
        )
        if path:
            message += f" (at '{path}')"
        super().__init__(message)


class TooManyKeysError(ParseError, ValidationError):
    """An object holds more keys than allowed."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, count: int, max_keys: int, path: str = ""):
        self.count = count
        self.max_keys = max_keys
        self.path = path
        where = f"'{path}'" if path else "the top level"
        super().__init__(
            f"Your front matter contains too many fields ({count}) at {where}. "
            f"The maximum allowed is {max_keys}."
        )


class ContentTooLargeError(ParseError, ValidationError):
    """Frontmatter is larger than the configured byte limit."""

    category = ErrorCategory.CONFIGURATION

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"Your front matter is too large ({size} bytes). "
            f"The maximum allowed size is {max_size} bytes."
        )


# =============================================================================
# Conversion
# =============================================================================


class ConversionError(FrontmatterError):
    """A Frontmatter container could not be serialised."""

    category = ErrorCategory.CONVERSION


class UnsupportedValueError(ConversionError):
    """A value has no representation in the target format."""

    def __init__(self, format_name: str, path: str, reason: str):
        """Initialize exception with the offending location.

        Args:
            format_name: Target format.
            path: Dotted path to the value.
            reason: Why the value cannot be written.
        """
        self.format_name = format_name
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write '{path}' as {format_name.upper()}: {reason}")


class SerializationError(ConversionError):
    """The native serialiser failed."""

    def __init__(self, format_name: str, message: str):
        self.format_name = format_name
        self.message = message
        super().__init__(f"Failed to convert front matter to {format_name.upper()}: {message}")
