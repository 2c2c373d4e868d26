"""Configuration management for fmgen."""

import os
from dataclasses import dataclass, field

from .types import Format

# Global defaults
DEFAULT_MAX_DEPTH = 10
DEFAULT_MAX_KEYS = 1000
DEFAULT_MAX_SIZE = 1024 * 1024  # 1 MiB


@dataclass(frozen=True)
class ParseOptions:
    """Limits applied while parsing untrusted frontmatter.

    Attributes:
        max_depth: Maximum number of array/object boundaries from the root.
        max_keys: Maximum number of keys in any single object.
        validate: Also check the serialised size after parsing.
        max_size: Maximum size in bytes of raw input and of the serialised result.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_keys: int = DEFAULT_MAX_KEYS
    validate: bool = True
    max_size: int = DEFAULT_MAX_SIZE

    def __post_init__(self) -> None:
        for name in ("max_depth", "max_keys", "max_size"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


@dataclass
class LimitsConfig:
    """Parsing limits configuration."""

    max_depth: int = DEFAULT_MAX_DEPTH
    max_keys: int = DEFAULT_MAX_KEYS
    max_size: int = DEFAULT_MAX_SIZE
    validate: bool = True

    def to_parse_options(self) -> ParseOptions:
        return ParseOptions(
            max_depth=self.max_depth,
            max_keys=self.max_keys,
            validate=self.validate,
            max_size=self.max_size,
        )


@dataclass
class Config:
    """Main application configuration."""

    limits: LimitsConfig = field(default_factory=LimitsConfig)
    default_format: Format = Format.YAML  # Output format when none is requested
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        if value := os.environ.get("FMGEN_MAX_DEPTH"):
            config.limits.max_depth = int(value)
        if value := os.environ.get("FMGEN_MAX_KEYS"):
            config.limits.max_keys = int(value)
        if value := os.environ.get("FMGEN_MAX_SIZE"):
            config.limits.max_size = int(value)

        if value := os.environ.get("FMGEN_FORMAT"):
            config.default_format = Format.from_name(value)

        if value := os.environ.get("FMGEN_LOG_LEVEL"):
            config.log_level = value.upper()

        return config
