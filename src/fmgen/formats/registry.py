"""Format adapter registry.

Maps each Format to the adapter that parses and serialises it. The public
operations dispatch through the default registry, so an application can
replace an adapter (for example with a stricter YAML loader) by registering
its own with ``override=True``.
"""

from __future__ import annotations

from loguru import logger

from ..core.exceptions import UnknownFormatError
from ..core.types import Format
from .base import FormatAdapter


class FormatRegistry:
    """Registry of format adapters keyed by Format."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._adapters: dict[Format, FormatAdapter] = {}

    def register(self, adapter: FormatAdapter, *, override: bool = False) -> None:
        """Register an adapter for ``adapter.format``.

        Args:
            adapter: Adapter instance.
            override: Replace an adapter already registered for the format.

        Raises:
            ValueError: If the format is taken and ``override`` is False.
        """
        fmt = adapter.format
        if fmt in self._adapters and not override:
            raise ValueError(
                f"Format '{fmt}' is already registered. "
                f"Use override=True to replace."
            )
        self._adapters[fmt] = adapter
        logger.debug(f"Registered {type(adapter).__name__} for {fmt}")

    def unregister(self, fmt: Format) -> bool:
        """Remove the adapter for a format."""
        if fmt in self._adapters:
            del self._adapters[fmt]
            return True
        return False

    def get(self, fmt: Format) -> FormatAdapter | None:
        """Get the adapter for a format, or None."""
        return self._adapters.get(fmt)

    def require(self, fmt: Format) -> FormatAdapter:
        """Get the adapter for a format.

        Raises:
            UnknownFormatError: If no adapter is registered for it.
        """
        adapter = self._adapters.get(fmt)
        if adapter is None:
            raise UnknownFormatError(0, str(fmt))
        return adapter

    def list_formats(self) -> list[Format]:
        """Registered formats, in declaration order of Format."""
        return [fmt for fmt in Format if fmt in self._adapters]

    def is_registered(self, fmt: Format) -> bool:
        return fmt in self._adapters


# =============================================================================
# Default Registry
# =============================================================================

_default_registry: FormatRegistry | None = None


def get_default_registry() -> FormatRegistry:
    """Get the default global format registry."""
    global _default_registry
    if _default_registry is None:
        # Publish only once filled; concurrent first callers may each build one
        registry = FormatRegistry()
        _register_builtin_formats(registry)
        _default_registry = registry
    return _default_registry


def _register_builtin_formats(registry: FormatRegistry) -> None:
    """Register the YAML, TOML and JSON adapters."""
    from .json_format import JsonFormat
    from .toml_format import TomlFormat
    from .yaml_format import YamlFormat

    registry.register(YamlFormat())
    registry.register(TomlFormat())
    registry.register(JsonFormat())
