"""
Pipeline errors — every fatal condition of a generation run.

Core services raise these; the CLI catches ``GbindgenError``, logs it
and exits with status 1. Verify-mode drift is not an error.
"""

from __future__ import annotations


class GbindgenError(Exception):
    """Base class for all fatal pipeline errors."""


class LocationError(GbindgenError):
    """The package/workspace cannot be resolved, or its version is invalid."""


class ConfigError(GbindgenError):
    """gbindgen.toml is unreadable or violates the schema."""


class NamespaceMissingError(GbindgenError):
    """Version macros were requested without a namespace."""


class GenerationError(GbindgenError):
    """The external binding generator failed."""


class WriteError(GbindgenError):
    """The output destination could not be written."""
