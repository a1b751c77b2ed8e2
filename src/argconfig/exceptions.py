#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the argconfig library.

This module defines the exception classes raised while collecting values
from configuration sources and while reading values back out of a built
configuration.

Exception Hierarchy
-------------------
- ArgConfigError (base exception)

  - SourceError (a configuration source could not produce its values)
    - KeyNotFoundError (enumerated key cannot be retrieved)
    - MissingTypeInfoError (no declared type for a recognized key)
    - UnsupportedShapeError (metadata hint outside string/array)
    - MissingValueError (declared type present, raw value absent)
    - ConfigFileError (config file missing, unreadable or malformed)

  - ConfigTypeError (value cannot be read as the requested kind)

  - NotFoundError (key absent from a built configuration)

"""

from __future__ import annotations

from typing import Any


class ArgConfigError(Exception):
    """Base exception class for all argconfig-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    key : str, optional
        Configuration key the error is attributed to, if known
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    key : str or None
        The offending key
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, key: str | None = None, original_error: Exception | None = None):
        """Initialize the error with a message, key and optional original exception."""
        super().__init__(message)
        self.message = message
        self.key = key
        self.original_error = original_error


class SourceError(ArgConfigError):
    """Exception raised when a configuration source fails to collect.

    Any subclass of this error is fatal for the source that raised it: the
    source produces no values at all rather than a partial map.
    """


class KeyNotFoundError(SourceError):
    """Exception raised when an enumerated key cannot be retrieved from the store."""

    def __init__(self, key: str, original_error: Exception | None = None):
        """Initialize with the key the store failed to retrieve."""
        super().__init__(f"Error retrieving argument '{key}': not known to the argument store", key, original_error)


class MissingTypeInfoError(SourceError):
    """Exception raised when the store reports no declared type for a key."""

    def __init__(self, key: str):
        """Initialize with the key that has no type information."""
        super().__init__(f"No type information for argument '{key}'", key)


class UnsupportedShapeError(SourceError):
    """Exception raised when a metadata hint names a shape the resolver cannot apply.

    Parameters
    ----------
    key : str
        The argument key the hint was registered for
    shape : Any
        The unsupported shape tag

    """

    def __init__(self, key: str, shape: Any):
        """Initialize with the key and the unsupported shape."""
        shape_name = getattr(shape, "value", shape)
        super().__init__(
            f"Unsupported shape '{shape_name}' for argument '{key}': expected 'string' or 'array'",
            key,
        )
        self.shape = shape


class MissingValueError(SourceError):
    """Exception raised when a key has a declared type but no raw value."""

    def __init__(self, key: str, declared_type: Any):
        """Initialize with the key and the declared type that had no value."""
        type_name = getattr(declared_type, "value", declared_type)
        super().__init__(f"No {type_name} value available for argument '{key}'", key)
        self.declared_type = declared_type


class ConfigFileError(SourceError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the failure
    file_path : str, optional
        Path of the offending file
    original_error : Exception, optional
        The underlying parse or I/O error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize with the file path."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class ConfigTypeError(ArgConfigError):
    """Exception raised when a value cannot be read as the requested kind.

    Parameters
    ----------
    key : str or None
        Configuration key being read
    origin : str or None
        Origin label of the value (which source produced it)
    unexpected : tuple
        ``(kind, payload)`` describing the value actually found
    expected : str
        Human-readable description of the requested kind

    """

    def __init__(self, key: str | None, origin: str | None, unexpected: tuple[Any, Any], expected: str):
        """Initialize the type error with its origin and kinds."""
        kind, payload = unexpected
        kind_name = getattr(kind, "value", kind)
        location = f" for key '{key}'" if key else ""
        source = f" in {origin}" if origin else ""
        super().__init__(f"invalid type: {kind_name} {payload!r}, expected {expected}{location}{source}", key)
        self.origin = origin
        self.unexpected = unexpected
        self.expected = expected


class NotFoundError(ArgConfigError):
    """Exception raised when a key is absent from a built configuration."""

    def __init__(self, key: str):
        """Initialize with the missing key."""
        super().__init__(f"configuration property '{key}' not found", key)
