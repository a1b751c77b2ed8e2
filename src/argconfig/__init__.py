"""argconfig - command-line arguments as a layered configuration source.

argconfig turns the result of ``argparse`` parsing into a flat map of typed,
origin-tagged values so that command-line flags merge on equal footing with
configuration files, environment variables and defaults.

The interesting part is deciding what each argument *is*. A repeatable option
given once looks exactly like a single-valued option, so by default a string
argument supplied once becomes a string and one supplied several times becomes
an array of strings. A ``MetadataTable`` overrides that per key when the
application knows better.

Key Features
------------
- Boolean flags, single strings and string arrays resolved from argparse actions
- Per-key shape hints, explicit or inferred from the parser
- Optional "provided only" collection so parser defaults do not mask files
- TOML, YAML, JSON and pyproject.toml file sources with discovery
- Prefixed environment-variable source with nesting
- Recursive layer merging with origin-aware type errors

Requirements
------------
- Python 3.10+
- PyYAML, and tomli on Python < 3.11

Examples
--------
    >>> import argparse
    >>> from argconfig import ArgparseSource, ConfigBuilder, ValueKind
    >>> parser = argparse.ArgumentParser(prog="myapp")
    >>> _ = parser.add_argument("-t", "--tag", action="append")
    >>> source = ArgparseSource.from_parser(parser, ["-t", "tagone"], metadata={"tag": ValueKind.ARRAY})
    >>> config = ConfigBuilder().add_source(source).build()
    >>> [v.into_string() for v in config.get_array("tag")]
    ['tagone']

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from argconfig.actions import (
    TrackingAppendAction,
    TrackingStoreAction,
    TrackingStoreFalseAction,
    TrackingStoreTrueAction,
    provided_args,
)
from argconfig.config import Config, ConfigBuilder
from argconfig.exceptions import (
    ArgConfigError,
    ConfigFileError,
    ConfigTypeError,
    KeyNotFoundError,
    MissingTypeInfoError,
    MissingValueError,
    NotFoundError,
    SourceError,
    UnsupportedShapeError,
)
from argconfig.metadata import MetadataTable
from argconfig.resolver import resolve
from argconfig.sources import (
    ORIGIN,
    ArgparseSource,
    EnvironmentSource,
    FileSource,
    MappingSource,
    Source,
)
from argconfig.store import ArgparseStore, ArgumentStore, DeclaredType
from argconfig.value import Value, ValueKind

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Values
    "Value",
    "ValueKind",
    # Argument core
    "ArgumentStore",
    "ArgparseStore",
    "DeclaredType",
    "MetadataTable",
    "resolve",
    "ORIGIN",
    # Sources
    "Source",
    "ArgparseSource",
    "EnvironmentSource",
    "FileSource",
    "MappingSource",
    # Layered configuration
    "Config",
    "ConfigBuilder",
    # argparse actions
    "TrackingAppendAction",
    "TrackingStoreAction",
    "TrackingStoreFalseAction",
    "TrackingStoreTrueAction",
    "provided_args",
    # Exceptions
    "ArgConfigError",
    "SourceError",
    "KeyNotFoundError",
    "MissingTypeInfoError",
    "UnsupportedShapeError",
    "MissingValueError",
    "ConfigFileError",
    "ConfigTypeError",
    "NotFoundError",
]
