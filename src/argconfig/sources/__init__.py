#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration sources: command-line arguments, files, environment and mappings."""

from argconfig.sources.base import Source
from argconfig.sources.cli import ORIGIN, ArgparseSource
from argconfig.sources.environment import EnvironmentSource
from argconfig.sources.file import FileSource, discover_config_file, find_config_in_parents, load_config_file
from argconfig.sources.mapping import MappingSource

__all__ = [
    "ORIGIN",
    "ArgparseSource",
    "EnvironmentSource",
    "FileSource",
    "MappingSource",
    "Source",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
]
