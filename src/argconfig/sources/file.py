#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading.

This module loads configuration from JSON, TOML or YAML files (format chosen
by extension, with ``pyproject.toml`` read from its ``[tool.<app>]`` table)
and discovers an application's config file by walking up from the current
directory before falling back to the user's home directory.
"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from argconfig.exceptions import ConfigFileError
from argconfig.sources.base import Source
from argconfig.value import Value

logger = logging.getLogger(__name__)

CONFIG_EXTENSIONS = [".toml", ".yaml", ".yml", ".json"]


def _config_filenames(app_name: str) -> list[str]:
    return [f".{app_name}{ext}" for ext in CONFIG_EXTENSIONS]


def _load_pyproject_section(pyproject_path: Path, app_name: str) -> Dict[str, Any]:
    """Load the ``[tool.<app_name>]`` table from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file
    app_name : str
        Name of the table under ``[tool]``

    Returns
    -------
    dict
        The section, or an empty dict if the file has none

    Raises
    ------
    ConfigFileError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigFileError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(app_name, {})
    if not isinstance(config, dict):
        raise ConfigFileError(
            f"[tool.{app_name}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(f"Invalid TOML in config file {config_path}: {e}", str(config_path), e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigFileError(f"Invalid JSON in config file {config_path}: {e}", str(config_path), e) from e

    if not isinstance(config, dict):
        raise ConfigFileError(
            f"JSON config file must contain an object, got {type(config).__name__}", str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigFileError(f"Invalid YAML in config file {config_path}: {e}", str(config_path), e) from e

    # an empty YAML document is an empty config
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigFileError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", str(config_path)
        )
    return config


def load_config_file(config_path: Path | str, app_name: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file
    app_name : str, optional
        Table name under ``[tool]`` used when the file is pyproject.toml

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigFileError
        If the file does not exist, cannot be read, parsed, or has an
        unsupported format

    Examples
    --------
    >>> config = load_config_file(".myapp.toml")
    >>> config.get("verbose")
    True

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileError(f"Configuration file does not exist: {config_path}", str(config_path))

    if not config_path.is_file():
        raise ConfigFileError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            if not app_name:
                raise ConfigFileError("pyproject.toml requires an application name to select [tool.<name>]")
            return _load_pyproject_section(config_path, app_name)
        elif ext == ".toml":
            return _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            return _load_yaml_config(config_path)
        elif ext == ".json":
            return _load_json_config(config_path)
        else:
            raise ConfigFileError(
                f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
            )
    except ConfigFileError:
        raise
    except OSError as e:
        raise ConfigFileError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e


def find_config_in_parents(app_name: str, start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find an application's config file by searching parent directories.

    Walks up the directory tree from ``start_dir`` to the filesystem root,
    checking each directory in priority order for ``.<app>.toml``,
    ``.<app>.yaml``, ``.<app>.yml``, ``.<app>.json`` and finally a
    ``pyproject.toml`` that has a ``[tool.<app>]`` section.

    Parameters
    ----------
    app_name : str
        Application name used to build the file names
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in _config_filenames(app_name):
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path, app_name):
                    return pyproject_path
            except ConfigFileError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break

        current = parent

    return None


def discover_config_file(app_name: str) -> Optional[Path]:
    """Discover an application's configuration file in standard locations.

    Searches parent directories from the current working directory up to the
    filesystem root (see ``find_config_in_parents``), then the user home
    directory for ``.<app>.toml``, ``.<app>.yaml``, ``.<app>.yml`` and
    ``.<app>.json``.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(app_name)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in _config_filenames(app_name):
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


class FileSource(Source):
    """Configuration source backed by a single file.

    Parameters
    ----------
    path : Path or str
        File to load; its extension selects the format
    required : bool, default True
        When false, a missing file contributes nothing instead of failing
    app_name : str, optional
        Table name under ``[tool]`` when ``path`` is a pyproject.toml

    """

    def __init__(self, path: Path | str, required: bool = True, app_name: Optional[str] = None) -> None:
        self.path = Path(path)
        self.required = required
        self.app_name = app_name

    @classmethod
    def discover(cls, app_name: str) -> Optional["FileSource"]:
        """Return a source for the discovered config file of ``app_name``, if any."""
        path = discover_config_file(app_name)
        if path is None:
            logger.debug("No configuration file found for %s", app_name)
            return None
        return cls(path, app_name=app_name)

    def collect(self) -> dict[str, Value]:
        if not self.required and not self.path.exists():
            logger.debug("Optional configuration file %s not found", self.path)
            return {}

        data = load_config_file(self.path, app_name=self.app_name)
        logger.debug("Loaded %d top-level key(s) from %s", len(data), self.path)
        origin = str(self.path)
        return {str(key): Value.from_python(value, origin) for key, value in data.items()}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self.path)!r}, required={self.required})"
