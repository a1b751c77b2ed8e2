#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Environment variables as a configuration source."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Mapping, Optional

from argconfig.sources.base import Source
from argconfig.value import Value

logger = logging.getLogger(__name__)

ORIGIN = "environment"


class EnvironmentSource(Source):
    """Configuration source reading prefixed environment variables.

    ``MYAPP_OUTPUT_DIR=/tmp`` with prefix ``"MYAPP"`` yields the key
    ``output_dir``. With the default separator ``"__"``,
    ``MYAPP_PDF__PAGES`` yields the nested key ``pdf.pages``.

    Values stay strings; reading them as booleans or numbers is left to the
    ``Config`` accessors. Keys listed in ``list_keys`` are split on
    ``list_separator`` into arrays of strings.

    Parameters
    ----------
    prefix : str
        Variable prefix without the trailing underscore, e.g. ``"MYAPP"``
    separator : str, default "__"
        Separator for nesting levels in variable names
    list_separator : str, optional
        Separator used to split list values, e.g. ``","``
    list_keys : Iterable[str], optional
        Keys (after lower-casing and nesting) whose values are split.
        When ``list_separator`` is set and this is omitted, every value
        containing the separator is split.
    environ : Mapping[str, str], optional
        Environment to read; defaults to ``os.environ``

    """

    def __init__(
        self,
        prefix: str,
        separator: str = "__",
        list_separator: Optional[str] = None,
        list_keys: Optional[Iterable[str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.prefix = prefix.rstrip("_")
        self.separator = separator
        self.list_separator = list_separator
        self.list_keys = frozenset(list_keys) if list_keys is not None else None
        self.environ = environ

    def _key_for(self, name: str) -> Optional[str]:
        head = f"{self.prefix.upper()}_"
        if not name.upper().startswith(head):
            return None
        rest = name[len(head) :]
        if not rest:
            return None
        parts = [part.lower() for part in rest.split(self.separator)] if self.separator else [rest.lower()]
        if any(not part for part in parts):
            logger.debug("Ignoring environment variable %s with an empty key segment", name)
            return None
        return ".".join(parts)

    def _splits(self, key: str, raw: str) -> bool:
        if not self.list_separator:
            return False
        if self.list_keys is not None:
            return key in self.list_keys
        return self.list_separator in raw

    def collect(self) -> dict[str, Value]:
        environ = os.environ if self.environ is None else self.environ
        values: dict[str, Value] = {}
        for name, raw in environ.items():
            key = self._key_for(name)
            if key is None:
                continue
            if self._splits(key, raw):
                items = [item.strip() for item in raw.split(self.list_separator)]
                values[key] = Value.array([item for item in items if item], ORIGIN)
            else:
                values[key] = Value.string(raw, ORIGIN)
        logger.debug("Collected %d value(s) from %s_* environment variables", len(values), self.prefix.upper())
        return values

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(prefix={self.prefix!r}, separator={self.separator!r})"
