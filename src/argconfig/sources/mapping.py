#  Copyright (c) 2025 Tom Villani, Ph.D.
"""In-memory configuration source."""

from __future__ import annotations

from typing import Any, Mapping

from argconfig.sources.base import Source
from argconfig.value import Value


class MappingSource(Source):
    """Configuration source backed by a plain mapping.

    Useful for application defaults and for tests. Nested dictionaries become
    tables and dotted keys are nested by the builder.

    Parameters
    ----------
    data : Mapping[str, Any]
        Plain Python data or ``Value`` instances
    origin : str, default "mapping"
        Origin label attached to the converted values

    """

    def __init__(self, data: Mapping[str, Any], origin: str = "mapping") -> None:
        self.data = dict(data)
        self.origin = origin

    def collect(self) -> dict[str, Value]:
        return {str(key): Value.from_python(value, self.origin) for key, value in self.data.items()}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.data!r}, origin={self.origin!r})"
