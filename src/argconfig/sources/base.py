#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration source interface."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod

from argconfig.value import Value


class Source(ABC):
    """A provider of configuration values for one layer of a ``Config``.

    ``collect`` returns a fresh flat mapping on every call. Keys may be dotted
    paths (``"pdf.pages"``); the builder nests them when layers are merged.
    A source either returns all of its values or raises: there is no partial
    result.
    """

    @abstractmethod
    def collect(self) -> dict[str, Value]:
        """Return every value this source contributes."""

    def clone(self) -> "Source":
        return copy.copy(self)
