#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Typed configuration values.

Every configuration source contributes a flat mapping of key to ``Value``.
A ``Value`` is an immutable tagged union over the kinds in ``ValueKind``
that also remembers which source produced it (its *origin*), so that type
errors raised long after merging can still point back at the layer that
supplied the offending value.

Examples
--------
>>> v = Value.string("filename.txt", origin="argparse")
>>> v.kind
<ValueKind.STRING: 'string'>
>>> v.into_string()
'filename.txt'
>>> Value.array(["a", "b"]).to_python()
['a', 'b']

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from argconfig.exceptions import ConfigTypeError

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


class ValueKind(Enum):
    """Tag identifying the kind of data a ``Value`` holds."""

    NIL = "nil"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    TABLE = "table"
    ARRAY = "array"


@dataclass(frozen=True)
class Value:
    """Immutable, origin-tagged configuration value.

    Parameters
    ----------
    kind : ValueKind
        Tag of the payload
    payload : Any
        ``None`` for NIL, a Python scalar for BOOLEAN/INTEGER/FLOAT/STRING,
        a tuple of ``Value`` for ARRAY and a read-only mapping of
        ``str -> Value`` for TABLE
    origin : str, optional
        Short label of the source that produced the value

    Notes
    -----
    Build instances through the classmethod constructors rather than the
    dataclass initializer; they normalize containers to immutable types.

    """

    kind: ValueKind
    payload: Any = None
    origin: Optional[str] = None

    # -- constructors -----------------------------------------------------

    @classmethod
    def nil(cls, origin: Optional[str] = None) -> "Value":
        return cls(ValueKind.NIL, None, origin)

    @classmethod
    def boolean(cls, value: bool, origin: Optional[str] = None) -> "Value":
        return cls(ValueKind.BOOLEAN, bool(value), origin)

    @classmethod
    def integer(cls, value: int, origin: Optional[str] = None) -> "Value":
        return cls(ValueKind.INTEGER, int(value), origin)

    @classmethod
    def floating(cls, value: float, origin: Optional[str] = None) -> "Value":
        return cls(ValueKind.FLOAT, float(value), origin)

    @classmethod
    def string(cls, value: str, origin: Optional[str] = None) -> "Value":
        return cls(ValueKind.STRING, str(value), origin)

    @classmethod
    def array(cls, items: Iterable[Any], origin: Optional[str] = None) -> "Value":
        """Create an ARRAY value.

        Plain Python items are converted with ``from_python`` and inherit
        ``origin``; items that already are ``Value`` instances are kept as-is.
        """
        return cls(ValueKind.ARRAY, tuple(cls.from_python(item, origin) for item in items), origin)

    @classmethod
    def table(cls, entries: Mapping[str, Any], origin: Optional[str] = None) -> "Value":
        """Create a TABLE value from a mapping of string keys."""
        converted = {str(k): cls.from_python(v, origin) for k, v in entries.items()}
        return cls(ValueKind.TABLE, MappingProxyType(converted), origin)

    @classmethod
    def from_python(cls, obj: Any, origin: Optional[str] = None) -> "Value":
        """Convert plain Python data into a ``Value`` tree.

        Parameters
        ----------
        obj : Any
            Data as produced by a TOML, YAML or JSON loader, or a ``Value``
        origin : str, optional
            Origin label applied to every created node

        Returns
        -------
        Value
            The converted value. Existing ``Value`` instances are returned
            unchanged; unknown scalars (dates, paths) become strings.

        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.nil(origin)
        # bool must be checked before int
        if isinstance(obj, bool):
            return cls.boolean(obj, origin)
        if isinstance(obj, int):
            return cls.integer(obj, origin)
        if isinstance(obj, float):
            return cls.floating(obj, origin)
        if isinstance(obj, str):
            return cls.string(obj, origin)
        if isinstance(obj, Mapping):
            return cls.table(obj, origin)
        if isinstance(obj, (list, tuple)):
            return cls.array(obj, origin)
        return cls.string(str(obj), origin)

    # -- accessors --------------------------------------------------------

    def _type_error(self, expected: str, key: Optional[str]) -> ConfigTypeError:
        return ConfigTypeError(key, self.origin, (self.kind, self.payload), expected)

    def into_bool(self, key: Optional[str] = None) -> bool:
        """Read the value as a boolean.

        Strings ``true/1/yes/on`` and ``false/0/no/off`` are accepted
        case-insensitively, numbers are true when non-zero.
        """
        if self.kind is ValueKind.BOOLEAN:
            return self.payload
        if self.kind in (ValueKind.INTEGER, ValueKind.FLOAT):
            return self.payload != 0
        if self.kind is ValueKind.STRING:
            lowered = self.payload.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise self._type_error("a boolean", key)

    def into_string(self, key: Optional[str] = None) -> str:
        """Read the value as a string. Scalars are rendered, containers fail."""
        if self.kind is ValueKind.STRING:
            return self.payload
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.payload else "false"
        if self.kind in (ValueKind.INTEGER, ValueKind.FLOAT):
            return str(self.payload)
        raise self._type_error("a string", key)

    def into_int(self, key: Optional[str] = None) -> int:
        if self.kind is ValueKind.INTEGER:
            return self.payload
        if self.kind is ValueKind.BOOLEAN:
            return int(self.payload)
        if self.kind is ValueKind.FLOAT and float(self.payload).is_integer():
            return int(self.payload)
        if self.kind is ValueKind.STRING:
            try:
                return int(self.payload.strip())
            except ValueError:
                pass
        raise self._type_error("an integer", key)

    def into_float(self, key: Optional[str] = None) -> float:
        if self.kind in (ValueKind.FLOAT, ValueKind.INTEGER):
            return float(self.payload)
        if self.kind is ValueKind.BOOLEAN:
            return 1.0 if self.payload else 0.0
        if self.kind is ValueKind.STRING:
            try:
                return float(self.payload.strip())
            except ValueError:
                pass
        raise self._type_error("a floating point number", key)

    def into_array(self, key: Optional[str] = None) -> list["Value"]:
        """Read the value as a list of ``Value``.

        Only ARRAY values qualify: a single string is never promoted to a
        one-element list here. Use a metadata hint at the source instead.
        """
        if self.kind is ValueKind.ARRAY:
            return list(self.payload)
        raise self._type_error("an array", key)

    def into_table(self, key: Optional[str] = None) -> dict[str, "Value"]:
        if self.kind is ValueKind.TABLE:
            return dict(self.payload)
        raise self._type_error("a map", key)

    def to_python(self) -> Any:
        """Convert back into plain Python data, dropping origin labels."""
        if self.kind is ValueKind.ARRAY:
            return [item.to_python() for item in self.payload]
        if self.kind is ValueKind.TABLE:
            return {k: v.to_python() for k, v in self.payload.items()}
        return self.payload

    def __str__(self) -> str:
        return str(self.to_python())
