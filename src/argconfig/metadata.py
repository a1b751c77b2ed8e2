#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shape hints for command-line arguments.

A ``MetadataTable`` lets an integrator declare the intended shape of a
string-typed argument (a single string or an array of strings) when counting
occurrences would guess wrong, e.g. a repeatable ``--tag`` option that was
used exactly once but must still reach the application as a list.
"""

from __future__ import annotations

import argparse
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Union

from argconfig.store import DeclaredType, declared_type_of, is_multi_value_action, iter_value_actions
from argconfig.value import Value, ValueKind

ShapeHint = Union[ValueKind, Value]


def _shape_of(hint: ShapeHint) -> ValueKind:
    # only the tag matters: Value.array([]) and Value.array(["x"]) are the same hint
    if isinstance(hint, Value):
        return hint.kind
    if isinstance(hint, ValueKind):
        return hint
    raise TypeError(f"Shape hint must be a ValueKind or Value, got {type(hint).__name__}")


class MetadataTable:
    """Immutable mapping of argument key to shape hint.

    Parameters
    ----------
    entries : Mapping[str, ValueKind or Value], optional
        Hints keyed by argument destination. Hints given as ``Value`` are
        reduced to their kind.

    Examples
    --------
    >>> table = MetadataTable({"tag": ValueKind.ARRAY})
    >>> table.lookup("tag")
    <ValueKind.ARRAY: 'array'>
    >>> table.lookup("input") is None
    True

    """

    def __init__(self, entries: Optional[Mapping[str, ShapeHint]] = None) -> None:
        shapes = {str(key): _shape_of(hint) for key, hint in (entries or {}).items()}
        self._entries: Mapping[str, ValueKind] = MappingProxyType(shapes)

    @classmethod
    def from_parser(cls, parser: argparse.ArgumentParser) -> "MetadataTable":
        """Derive ARRAY hints from the structure of a parser's actions.

        Every string-typed action that can hold several values (``append``,
        ``extend``, or ``nargs`` of ``*``, ``+`` or more than one) is hinted
        as an array, so it resolves to a list even when used once.

        Parameters
        ----------
        parser : argparse.ArgumentParser
            Parser whose actions are inspected

        Returns
        -------
        MetadataTable
            Table with one ARRAY entry per multi-value string argument

        """
        entries: dict[str, ShapeHint] = {}
        for action in iter_value_actions(parser):
            if declared_type_of(action) is DeclaredType.STRING and is_multi_value_action(action):
                entries.setdefault(action.dest, ValueKind.ARRAY)
        return cls(entries)

    def lookup(self, key: str) -> Optional[ValueKind]:
        return self._entries.get(key)

    def merged(self, other: Union["MetadataTable", Mapping[str, ShapeHint]]) -> "MetadataTable":
        """Return a new table with ``other`` taking precedence over this one."""
        combined: dict[str, ShapeHint] = dict(self._entries)
        combined.update(other._entries if isinstance(other, MetadataTable) else other)
        return MetadataTable(combined)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataTable):
            return NotImplemented
        return dict(self._entries) == dict(other._entries)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v.value}" for k, v in self._entries.items())
        return f"{self.__class__.__name__}({items})"
